from .notifiers import LoggingNotifier, Notification, NotificationFeed

__all__ = [
    "LoggingNotifier",
    "Notification",
    "NotificationFeed",
]
