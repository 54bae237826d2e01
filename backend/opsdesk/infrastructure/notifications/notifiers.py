"""Notifier adapters — user-facing success/error messages."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from opsdesk.application.interfaces import Notifier

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """Writes notifications to the application log only."""

    def success(self, message: str) -> None:
        logger.info("✓ %s", message)

    def error(self, message: str) -> None:
        logger.warning("✗ %s", message)


@dataclass
class Notification:
    level: str
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class NotificationFeed(Notifier):
    """Collects notifications for one list view until the client drains them.

    Every message is also passed to ``echo`` (a :class:`LoggingNotifier` by
    default) so the server log shows what users were told.
    """

    def __init__(self, max_pending: int = 50, echo: Notifier | None = None):
        self._pending: list[Notification] = []
        self._max_pending = max_pending
        self._echo = echo or LoggingNotifier()

    def _push(self, level: str, message: str) -> None:
        self._pending.append(Notification(level, message))
        # Oldest messages are dropped once the client stops polling.
        del self._pending[: -self._max_pending]

    def success(self, message: str) -> None:
        self._echo.success(message)
        self._push("success", message)

    def error(self, message: str) -> None:
        self._echo.error(message)
        self._push("error", message)

    def pending(self) -> list[Notification]:
        return list(self._pending)

    def drain(self) -> list[Notification]:
        drained, self._pending = self._pending, []
        return drained
