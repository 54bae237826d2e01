"""Notification sink interface (port) — fire-and-forget user messages."""

from abc import ABC, abstractmethod


class Notifier(ABC):
    """Port for success/error messages shown to the user.

    Callers never inspect a return value.
    """

    @abstractmethod
    def success(self, message: str) -> None:
        ...

    @abstractmethod
    def error(self, message: str) -> None:
        ...
