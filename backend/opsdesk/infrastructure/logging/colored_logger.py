"""Colored stage logger — ANSI-colored console traces for loads and multi-step writes.

Color scheme:
    🔵 Blue    — Primary load
    🔷 Cyan    — Relation resolution
    🟡 Yellow  — Writes
    🟣 Magenta — Compensating rollback
    🔴 Red     — Errors
    🟢 Green   — Completion
    ⚪ Gray    — Timing / Stats
"""

import logging
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


# ── Stage Definitions ────────────────────────────────────────────────

class Stage:
    """Predefined stages with colors and icons."""

    LOAD = ("LOAD", _Colors.BLUE, "📥")
    RELATIONS = ("RELATIONS", _Colors.CYAN, "🔗")
    WRITE = ("WRITE", _Colors.YELLOW, "✏️")
    ROLLBACK = ("ROLLBACK", _Colors.MAGENTA, "↩️")
    ERROR = ("ERROR", _Colors.RED, "❌")
    COMPLETE = ("COMPLETE", _Colors.GREEN, "✅")


# ── StageLogger ──────────────────────────────────────────────────────

class StageLogger:
    """Color-coded logger for entity store loads and service write pipelines.

    Usage:
        log = StageLogger("EntityStore")
        log.step_start(Stage.LOAD, "Loading tasks")
        log.detail("42 rows")
        log.step_complete(Stage.COMPLETE, "tasks ready")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)
        self._component = component_name

    @staticmethod
    def _details(kwargs: dict[str, Any], color: str) -> str:
        if not kwargs:
            return ""
        details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
        return f" {color}({details}){_Colors.RESET}"

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        self._logger.info(formatted + self._details(kwargs, _Colors.GRAY))

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        self._logger.info(formatted + self._details(kwargs, _Colors.GRAY))

    def step_warning(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log a degraded-but-continuing step in yellow."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.YELLOW}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.YELLOW}⚠ {message}{_Colors.RESET}"
        )
        self._logger.warning(formatted + self._details(kwargs, _Colors.DIM))

    def step_error(
        self, stage: tuple[str, str, str], message: str, error: Exception | None = None
    ) -> None:
        label, _, _ = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        self._logger.info(formatted + self._details(kwargs, _Colors.DIM))
