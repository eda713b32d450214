from __future__ import annotations

import logging
from typing import List, Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """
    Surface for short user-visible messages.

    Implementations must not raise: a failed notification must never
    abort a synchronization that already completed.
    """

    def notify(self, message: str) -> None:
        ...


class LoggingNotifier:
    """Default notifier for headless deployments."""

    def notify(self, message: str) -> None:
        logger.info("notice: %s", message)


class MemoryNotifier:
    """Records messages in order. Used by tests."""

    def __init__(self) -> None:
        self.messages: List[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)
