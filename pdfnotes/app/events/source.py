from __future__ import annotations

from typing import AsyncIterator, Protocol

from pdfnotes.app.events.models import VaultEvent


class VaultEventSource(Protocol):
    """
    Interface for receiving vault change notifications.

    Implementations yield events in delivery order and stop iterating
    once the source is closed.
    """

    def stream(self) -> AsyncIterator[VaultEvent]:
        ...
