"""
In-memory VaultEventSource.

Feeds MarkdownSync.dispatch_events in tests and in embedding hosts. The
HTTP service does not use it; change notifications arrive per request.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator

from pdfnotes.app.events.models import VaultEvent


class MemoryVaultEventQueue:
    """
    In-memory async event queue.

    Properties:
    - single-consumer
    - deterministic ordering
    - events published after close() are dropped
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[VaultEvent | None] = asyncio.Queue()
        self._closed = False

    async def publish(self, event: VaultEvent) -> None:
        if self._closed:
            return
        await self._queue.put(event)

    async def close(self) -> None:
        if not self._closed:
            self._closed = True
            await self._queue.put(None)

    async def stream(self) -> AsyncIterator[VaultEvent]:
        """
        Async generator yielding published events in order.
        """
        while True:
            event = await self._queue.get()
            if event is None:
                break
            yield event
