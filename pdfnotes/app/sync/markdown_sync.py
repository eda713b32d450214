"""
Markdown note synchronization orchestrator.

Keeps a companion note (``<document>-notes.md``) and the reserved
``notes.md`` attachment of a PDF in step.

Execution model:
    Every triggering event performs a full read-modify-write cycle:
    read document bytes, load, mutate the object graph, re-serialize,
    write bytes. No document state is cached between events and no lock
    is held on the document; overlapping triggers are last-write-wins.

Error handling policy:
    NoteSyncError subclasses raised by the attachment and storage layers
    are surfaced to the user through the Notifier, logged with traceback,
    and re-raised unchanged. Nothing is retried. Because serialization
    happens only after the whole in-memory mutation succeeds, a failed
    event never writes a partial document.

Event loop:
    dispatch_events is library API for hosts that own a change feed.
    The HTTP service does not run it; it receives one change per request
    on /vault/events/modified and calls handle_file_modified directly.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from pdfnotes.app.config import Settings, get_settings
from pdfnotes.app.errors import NoteSyncError
from pdfnotes.app.events import VaultEventSource, VaultEventType
from pdfnotes.app.storage.base import VaultStorage
from pdfnotes.app.sync.markdown import embed_markdown, extract_markdown
from pdfnotes.app.sync.notifier import LoggingNotifier, Notifier
from pdfnotes.app.sync.paths import (
    companion_note_path,
    extracted_note_path,
    is_document_path,
)
from pdfnotes.app.sync.session import (
    NoteSource,
    OpenResult,
    SyncSession,
    SyncState,
    ToggleResult,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MarkdownSync:
    """
    Orchestrates extract-or-create and embed-on-change.

    The session is an explicit value: callers pass the current
    SyncSession in and keep the one returned.
    """

    def __init__(
        self,
        storage: VaultStorage,
        settings: Optional[Settings] = None,
        notifier: Optional[Notifier] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._storage = storage
        self._settings = settings if settings is not None else get_settings()
        self._notifier = notifier if notifier is not None else LoggingNotifier()
        self._clock = clock

    # ------------------------------------------------------------------
    # Core flows
    # ------------------------------------------------------------------

    async def open_companion(self, document_path: str) -> OpenResult:
        """
        Seed the companion note and (re)embed it into the document.

        The note text comes from, in order of preference:
            1. the existing companion note file
            2. the document's embedded ``notes.md`` attachment
            3. the empty string

        In cases 2 and 3 the companion file is created. The attachment is
        always rewritten afterwards, even when the text is unchanged, so
        its timestamps stay current.
        """
        companion_path = companion_note_path(document_path, self._settings)
        states = [SyncState.LOADED]

        pdf_bytes = await self._storage.read_bytes(document_path)

        if await self._storage.exists(companion_path):
            markdown = await self._storage.read_text(companion_path)
            source = NoteSource.COMPANION
        else:
            embedded = extract_markdown(pdf_bytes, self._settings)
            if embedded is not None:
                markdown = embedded
                source = NoteSource.EMBEDDED
                states.append(SyncState.EXTRACTED_EXISTING)
            else:
                markdown = ""
                source = NoteSource.EMPTY
                states.append(SyncState.CREATED_NEW)

            await self._storage.create_text_file(companion_path, markdown)

        new_bytes = embed_markdown(
            pdf_bytes, markdown, self._settings, now=self._clock()
        )
        await self._storage.write_bytes(document_path, new_bytes)
        states.extend((SyncState.EMBEDDED, SyncState.IDLE))

        logger.info(
            "Opened companion %s for %s (source=%s, %d chars)",
            companion_path,
            document_path,
            source.value,
            len(markdown),
        )

        return OpenResult(
            document_path=document_path,
            companion_path=companion_path,
            markdown=markdown,
            source=source,
            states=states,
        )

    async def sync_note_to_document(self, document_path: str) -> None:
        """Re-read the companion note and embed it into a fresh copy of the document."""
        companion_path = companion_note_path(document_path, self._settings)

        markdown = await self._storage.read_text(companion_path)
        pdf_bytes = await self._storage.read_bytes(document_path)

        new_bytes = embed_markdown(
            pdf_bytes, markdown, self._settings, now=self._clock()
        )
        await self._storage.write_bytes(document_path, new_bytes)

        logger.info(
            "Embedded %d chars from %s into %s",
            len(markdown),
            companion_path,
            document_path,
        )

    # ------------------------------------------------------------------
    # Event entry points
    # ------------------------------------------------------------------

    async def toggle(self, session: SyncSession, document_path: str) -> ToggleResult:
        """
        Open or close the companion view for ``document_path``.

        Closing performs no document I/O.
        """
        if not is_document_path(document_path, self._settings):
            self._notifier.notify("Please open a PDF file.")
            return ToggleResult(session=session)

        if session.companion_open:
            return ToggleResult(session=session.closed())

        try:
            result = await self.open_companion(document_path)
        except NoteSyncError as exc:
            self._notifier.notify(f"Error toggling Markdown view: {exc}")
            logger.exception("Toggle failed for document='%s'", document_path)
            raise

        return ToggleResult(session=session.opened(document_path), opened=result)

    async def handle_file_modified(self, session: SyncSession, path: str) -> bool:
        """
        React to a storage change notification.

        Returns True if ``path`` was the companion note of the session's
        active document and the document was rewritten.
        """
        document_path = session.active_document
        if document_path is None or not is_document_path(document_path, self._settings):
            return False

        if path != companion_note_path(document_path, self._settings):
            return False

        try:
            await self.sync_note_to_document(document_path)
        except NoteSyncError as exc:
            self._notifier.notify(f"Error updating PDF from Markdown: {exc}")
            logger.exception(
                "Re-embed failed for document='%s' note='%s'",
                document_path,
                path,
            )
            raise

        self._notifier.notify("PDF updated with latest Markdown changes.")
        return True

    async def extract_to_file(self, document_path: str) -> Optional[str]:
        """
        Write the embedded note to ``<basename>-Extracted.md``.

        Returns the created path, or None if the document carries no
        embedded note.
        """
        if not is_document_path(document_path, self._settings):
            self._notifier.notify("Please open a PDF file.")
            return None

        try:
            pdf_bytes = await self._storage.read_bytes(document_path)
            markdown = extract_markdown(pdf_bytes, self._settings)
            if not markdown:
                self._notifier.notify("No embedded Markdown found.")
                return None

            target = extracted_note_path(document_path, self._settings)
            created = await self._storage.create_text_file(target, markdown)
        except NoteSyncError as exc:
            self._notifier.notify(f"Error extracting Markdown: {exc}")
            logger.exception("Extraction failed for document='%s'", document_path)
            raise

        self._notifier.notify("Markdown extracted successfully!")
        return created

    async def dispatch_events(
        self,
        session_provider: Callable[[], SyncSession],
        source: VaultEventSource,
    ) -> int:
        """
        Feed FILE_MODIFIED events from ``source`` to handle_file_modified
        until the source closes.

        The session is re-read for every event. Failures of a single event
        have already been notified and logged; they do not stop the loop.
        Returns the number of events that rewrote a document.
        """
        handled = 0

        async for event in source.stream():
            if event.event_type is not VaultEventType.FILE_MODIFIED:
                continue
            try:
                if await self.handle_file_modified(session_provider(), event.path):
                    handled += 1
            except NoteSyncError:
                continue

        return handled
