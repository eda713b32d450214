from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SyncState(str, Enum):
    """
    Orchestration states of one open/toggle request.

        IDLE -> LOADED -> {EXTRACTED_EXISTING | CREATED_NEW} -> EMBEDDED -> IDLE

    A companion note that already exists skips the middle state.
    """

    IDLE = "idle"
    LOADED = "loaded"
    EXTRACTED_EXISTING = "extracted_existing"
    CREATED_NEW = "created_new"
    EMBEDDED = "embedded"


class NoteSource(str, Enum):
    COMPANION = "companion"
    EMBEDDED = "embedded"
    EMPTY = "empty"


class SyncSession(BaseModel):
    """
    Explicit companion-view context threaded through MarkdownSync.

    Values are immutable; transitions return a new session.
    """

    active_document: Optional[str] = None
    companion_open: bool = False

    model_config = ConfigDict(frozen=True)

    def opened(self, document_path: str) -> "SyncSession":
        return SyncSession(active_document=document_path, companion_open=True)

    def closed(self) -> "SyncSession":
        return SyncSession(
            active_document=self.active_document,
            companion_open=False,
        )


class OpenResult(BaseModel):
    document_path: str
    companion_path: str
    markdown: str
    source: NoteSource
    states: List[SyncState] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ToggleResult(BaseModel):
    session: SyncSession
    opened: Optional[OpenResult] = None

    model_config = ConfigDict(frozen=True)
