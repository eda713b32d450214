from .markdown import embed_markdown, extract_markdown
from .markdown_sync import MarkdownSync
from .notifier import LoggingNotifier, MemoryNotifier, Notifier
from .session import NoteSource, OpenResult, SyncSession, SyncState, ToggleResult

__all__ = [
    "embed_markdown",
    "extract_markdown",
    "MarkdownSync",
    "Notifier",
    "LoggingNotifier",
    "MemoryNotifier",
    "NoteSource",
    "OpenResult",
    "SyncSession",
    "SyncState",
    "ToggleResult",
]
