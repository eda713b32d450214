"""
Error taxonomy for note synchronization.

All errors propagate unchanged from the attachment and storage layers to
the orchestration layer, which surfaces a user-visible notification and
logs details. None of them are retried automatically.
"""


class NoteSyncError(RuntimeError):
    """Base class for every failure raised by pdfnotes."""


class DocumentLoadError(NoteSyncError):
    """Raised when input bytes do not parse as a PDF document."""


class AttachmentStructureError(NoteSyncError):
    """Raised when a name-tree entry is missing keys required for reading."""


class StorageError(NoteSyncError):
    """Raised when the underlying vault read or write fails."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class NoteNotFoundError(StorageError):
    """Raised when a requested vault file does not exist."""


class EncodingError(NoteSyncError):
    """Raised when bytes are not valid UTF-8 where text is expected."""
