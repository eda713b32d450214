from __future__ import annotations

from typing import Protocol


class VaultStorage(Protocol):
    """
    Interface for the file store holding documents and companion notes.

    Paths are vault-relative, forward-slash separated logical paths.

    Implementations must:
    - raise NoteNotFoundError for missing files on read
    - raise StorageError for any other read/write failure
    - raise EncodingError when a text file is not valid UTF-8
    - never leave a partially written file behind on failure
    """

    async def read_bytes(self, path: str) -> bytes:
        ...

    async def write_bytes(self, path: str, data: bytes) -> None:
        ...

    async def read_text(self, path: str) -> str:
        ...

    async def exists(self, path: str) -> bool:
        ...

    async def create_text_file(self, path: str, text: str) -> str:
        """Create a new text file and return its path. Fails if it exists."""
        ...
