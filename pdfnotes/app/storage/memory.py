from __future__ import annotations

from typing import Dict

from pdfnotes.app.errors import EncodingError, NoteNotFoundError, StorageError
from pdfnotes.app.storage.base import VaultStorage


class MemoryVaultStorage(VaultStorage):
    """
    Dict-backed vault.

    Used by tests and by callers that already hold document bytes in
    memory. Writes are whole-value replacements and therefore atomic.
    """

    def __init__(self, files: Dict[str, bytes] | None = None) -> None:
        self._files: Dict[str, bytes] = dict(files or {})
        self.writes: list[str] = []

    async def read_bytes(self, path: str) -> bytes:
        try:
            return self._files[path]
        except KeyError:
            raise NoteNotFoundError(
                f"File not found in vault: {path}", path=path
            ) from None

    async def write_bytes(self, path: str, data: bytes) -> None:
        self._files[path] = bytes(data)
        self.writes.append(path)

    async def read_text(self, path: str) -> str:
        raw = await self.read_bytes(path)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EncodingError(
                f"File is not valid UTF-8: {path}: {exc}"
            ) from exc

    async def exists(self, path: str) -> bool:
        return path in self._files

    async def create_text_file(self, path: str, text: str) -> str:
        if path in self._files:
            raise StorageError(f"File already exists: {path}", path=path)
        self._files[path] = text.encode("utf-8")
        self.writes.append(path)
        return path
