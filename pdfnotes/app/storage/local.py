"""
Local filesystem vault.

All paths are resolved against the vault root and must stay inside it.
Relative paths and symlinks are fully resolved so that the containment
check operates on a stable prefix.

Writes go to a temporary sibling which then replaces the target, so a
failed write leaves the previous bytes on disk untouched.
"""

from __future__ import annotations

import logging
from pathlib import Path
from uuid import uuid4

import anyio

from pdfnotes.app.errors import EncodingError, NoteNotFoundError, StorageError
from pdfnotes.app.storage.base import VaultStorage

logger = logging.getLogger(__name__)


class LocalVaultStorage(VaultStorage):
    def __init__(self, root: Path) -> None:
        self._root = Path(root).expanduser().resolve()

    # ------------------------------------------------------------------
    # Path handling
    # ------------------------------------------------------------------

    def resolve(self, path: str) -> Path:
        """
        Map a vault-relative path to an absolute path inside the root.

        Raises StorageError if the resolved path escapes the vault.
        """
        candidate = (self._root / path).resolve()
        try:
            candidate.relative_to(self._root)
        except ValueError:
            raise StorageError(
                f"Path escapes vault root: {path}", path=path
            ) from None
        return candidate

    # ------------------------------------------------------------------
    # VaultStorage
    # ------------------------------------------------------------------

    async def read_bytes(self, path: str) -> bytes:
        target = anyio.Path(self.resolve(path))
        try:
            return await target.read_bytes()
        except FileNotFoundError:
            raise NoteNotFoundError(
                f"File not found in vault: {path}", path=path
            ) from None
        except OSError as exc:
            raise StorageError(
                f"Failed to read {path}: {exc}", path=path
            ) from exc

    async def write_bytes(self, path: str, data: bytes) -> None:
        target = self.resolve(path)
        tmp = anyio.Path(target.with_name(f".{target.name}.{uuid4().hex}.tmp"))

        try:
            await anyio.Path(target.parent).mkdir(parents=True, exist_ok=True)
            await tmp.write_bytes(data)
            await tmp.replace(target)
        except OSError as exc:
            await tmp.unlink(missing_ok=True)
            raise StorageError(
                f"Failed to write {path}: {exc}", path=path
            ) from exc

        logger.debug("Wrote %d bytes to %s", len(data), target)

    async def read_text(self, path: str) -> str:
        raw = await self.read_bytes(path)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EncodingError(
                f"File is not valid UTF-8: {path}: {exc}"
            ) from exc

    async def exists(self, path: str) -> bool:
        return await anyio.Path(self.resolve(path)).exists()

    async def create_text_file(self, path: str, text: str) -> str:
        target = self.resolve(path)

        try:
            await anyio.Path(target.parent).mkdir(parents=True, exist_ok=True)
            async with await anyio.open_file(
                target, "x", encoding="utf-8"
            ) as handle:
                await handle.write(text)
        except FileExistsError:
            raise StorageError(
                f"File already exists: {path}", path=path
            ) from None
        except OSError as exc:
            raise StorageError(
                f"Failed to create {path}: {exc}", path=path
            ) from exc

        logger.info("Created note file %s", target)
        return path
