"""
FastAPI dependency providers.

The companion-view session is held here, at the HTTP edge, and threaded
explicitly into MarkdownSync on every request.
"""

from fastapi import Depends

from pdfnotes.app.config import Settings, get_settings
from pdfnotes.app.storage import LocalVaultStorage, VaultStorage
from pdfnotes.app.sync import LoggingNotifier, MarkdownSync, Notifier, SyncSession


class SessionStore:
    """Holds the session value returned by the most recent toggle."""

    def __init__(self) -> None:
        self.current = SyncSession()


_session_store = SessionStore()


def get_session_store() -> SessionStore:
    return _session_store


def get_storage(settings: Settings = Depends(get_settings)) -> VaultStorage:
    return LocalVaultStorage(settings.vault_root)


def get_notifier() -> Notifier:
    return LoggingNotifier()


def get_sync(
    settings: Settings = Depends(get_settings),
    storage: VaultStorage = Depends(get_storage),
    notifier: Notifier = Depends(get_notifier),
) -> MarkdownSync:
    return MarkdownSync(storage=storage, settings=settings, notifier=notifier)
