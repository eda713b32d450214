from .models import VaultEvent, VaultEventType
from .source import VaultEventSource
from .memory_source import MemoryVaultEventQueue

__all__ = [
    "VaultEvent",
    "VaultEventType",
    "VaultEventSource",
    "MemoryVaultEventQueue",
]
