from .base import VaultStorage
from .local import LocalVaultStorage
from .memory import MemoryVaultStorage

__all__ = [
    "VaultStorage",
    "LocalVaultStorage",
    "MemoryVaultStorage",
]
