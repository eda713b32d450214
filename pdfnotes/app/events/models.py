from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


# ----------------------------------------------------------------------
# Event Types
# ----------------------------------------------------------------------
class VaultEventType(str, Enum):
    """
    Storage notifications consumed by the synchronization layer.

    NOTE:
    Only modifications trigger work today. Closing the stream is
    signalled by the source itself, not by an event.
    """

    FILE_MODIFIED = "file_modified"


# ----------------------------------------------------------------------
# Event Model
# ----------------------------------------------------------------------
class VaultEvent(BaseModel):
    """
    An immutable observation that a vault file changed.

    ``path`` is the vault-relative logical path of the changed file.
    """

    event_id: UUID = Field(default_factory=uuid4)
    event_type: VaultEventType = VaultEventType.FILE_MODIFIED
    path: str = Field(..., min_length=1)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
