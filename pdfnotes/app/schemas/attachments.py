from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Read side
# ---------------------------------------------------------------------------

class EmbeddedAttachment(BaseModel):
    """
    One (name, value) pair of the EmbeddedFiles name tree, decoded.

    ``data`` holds the plain bytes of the embedded-file stream after all
    stream filters have been applied.
    """

    name: str
    data: bytes

    model_config = ConfigDict(frozen=True)

    @property
    def size(self) -> int:
        return len(self.data)


class AttachmentSummary(BaseModel):
    """Presentation-only listing entry. Carries no payload."""

    name: str
    size: int

    model_config = ConfigDict(frozen=True)


class AttachmentListing(BaseModel):
    attachments: List[AttachmentSummary]

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Write side
# ---------------------------------------------------------------------------

class AttachmentMetadata(BaseModel):
    """
    Metadata bound into the Filespec and embedded-file stream on write.

    Timestamps default to the current UTC time so that every re-embed
    refreshes them.
    """

    mime_type: str = Field(..., min_length=1)
    description: str = ""
    created_at: datetime = Field(default_factory=_utcnow)
    modified_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(frozen=True, extra="forbid")
