from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class VaultPathRequest(BaseModel):
    """A vault-relative path supplied by the host."""

    path: str = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid")


class ExtractResponse(BaseModel):
    path: Optional[str] = None


class ModifiedResponse(BaseModel):
    updated: bool
