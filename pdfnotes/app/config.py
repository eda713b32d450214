"""
Centralized configuration for the pdfnotes service.

Pydantic v2 settings management. Values are parsed once from the
environment (prefix ``PDFNOTES_``) and are immutable for the lifetime
of the process.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, StringConstraints, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# -------------------------------------------------------------------------
# Reusable Type Aliases
# -------------------------------------------------------------------------

NonEmptyStr = Annotated[
    str,
    StringConstraints(min_length=1, strip_whitespace=True),
]


# -------------------------------------------------------------------------
# Settings Model
# -------------------------------------------------------------------------

class Settings(BaseSettings):
    """
    Application settings parsed from the environment.

    Fails fast at startup if the reserved attachment identity or the
    companion naming rules are malformed.
    """

    # ---------------------------------------------------------------------
    # Vault
    # ---------------------------------------------------------------------

    vault_root: Annotated[
        Path,
        Field(
            default=Path("."),
            description="Directory holding the PDFs and their companion notes",
        ),
    ]

    # ---------------------------------------------------------------------
    # Reserved attachment
    # ---------------------------------------------------------------------

    attachment_name: Annotated[
        NonEmptyStr,
        Field(
            default="notes.md",
            description="Name-tree key of the synchronized attachment",
        ),
    ]

    attachment_mime_type: Annotated[
        NonEmptyStr,
        Field(default="text/markdown"),
    ]

    attachment_description: Annotated[
        str,
        Field(default="Embedded Markdown notes"),
    ]

    # ---------------------------------------------------------------------
    # Companion note naming
    # ---------------------------------------------------------------------

    document_extension: Annotated[
        str,
        Field(
            default=".pdf",
            description="Conventional container extension, matched case-insensitively",
        ),
    ]

    companion_suffix: Annotated[
        NonEmptyStr,
        Field(default="-notes.md"),
    ]

    extracted_suffix: Annotated[
        NonEmptyStr,
        Field(default="-Extracted.md"),
    ]

    # ---------------------------------------------------------------------
    # Operational Boundaries
    # ---------------------------------------------------------------------

    max_pdf_size_mb: Annotated[
        int,
        Field(
            default=25,
            ge=1,
            description="Upper bound on uploaded PDF size",
        ),
    ]

    log_level: Annotated[
        str,
        Field(default="INFO"),
    ]

    model_config = SettingsConfigDict(
        env_prefix="PDFNOTES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    # ---------------------------------------------------------------------
    # Validators (Pydantic v2)
    # ---------------------------------------------------------------------

    @field_validator("document_extension")
    @classmethod
    def extension_has_leading_dot(cls, v: str) -> str:
        if len(v) < 2 or not v.startswith("."):
            raise ValueError(
                f"document_extension must look like '.pdf', got '{v}'"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if level not in allowed:
            raise ValueError(
                f"Unsupported log_level '{v}'. "
                f"Allowed values: {sorted(allowed)}"
            )
        return level

    @property
    def max_pdf_size_bytes(self) -> int:
        return self.max_pdf_size_mb * 1024 * 1024


# -------------------------------------------------------------------------
# Settings Dependency Provider
# -------------------------------------------------------------------------

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Dependency injection provider for application settings.

    Uses an explicit singleton pattern within the FastAPI lifecycle.
    """
    return Settings()
