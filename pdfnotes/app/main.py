"""
FastAPI entrypoint for the pdfnotes service.

Exposes the attachment operations over HTTP and lets a host application
drive companion-note synchronization against a local vault.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pdfnotes.app.api.attachments import router as attachments_router
from pdfnotes.app.api.vault import router as vault_router
from pdfnotes.app.config import get_settings
from pdfnotes.app.errors import (
    AttachmentStructureError,
    DocumentLoadError,
    EncodingError,
    NoteNotFoundError,
    NoteSyncError,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Application setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="pdfnotes",
    description="Keeps a Markdown note embedded in a PDF in sync with a companion file",
    version="0.1.0",
)

app.include_router(attachments_router, prefix="/attachments")
app.include_router(vault_router, prefix="/vault")


# ---------------------------------------------------------------------------
# Startup
# ---------------------------------------------------------------------------

@app.on_event("startup")
def startup_event() -> None:
    """
    Configuration is loaded once and treated as immutable for the
    lifetime of the process.
    """
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logger.info("config: vault root %s", settings.vault_root.resolve())


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------

def _status_for(exc: NoteSyncError) -> int:
    if isinstance(exc, NoteNotFoundError):
        return 404
    if isinstance(exc, (DocumentLoadError, AttachmentStructureError, EncodingError)):
        return 422
    return 500


@app.exception_handler(NoteSyncError)
async def note_sync_error_handler(request: Request, exc: NoteSyncError) -> JSONResponse:
    status_code = _status_for(exc)
    if status_code >= 500:
        logger.error("Request %s failed: %s", request.url.path, exc)

    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            "detail": str(exc),
        },
    )
