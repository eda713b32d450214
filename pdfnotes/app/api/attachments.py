"""
Stateless attachment endpoints.

Clients upload a PDF and receive either the embedded note or a rewritten
PDF. Nothing is stored server-side.

    POST /attachments/list      list every reachable attachment
    POST /attachments/extract   return the embedded notes.md as Markdown
    POST /attachments/embed     replace notes.md and return the new PDF
"""

import io
import logging
import re
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import PlainTextResponse, StreamingResponse

from pdfnotes.app.attachments import extract_attachments
from pdfnotes.app.config import Settings, get_settings
from pdfnotes.app.schemas.attachments import AttachmentListing, AttachmentSummary
from pdfnotes.app.sync import embed_markdown, extract_markdown

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Upload helpers
# ---------------------------------------------------------------------------


async def _read_upload(file: UploadFile, settings: Settings) -> bytes:
    pdf_bytes = await file.read()

    if len(pdf_bytes) > settings.max_pdf_size_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"PDF exceeds the {settings.max_pdf_size_mb} MB limit.",
        )

    return pdf_bytes


_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _content_disposition(filename: Optional[str]) -> str:
    """
    Build an inline Content-Disposition for a client-supplied filename.

    Headers are latin-1 on the wire, so the plain ``filename`` carries an
    ASCII fallback and ``filename*`` the RFC 5987 UTF-8 form.
    """
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1].strip()
    if not name:
        name = "document.pdf"

    fallback = _UNSAFE_FILENAME_CHARS.sub("_", name).strip("._") or "document"
    if not fallback.lower().endswith(".pdf"):
        fallback += ".pdf"

    encoded = quote(name, safe="")
    return f"inline; filename=\"{fallback}\"; filename*=UTF-8''{encoded}"


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post(
    "/list",
    summary="List embedded attachments",
    response_model=AttachmentListing,
)
async def list_attachments(
    file: UploadFile = File(...),
    settings: Settings = Depends(get_settings),
) -> AttachmentListing:
    pdf_bytes = await _read_upload(file, settings)
    attachments = extract_attachments(pdf_bytes)

    return AttachmentListing(
        attachments=[
            AttachmentSummary(name=a.name, size=a.size) for a in attachments
        ]
    )


@router.post(
    "/extract",
    summary="Extract the embedded Markdown note",
    response_class=PlainTextResponse,
)
async def extract_note(
    file: UploadFile = File(...),
    settings: Settings = Depends(get_settings),
) -> PlainTextResponse:
    pdf_bytes = await _read_upload(file, settings)
    markdown = extract_markdown(pdf_bytes, settings)

    if markdown is None:
        raise HTTPException(
            status_code=404,
            detail="No embedded Markdown found.",
        )

    return PlainTextResponse(markdown, media_type="text/markdown")


@router.post(
    "/embed",
    summary="Embed a Markdown note into a PDF",
)
async def embed_note(
    file: UploadFile = File(...),
    markdown: str = Form(""),
    settings: Settings = Depends(get_settings),
) -> StreamingResponse:
    """
    Returns application/pdf with the reserved attachment replaced by
    ``markdown``.
    """
    pdf_bytes = await _read_upload(file, settings)
    new_bytes = embed_markdown(pdf_bytes, markdown, settings)

    logger.info(
        "Embedded %d chars into uploaded document '%s'",
        len(markdown),
        file.filename,
    )

    return StreamingResponse(
        io.BytesIO(new_bytes),
        media_type="application/pdf",
        headers={
            "Content-Disposition": _content_disposition(file.filename),
        },
    )
