"""
Markdown note codec for the reserved attachment.

Bridges note text and the attachment layer:
- text is encoded as UTF-8 on embed
- embedded bytes are decoded as UTF-8 on extract, best-effort
  (undecodable sequences are replaced, not rejected)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pdfnotes.app.attachments import embed_attachment, extract_attachments, find_attachment
from pdfnotes.app.config import Settings
from pdfnotes.app.errors import EncodingError
from pdfnotes.app.schemas.attachments import AttachmentMetadata


def note_metadata(settings: Settings, now: Optional[datetime] = None) -> AttachmentMetadata:
    moment = now or datetime.now(timezone.utc)
    return AttachmentMetadata(
        mime_type=settings.attachment_mime_type,
        description=settings.attachment_description,
        created_at=moment,
        modified_at=moment,
    )


def extract_markdown(pdf_bytes: bytes, settings: Settings) -> Optional[str]:
    """
    Return the embedded note text, or None if the document carries no
    attachment under the reserved name.
    """
    attachment = find_attachment(
        extract_attachments(pdf_bytes),
        settings.attachment_name,
    )
    if attachment is None:
        return None
    return attachment.data.decode("utf-8", errors="replace")


def embed_markdown(
    pdf_bytes: bytes,
    markdown: str,
    settings: Settings,
    now: Optional[datetime] = None,
) -> bytes:
    """Replace the reserved attachment with ``markdown`` and re-serialize."""
    try:
        payload = markdown.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodingError(f"Note text cannot be encoded as UTF-8: {exc}") from exc

    return embed_attachment(
        pdf_bytes,
        payload,
        settings.attachment_name,
        note_metadata(settings, now),
    )
