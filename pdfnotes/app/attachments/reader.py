"""
Enumeration of embedded attachments.

Every pair reachable through find_embedded_files_node is decoded:

    name  -> text
    value -> Filespec dictionary -> /EF -> /F -> embedded-file stream

Stream filters (e.g. FlateDecode) are applied by pikepdf.

Error handling policy:
    Enumeration is all-or-nothing. A single malformed entry raises
    AttachmentStructureError and no partial list is returned. Callers
    that need to tolerate broken producers must catch it themselves.
"""

from __future__ import annotations

from typing import List, Optional

import pikepdf

from pdfnotes.app.attachments.document import open_document
from pdfnotes.app.attachments.locator import find_embedded_files_node
from pdfnotes.app.attachments.text import decode_name
from pdfnotes.app.errors import AttachmentStructureError
from pdfnotes.app.schemas.attachments import EmbeddedAttachment


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _embedded_stream(filespec, name: str) -> pikepdf.Stream:
    if not isinstance(filespec, pikepdf.Dictionary):
        raise AttachmentStructureError(
            f"Attachment '{name}' does not reference a Filespec dictionary."
        )

    ef = filespec.get("/EF")
    if not isinstance(ef, pikepdf.Dictionary):
        raise AttachmentStructureError(
            f"Attachment '{name}' Filespec has no /EF dictionary."
        )

    stream = ef.get("/F")
    if not isinstance(stream, pikepdf.Stream):
        raise AttachmentStructureError(
            f"Attachment '{name}' /EF dictionary has no /F stream."
        )

    return stream


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def read_attachments(pdf: pikepdf.Pdf) -> List[EmbeddedAttachment]:
    """
    Return every reachable attachment in name-tree order.

    Returns an empty list when the document has no EmbeddedFiles tree.
    """
    node = find_embedded_files_node(pdf.Root)
    if node is None:
        return []

    names = node.get("/Names")
    if not isinstance(names, pikepdf.Array):
        raise AttachmentStructureError(
            "EmbeddedFiles /Names entry is not an array."
        )

    if len(names) % 2:
        raise AttachmentStructureError(
            f"EmbeddedFiles /Names array has odd length {len(names)}; "
            "the last key has no value."
        )

    attachments: List[EmbeddedAttachment] = []

    for idx in range(0, len(names), 2):
        name = decode_name(names[idx])
        stream = _embedded_stream(names[idx + 1], name)
        attachments.append(
            EmbeddedAttachment(name=name, data=stream.read_bytes())
        )

    return attachments


def extract_attachments(pdf_bytes: bytes) -> List[EmbeddedAttachment]:
    """Load ``pdf_bytes`` and enumerate its attachments."""
    with open_document(pdf_bytes) as pdf:
        return read_attachments(pdf)


def find_attachment(
    attachments: List[EmbeddedAttachment],
    name: str,
) -> Optional[EmbeddedAttachment]:
    """Return the first attachment named exactly ``name``, if any."""
    for attachment in attachments:
        if attachment.name == name:
            return attachment
    return None
