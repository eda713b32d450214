"""
PDF document boundary.

Loading raw bytes into a pikepdf object graph and serializing it back are
the only two places where pdfnotes crosses into the document library.
pikepdf models the container as an arena of indirect objects addressed by
(object, generation) numbers, so replacing an attachment never has to
reason about ownership of shared or cyclic references.

Error handling policy:
    Only pikepdf.PdfError is translated (into DocumentLoadError). Any other
    exception indicates a logic error and propagates unchanged.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from io import BytesIO
from typing import Iterator

import pikepdf

from pdfnotes.app.errors import DocumentLoadError

logger = logging.getLogger(__name__)


@contextmanager
def open_document(pdf_bytes: bytes) -> Iterator[pikepdf.Pdf]:
    """
    Parse ``pdf_bytes`` and yield the loaded document.

    Raises:
        DocumentLoadError:
            If the bytes do not parse as a PDF container.
    """
    if not pdf_bytes:
        raise DocumentLoadError("Document is empty; expected PDF bytes.")

    try:
        pdf = pikepdf.open(BytesIO(pdf_bytes))
    except pikepdf.PdfError as exc:
        logger.warning("pikepdf failed to parse document: %s", exc)
        raise DocumentLoadError(
            f"Bytes do not parse as a PDF document: {exc}"
        ) from exc

    with pdf:
        yield pdf


def serialize_document(pdf: pikepdf.Pdf) -> bytes:
    """Re-serialize the full document to bytes."""
    buffer = BytesIO()
    pdf.save(buffer)
    return buffer.getvalue()
