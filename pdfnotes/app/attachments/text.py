from __future__ import annotations

import pikepdf

from pdfnotes.app.errors import AttachmentStructureError


def decode_name(obj) -> str:
    """
    Decode a name-tree key (literal or hex string) to text.

    pikepdf handles PDFDocEncoding and UTF-16 (BOM-prefixed) strings.
    """
    if not isinstance(obj, pikepdf.String):
        raise AttachmentStructureError(
            f"Name-tree key is not a string object: {obj!r}"
        )
    return str(obj)
