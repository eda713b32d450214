"""
Insertion and replacement of a named embedded attachment.

Write contract:
    1. Purge every existing pair carrying the target name (remover).
    2. Build an /EmbeddedFile stream and a /Filespec dictionary.
    3. Append (name, filespec) to the flat /Names array, creating the
       /Names -> /EmbeddedFiles -> /Names chain from the root down where
       links are missing.
    4. Keep the catalog /AF (PDF/A-3 associated files) array free of
       references to purged filespecs and register the new one.

Postcondition: exactly one reachable pair decodes to the target name.

No validation is performed on a malformed pre-existing name tree; the
writer proceeds and leaves unrelated structure as it found it.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

import pikepdf
from pikepdf import Array, Dictionary, Name, String

from pdfnotes.app.attachments.document import open_document, serialize_document
from pdfnotes.app.attachments.locator import find_embedded_files_node
from pdfnotes.app.attachments.remover import remove_named_entries
from pdfnotes.app.schemas.attachments import AttachmentMetadata

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _pdf_date(moment: datetime) -> str:
    """Format ``moment`` as a PDF date string (D:YYYYMMDDHHmmSSOHH'mm')."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)

    stamp = f"D:{moment.year:04d}{moment.strftime('%m%d%H%M%S')}"

    offset = moment.utcoffset()
    if not offset:
        return stamp + "Z"

    minutes = int(offset.total_seconds() // 60)
    sign = "+" if minutes >= 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return f"{stamp}{sign}{hours:02d}'{mins:02d}'"


def _build_filespec(
    pdf: pikepdf.Pdf,
    data: bytes,
    name: str,
    metadata: AttachmentMetadata,
) -> pikepdf.Dictionary:
    stream = pdf.make_indirect(pikepdf.Stream(pdf, data))
    stream.Type = Name.EmbeddedFile
    stream.Subtype = Name("/" + metadata.mime_type)
    stream.Params = Dictionary(
        Size=len(data),
        CreationDate=String(_pdf_date(metadata.created_at)),
        ModDate=String(_pdf_date(metadata.modified_at)),
    )

    return pdf.make_indirect(
        Dictionary(
            Type=Name("/Filespec"),
            F=String(name),
            UF=String(name),
            Desc=String(metadata.description),
            AFRelationship=Name("/Unspecified"),
            EF=Dictionary(F=stream),
        )
    )


def _ensure_embedded_files_node(pdf: pikepdf.Pdf) -> pikepdf.Dictionary:
    """
    Return the node the new pair is appended to.

    Reuses the node reachable through the locator; otherwise creates the
    missing links of /Names -> /EmbeddedFiles -> /Names, keeping any
    link that already exists.
    """
    node = find_embedded_files_node(pdf.Root)
    if node is not None:
        return node

    catalog = pdf.Root
    if not isinstance(catalog.get("/Names"), pikepdf.Dictionary):
        catalog[Name.Names] = Dictionary()

    names = catalog["/Names"]
    if not isinstance(names.get("/EmbeddedFiles"), pikepdf.Dictionary):
        names[Name.EmbeddedFiles] = Dictionary()

    tree = names["/EmbeddedFiles"]
    tree[Name.Names] = Array()
    return tree


def _sync_associated_files(
    pdf: pikepdf.Pdf,
    removed: List[pikepdf.Object],
    filespec: pikepdf.Dictionary,
) -> None:
    removed_ids = {
        obj.objgen for obj in removed if getattr(obj, "is_indirect", False)
    }

    af = pdf.Root.get("/AF")
    entries = list(af) if isinstance(af, pikepdf.Array) else []

    kept = [
        entry
        for entry in entries
        if not (
            getattr(entry, "is_indirect", False)
            and entry.objgen in removed_ids
        )
    ]
    kept.append(filespec)

    pdf.Root[Name.AF] = Array(kept)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def write_attachment(
    pdf: pikepdf.Pdf,
    data: bytes,
    name: str,
    metadata: AttachmentMetadata,
) -> pikepdf.Dictionary:
    """
    Replace (or create) the attachment ``name`` inside ``pdf`` in place.

    Returns the new Filespec dictionary.
    """
    removed = remove_named_entries(find_embedded_files_node(pdf.Root), name)

    filespec = _build_filespec(pdf, data, name, metadata)

    node = _ensure_embedded_files_node(pdf)
    existing = node.get("/Names")
    entries = list(existing) if isinstance(existing, pikepdf.Array) else []
    entries.extend((String(name), filespec))
    node[Name.Names] = Array(entries)

    _sync_associated_files(pdf, removed, filespec)

    logger.info(
        "Embedded attachment %r (%d bytes, replaced %d)",
        name,
        len(data),
        len(removed),
    )
    return filespec


def embed_attachment(
    pdf_bytes: bytes,
    data: bytes,
    name: str,
    metadata: AttachmentMetadata,
) -> bytes:
    """
    Load ``pdf_bytes``, write the attachment and re-serialize.

    Raises:
        DocumentLoadError:
            If ``pdf_bytes`` do not parse as a PDF document.
    """
    with open_document(pdf_bytes) as pdf:
        write_attachment(pdf, data, name, metadata)
        return serialize_document(pdf)
