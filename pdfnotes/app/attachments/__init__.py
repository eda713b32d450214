from .document import open_document, serialize_document
from .locator import find_embedded_files_node
from .remover import remove_named_entries
from .reader import extract_attachments, find_attachment, read_attachments
from .writer import embed_attachment, write_attachment

__all__ = [
    "open_document",
    "serialize_document",
    "find_embedded_files_node",
    "remove_named_entries",
    "read_attachments",
    "extract_attachments",
    "find_attachment",
    "write_attachment",
    "embed_attachment",
]
