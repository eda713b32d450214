"""
EmbeddedFiles name-tree lookup.

Known limitation, multi-kid name trees:
    When the EmbeddedFiles root carries no /Names array but does carry
    /Kids, only the first kid is inspected. Entries held by any further
    kid (or by grandchildren) are not reachable through this locator, and
    therefore neither through the reader nor the remover. Large trees
    written by other producers may be split this way.

Missing structure is a normal outcome here, not an error: every
missing link yields None.
"""

from __future__ import annotations

from typing import Optional

import pikepdf


def _dictionary(obj) -> Optional[pikepdf.Dictionary]:
    if isinstance(obj, pikepdf.Dictionary):
        return obj
    return None


def find_embedded_files_node(
    catalog: pikepdf.Dictionary,
) -> Optional[pikepdf.Dictionary]:
    """
    Return the name-tree node holding the flat /Names array for
    /Root/Names/EmbeddedFiles, or None if no usable node is reachable.
    """
    names = _dictionary(catalog.get("/Names"))
    if names is None:
        return None

    node = _dictionary(names.get("/EmbeddedFiles"))
    if node is None:
        return None

    if "/Names" not in node:
        kids = node.get("/Kids")
        if isinstance(kids, pikepdf.Array) and len(kids) > 0:
            first_kid = _dictionary(kids[0])
            if first_kid is not None:
                node = first_kid

    if "/Names" not in node:
        return None

    return node
