"""
Removal of named entries from a flat EmbeddedFiles /Names array.

The array is walked in (name, value) pairs. A pair is dropped only when
its decoded name equals the target exactly (case-sensitive). Kept pairs
retain their relative order and values are never dereferenced or
modified. A trailing name without a value is dropped so the installed
array always has even length. Pairs whose key is not a string object
cannot match and are kept untouched.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import pikepdf

from pdfnotes.app.attachments.text import decode_name

logger = logging.getLogger(__name__)


def remove_named_entries(
    node: Optional[pikepdf.Dictionary],
    name: str,
) -> List[pikepdf.Object]:
    """
    Remove every (name, value) pair whose key decodes to ``name``.

    Returns the values of the removed pairs, in array order, so callers
    can purge other references to them. Repeating the call for an
    already-absent name is a no-op returning an empty list.
    """
    if node is None or "/Names" not in node:
        return []

    names = node.get("/Names")
    if not isinstance(names, pikepdf.Array):
        return []

    items = list(names)
    if len(items) % 2:
        logger.warning(
            "EmbeddedFiles /Names array has odd length %d; "
            "dropping trailing unpaired key",
            len(items),
        )

    kept: List[pikepdf.Object] = []
    removed: List[pikepdf.Object] = []

    for i in range(0, len(items) - 1, 2):
        key, value = items[i], items[i + 1]
        if not isinstance(key, pikepdf.String):
            logger.warning("Keeping name-tree pair with non-string key %r", key)
            kept.extend((key, value))
            continue
        if decode_name(key) == name:
            removed.append(value)
            continue
        kept.extend((key, value))

    node[pikepdf.Name.Names] = pikepdf.Array(kept)

    if removed:
        logger.debug("Removed %d entr(ies) named %r", len(removed), name)

    return removed
