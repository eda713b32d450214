"""
Companion note naming.

    Reports/paper.PDF  ->  Reports/paper-notes.md      (companion)
    Reports/paper.PDF  ->  paper-Extracted.md          (extracted copy)

The container extension is matched case-insensitively and only at the
end of the path.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from pdfnotes.app.config import Settings


def _extension_pattern(settings: Settings) -> re.Pattern[str]:
    return re.compile(re.escape(settings.document_extension) + r"$", re.IGNORECASE)


def is_document_path(path: str, settings: Settings) -> bool:
    return bool(_extension_pattern(settings).search(path))


def companion_note_path(document_path: str, settings: Settings) -> str:
    """
    Replace the container extension with the companion suffix.

    Raises ValueError if ``document_path`` does not carry the extension,
    since the result would otherwise alias the document itself.
    """
    pattern = _extension_pattern(settings)
    if not pattern.search(document_path):
        raise ValueError(
            f"Not a {settings.document_extension} document: {document_path}"
        )
    return pattern.sub(settings.companion_suffix, document_path)


def extracted_note_path(document_path: str, settings: Settings) -> str:
    """Vault-root path for a one-off extracted copy of the embedded note."""
    name = PurePosixPath(document_path).name
    basename = _extension_pattern(settings).sub("", name)
    return basename + settings.extracted_suffix
