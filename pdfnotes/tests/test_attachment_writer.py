"""
Tests for attachment insertion and replacement.

Coverage matrix:

  Append next to existing attachment            → order preserved, appended last
  Replace existing notes.md                     → exactly one pair, new payload
  N sequential embeds                           → exactly one pair, last payload
  Non-interference                              → other names, bytes, order unchanged
  No /Names in catalog                          → full chain created
  /Names without /EmbeddedFiles                 → sibling trees kept
  Kids tree                                     → first kid updated, others untouched
  Non-string key in tree                        → pair kept, write proceeds
  /AF associated files                          → stale filespec dropped, new one added
  Round-trip                                    → empty / short / multi-byte / multi-MB
  Non-PDF bytes                                 → DocumentLoadError
"""

from datetime import datetime, timedelta, timezone

import pytest

from pdfnotes.app.attachments.reader import extract_attachments
from pdfnotes.app.attachments.writer import _pdf_date, embed_attachment
from pdfnotes.app.errors import DocumentLoadError
from pdfnotes.app.schemas.attachments import AttachmentMetadata
from pdfnotes.tests.fixtures.pdf_factory import (
    minimal_valid_pdf,
    open_pdf,
    pdf_with_attachments,
    pdf_with_kids,
    pdf_with_names_but_no_embedded_files,
    pdf_with_non_string_key,
    tree_keys,
)

NOTES = "notes.md"
FIXED = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def _meta(**overrides) -> AttachmentMetadata:
    values = {
        "mime_type": "text/markdown",
        "description": "Embedded Markdown notes",
        "created_at": FIXED,
        "modified_at": FIXED,
    }
    values.update(overrides)
    return AttachmentMetadata(**values)


def _embed(pdf_bytes: bytes, text: str, name: str = NOTES) -> bytes:
    return embed_attachment(pdf_bytes, text.encode("utf-8"), name, _meta())


def _pairs(pdf_bytes: bytes):
    return [(a.name, a.data) for a in extract_attachments(pdf_bytes)]


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

def test_embed_appends_after_existing_attachment():
    pdf_bytes = pdf_with_attachments([("a.txt", b"spec1")])

    result = _embed(pdf_bytes, "hello")

    assert _pairs(result) == [("a.txt", b"spec1"), (NOTES, b"hello")]


def test_embed_replaces_existing_notes():
    pdf_bytes = pdf_with_attachments([(NOTES, b"old")])

    result = _embed(pdf_bytes, "new")

    assert _pairs(result) == [(NOTES, b"new")]


def test_repeated_embeds_keep_exactly_one_pair():
    pdf_bytes = minimal_valid_pdf()

    for i in range(5):
        pdf_bytes = _embed(pdf_bytes, f"revision {i}")

    pairs = _pairs(pdf_bytes)
    assert [name for name, _ in pairs].count(NOTES) == 1
    assert dict(pairs)[NOTES] == b"revision 4"


def test_embed_collapses_preexisting_duplicates():
    pdf_bytes = pdf_with_attachments([(NOTES, b"one"), ("a.txt", b"a"), (NOTES, b"two")])

    result = _embed(pdf_bytes, "three")

    assert _pairs(result) == [("a.txt", b"a"), (NOTES, b"three")]


def test_embed_does_not_disturb_other_attachments():
    others = [("a.txt", b"alpha"), ("b.csv", b"x,y\n1,2\n"), ("c.bin", bytes(range(256)))]
    pdf_bytes = pdf_with_attachments(
        [others[0], (NOTES, b"stale"), others[1], others[2]]
    )

    result = _embed(pdf_bytes, "fresh")

    pairs = _pairs(result)
    assert [p for p in pairs if p[0] != NOTES] == others
    assert pairs[-1] == (NOTES, b"fresh")


# ---------------------------------------------------------------------------
# Missing structure
# ---------------------------------------------------------------------------

def test_embed_creates_full_chain_when_names_missing():
    pdf_bytes = minimal_valid_pdf()
    assert extract_attachments(pdf_bytes) == []

    result = _embed(pdf_bytes, "created")

    assert _pairs(result) == [(NOTES, b"created")]
    with open_pdf(result) as pdf:
        assert tree_keys(pdf.Root.Names.EmbeddedFiles) == [NOTES]


def test_embed_keeps_sibling_name_trees():
    result = _embed(pdf_with_names_but_no_embedded_files(), "x")

    with open_pdf(result) as pdf:
        assert "/Dests" in pdf.Root.Names
        assert tree_keys(pdf.Root.Names.EmbeddedFiles) == [NOTES]


def test_embed_into_kids_tree_updates_first_kid_only():
    pdf_bytes = pdf_with_kids(
        [("a.txt", b"a"), (NOTES, b"old")],
        [("z.txt", b"z")],
    )

    result = _embed(pdf_bytes, "new")

    with open_pdf(result) as pdf:
        tree = pdf.Root.Names.EmbeddedFiles
        assert "/Names" not in tree
        assert tree_keys(tree.Kids[0]) == ["a.txt", NOTES]
        assert tree_keys(tree.Kids[1]) == ["z.txt"]

    assert _pairs(result) == [("a.txt", b"a"), (NOTES, b"new")]


def test_embed_proceeds_past_non_string_key():
    pdf_bytes = pdf_with_non_string_key([("a.txt", b"a"), (NOTES, b"old")])

    result = _embed(pdf_bytes, "new")

    with open_pdf(result) as pdf:
        tree = pdf.Root.Names.EmbeddedFiles
        assert tree_keys(tree) == ["/odd", "a.txt", NOTES]
        stream = tree.Names[5].EF.F
        assert stream.read_bytes() == b"new"


# ---------------------------------------------------------------------------
# Filespec metadata
# ---------------------------------------------------------------------------

def test_filespec_carries_metadata():
    result = embed_attachment(
        minimal_valid_pdf(),
        b"# title",
        NOTES,
        _meta(description="My notes"),
    )

    with open_pdf(result) as pdf:
        filespec = pdf.Root.Names.EmbeddedFiles.Names[1]
        stream = filespec.EF.F

        assert str(filespec.Type) == "/Filespec"
        assert str(filespec.F) == NOTES
        assert str(filespec.UF) == NOTES
        assert str(filespec.Desc) == "My notes"
        assert str(stream.Type) == "/EmbeddedFile"
        assert str(stream.Subtype) == "/text/markdown"
        assert int(stream.Params.Size) == len(b"# title")
        assert str(stream.Params.CreationDate) == "D:20250102030405Z"
        assert str(stream.Params.ModDate) == "D:20250102030405Z"


def test_associated_files_array_drops_replaced_filespec():
    pdf_bytes = pdf_with_attachments(
        [("a.txt", b"a"), (NOTES, b"old")],
        register_af=True,
    )

    result = _embed(_embed(pdf_bytes, "first"), "second")

    with open_pdf(result) as pdf:
        af = pdf.Root.AF
        names = pdf.Root.Names.EmbeddedFiles.Names
        current = {names[1].objgen, names[3].objgen}

        assert len(af) == 2
        assert {entry.objgen for entry in af} == current


def test_pdf_date_formats_offsets():
    plus = datetime(2024, 6, 30, 23, 59, 1, tzinfo=timezone(timedelta(hours=5, minutes=30)))
    minus = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone(timedelta(hours=-8)))
    naive = datetime(2024, 1, 1, 12, 0, 0)

    assert _pdf_date(plus) == "D:20240630235901+05'30'"
    assert _pdf_date(minus) == "D:20240101000000-08'00'"
    assert _pdf_date(naive) == "D:20240101120000Z"


# ---------------------------------------------------------------------------
# Round-trip
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "text",
    [
        "",
        "hello",
        "Ünïcødé · 日本語 · 🚀\n- [ ] task\n",
        ("# Large\n" + "línea de notas ✓ " * 200_000),
    ],
    ids=["empty", "short", "multibyte", "multi-megabyte"],
)
def test_round_trip(text):
    result = _embed(minimal_valid_pdf(), text)

    assert dict(_pairs(result))[NOTES].decode("utf-8") == text


def test_non_pdf_bytes_raise_document_load_error():
    with pytest.raises(DocumentLoadError):
        _embed(b"not a pdf", "x")
