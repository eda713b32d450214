from datetime import datetime, timezone

from pdfnotes.app.config import Settings
from pdfnotes.app.sync.markdown import embed_markdown, extract_markdown, note_metadata
from pdfnotes.tests.fixtures.pdf_factory import minimal_valid_pdf, pdf_with_attachments

settings = Settings()


def test_extract_returns_none_without_notes():
    pdf_bytes = pdf_with_attachments([("a.txt", b"a")])

    assert extract_markdown(pdf_bytes, settings) is None


def test_extract_decodes_utf8():
    pdf_bytes = pdf_with_attachments([("notes.md", "ça va ✓".encode("utf-8"))])

    assert extract_markdown(pdf_bytes, settings) == "ça va ✓"


def test_extract_replaces_invalid_utf8():
    pdf_bytes = pdf_with_attachments([("notes.md", b"ok \xff\xfe end")])

    assert extract_markdown(pdf_bytes, settings) == "ok �� end"


def test_embed_then_extract():
    pdf_bytes = embed_markdown(minimal_valid_pdf(), "# Title\n", settings)

    assert extract_markdown(pdf_bytes, settings) == "# Title\n"


def test_custom_attachment_name():
    custom = Settings(attachment_name="annotations.md")
    pdf_bytes = embed_markdown(minimal_valid_pdf(), "x", custom)

    assert extract_markdown(pdf_bytes, custom) == "x"
    assert extract_markdown(pdf_bytes, settings) is None


def test_note_metadata_uses_settings_and_clock():
    now = datetime(2026, 3, 1, tzinfo=timezone.utc)

    meta = note_metadata(settings, now)

    assert meta.mime_type == "text/markdown"
    assert meta.description == settings.attachment_description
    assert meta.created_at == now
    assert meta.modified_at == now
