"""
Tests for EmbeddedFiles name-tree lookup.

Coverage matrix:

  No /Names in catalog                          → None
  /Names without /EmbeddedFiles                 → None
  Flat tree                                     → node with /Names
  /Kids only                                    → first kid (first kid only)
  /Kids empty or first kid without /Names       → None
"""

import pikepdf
from pikepdf import Array, Dictionary

from pdfnotes.app.attachments.locator import find_embedded_files_node
from pdfnotes.tests.fixtures.pdf_factory import (
    minimal_valid_pdf,
    open_pdf,
    pdf_with_attachments,
    pdf_with_kids,
    pdf_with_names_but_no_embedded_files,
    tree_keys,
)


def test_missing_names_dictionary_yields_none():
    with open_pdf(minimal_valid_pdf()) as pdf:
        assert find_embedded_files_node(pdf.Root) is None


def test_missing_embedded_files_yields_none():
    with open_pdf(pdf_with_names_but_no_embedded_files()) as pdf:
        assert find_embedded_files_node(pdf.Root) is None


def test_flat_tree_returns_root_node():
    pdf_bytes = pdf_with_attachments([("a.txt", b"a"), ("notes.md", b"n")])

    with open_pdf(pdf_bytes) as pdf:
        node = find_embedded_files_node(pdf.Root)

        assert node is not None
        assert tree_keys(node) == ["a.txt", "notes.md"]


def test_kids_tree_descends_into_first_kid_only():
    pdf_bytes = pdf_with_kids(
        [("a.txt", b"a")],
        [("b.txt", b"b")],
    )

    with open_pdf(pdf_bytes) as pdf:
        node = find_embedded_files_node(pdf.Root)

        assert node is not None
        assert tree_keys(node) == ["a.txt"]


def test_empty_kids_yields_none():
    with pikepdf.new() as pdf:
        pdf.Root.Names = Dictionary(EmbeddedFiles=Dictionary(Kids=Array()))

        assert find_embedded_files_node(pdf.Root) is None


def test_first_kid_without_names_yields_none():
    with pikepdf.new() as pdf:
        empty_kid = pdf.make_indirect(Dictionary(Limits=Array(["a", "z"])))
        pdf.Root.Names = Dictionary(
            EmbeddedFiles=Dictionary(Kids=Array([empty_kid]))
        )

        assert find_embedded_files_node(pdf.Root) is None
