"""
Tests for upload text extraction: text/markdown decode, PDF via PyPDF2, Word rejection.
"""
import io

import pytest
from PyPDF2 import PdfWriter

from quizgen.errors import DocumentReadError, UnsupportedDocumentError
from quizgen.services import text_extract
from quizgen.services.text_extract import extract_text, extract_text_from_pdf


def test_extract_plain_text_and_markdown():
    assert extract_text("notes.txt", "Café notes".encode("utf-8")) == "Café notes"
    assert extract_text("README.MD", b"# Title\nBody") == "# Title\nBody"


def test_extract_text_strips_bom():
    assert extract_text("notes.txt", b"\xef\xbb\xbfhello") == "hello"


@pytest.mark.parametrize("name", ["essay.doc", "essay.docx"])
def test_word_documents_unsupported(name):
    with pytest.raises(UnsupportedDocumentError) as exc:
        extract_text(name, b"anything")
    assert ".txt" in str(exc.value)


def test_invalid_pdf_raises_read_error():
    with pytest.raises(DocumentReadError):
        extract_text("scan.pdf", b"this is not a pdf")


def test_malformed_pdf_object_tree_raises_read_error(monkeypatch):
    """Errors outside PyPDF2's own hierarchy (e.g. TypeError on a bad /Kids entry) are read errors too."""

    def broken_reader(stream):
        raise TypeError("'NumberObject' object is not iterable")

    monkeypatch.setattr(text_extract, "PdfReader", broken_reader)
    with pytest.raises(DocumentReadError):
        extract_text("report.pdf", b"%PDF-1.4 ...")


def test_pdf_without_text_raises_read_error():
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    buf = io.BytesIO()
    writer.write(buf)
    with pytest.raises(DocumentReadError) as exc:
        extract_text_from_pdf(buf.getvalue())
    assert "No readable text" in str(exc.value)


def test_unknown_extension_decoded_as_text():
    assert extract_text("notes", b"plain content") == "plain content"


def test_unknown_extension_binary_rejected():
    with pytest.raises(DocumentReadError):
        extract_text("image.png", b"\x89PNG\r\n\x1a\n\xff\xfe")
