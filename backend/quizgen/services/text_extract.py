"""
Document text extraction for uploads: plain text / markdown and text-based PDFs.
Word documents are rejected with a message asking for .txt or .pdf.
"""
import io
import logging

from PyPDF2 import PdfReader

from quizgen.errors import DocumentReadError, UnsupportedDocumentError

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = (".txt", ".md")
WORD_SUFFIXES = (".doc", ".docx")

WORD_UNSUPPORTED_MESSAGE = (
    "Word document support requires additional setup. Please convert to text format (.txt) or PDF."
)
PDF_UNREADABLE_MESSAGE = "Could not extract text from PDF file. Please ensure the PDF contains readable text."
PDF_EMPTY_MESSAGE = (
    "No readable text found in PDF. The PDF might contain only images or be password protected."
)
TEXT_UNREADABLE_MESSAGE = "Could not extract text from file. Please ensure it's a readable text format."


def extract_text_from_pdf(content: bytes) -> str:
    """
    Extract text from a text-based PDF, one block per page. Raises DocumentReadError when the file
    cannot be parsed or has no extractable text (image-only or encrypted).
    """
    try:
        reader = PdfReader(io.BytesIO(content))
        parts = []
        for page in reader.pages:
            text = page.extract_text()
            if text:
                parts.append(text)
    except Exception as e:  # malformed object trees surface as TypeError, AttributeError, ...
        logger.warning("PDF extraction failed: %s", e)
        raise DocumentReadError(PDF_UNREADABLE_MESSAGE) from e
    full_text = "\n".join(parts).strip()
    if not full_text:
        raise DocumentReadError(PDF_EMPTY_MESSAGE)
    return full_text


def _decode_text(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise DocumentReadError(TEXT_UNREADABLE_MESSAGE) from e


def extract_text(filename: str, content: bytes) -> str:
    """Return the document text for an uploaded file, dispatching on the file extension."""
    name = (filename or "").strip().lower()
    if name.endswith(TEXT_SUFFIXES):
        return _decode_text(content)
    if name.endswith(".pdf"):
        return extract_text_from_pdf(content)
    if name.endswith(WORD_SUFFIXES):
        raise UnsupportedDocumentError(WORD_UNSUPPORTED_MESSAGE)
    # Unknown extension: accept it if it decodes as text
    return _decode_text(content)
