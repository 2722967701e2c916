"""
Unit tests for PDF/DOCX text extraction.
"""

import io

import pytest
from docx import Document
from pypdf import PdfWriter

from quizdrill.core.exceptions import DocumentExtractionError, UnsupportedDocumentError
from quizdrill.data.extraction import (
    DOCX_MIME_TYPE,
    FAILED_MESSAGE,
    PDF_MIME_TYPE,
    UNSUPPORTED_MESSAGE,
    DocumentExtractor,
    sanitize_text,
)


@pytest.fixture
def extractor():
    return DocumentExtractor()


@pytest.fixture
def docx_path(temp_dir):
    """A small Word document with paragraphs and a table."""
    document = Document()
    document.add_paragraph("The   Battle of\tHastings")
    document.add_paragraph("took place in 1066.")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "William"
    table.rows[0].cells[1].text = "Harold"

    path = temp_dir / "notes.docx"
    document.save(str(path))
    return path


def _blank_pdf_bytes() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=72, height=72)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class TestSanitizeText:
    """Test cases for sanitize_text."""

    def test_collapses_whitespace(self):
        assert sanitize_text("  a \n\n b\t\tc  ") == "a b c"

    def test_empty(self):
        assert sanitize_text("") == ""


class TestDocumentExtractor:
    """Test cases for DocumentExtractor."""

    def test_extract_docx(self, extractor, docx_path):
        extracted = extractor.extract_file(docx_path)

        assert extracted.text == "The Battle of Hastings took place in 1066. William Harold"
        assert extracted.character_count == len(extracted.text)
        assert extracted.file_name == "notes.docx"
        assert extracted.file_type == DOCX_MIME_TYPE

    def test_extract_docx_bytes_with_explicit_type(self, extractor, docx_path):
        extracted = extractor.extract_bytes(docx_path.read_bytes(), "upload", file_type=DOCX_MIME_TYPE)
        assert extracted.text.startswith("The Battle of Hastings")

    def test_extract_pdf(self, extractor):
        extracted = extractor.extract_bytes(_blank_pdf_bytes(), "blank.pdf")

        assert extracted.file_type == PDF_MIME_TYPE
        assert extracted.text == ""
        assert extracted.character_count == 0

    def test_unsupported_extension(self, extractor):
        with pytest.raises(UnsupportedDocumentError) as exc_info:
            extractor.extract_bytes(b"plain text", "notes.txt")

        assert exc_info.value.message == UNSUPPORTED_MESSAGE

    def test_corrupt_pdf(self, extractor):
        with pytest.raises(DocumentExtractionError) as exc_info:
            extractor.extract_bytes(b"this is not a pdf", "broken.pdf")

        assert not isinstance(exc_info.value, UnsupportedDocumentError)
        assert exc_info.value.message == FAILED_MESSAGE

    def test_corrupt_docx(self, extractor):
        with pytest.raises(DocumentExtractionError):
            extractor.extract_bytes(b"PK not really a zip", "broken.docx")

    def test_missing_file(self, extractor, temp_dir):
        with pytest.raises(DocumentExtractionError):
            extractor.extract_file(temp_dir / "missing.pdf")

    def test_to_dict(self, extractor, docx_path):
        data = extractor.extract_file(docx_path).to_dict()

        assert data["fileName"] == "notes.docx"
        assert data["fileType"] == DOCX_MIME_TYPE
        assert data["characterCount"] == len(data["text"])
