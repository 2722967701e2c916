"""
Document Text Extraction

Extracts plain text from uploaded PDF and DOCX files so their content can
be read while authoring questions. Files are processed in memory and never
stored; extraction never touches the question bank or the active session.
"""

import io
import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from docx import Document
from pypdf import PdfReader

from ..core.exceptions import DocumentExtractionError, UnsupportedDocumentError
from ..utils.logging import get_logger, PerformanceTimer

logger = get_logger(__name__)

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

UNSUPPORTED_MESSAGE = "Unsupported file type. Please upload PDF or DOCX."
FAILED_MESSAGE = "Failed to extract text from document."

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ExtractedDocument:
    """Sanitized text pulled from a document, with its metadata."""
    text: str
    character_count: int
    file_name: str
    file_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "characterCount": self.character_count,
            "fileName": self.file_name,
            "fileType": self.file_type,
        }


def sanitize_text(text: str) -> str:
    """Collapse runs of whitespace to single spaces and trim."""
    return _WHITESPACE.sub(" ", text).strip()


class DocumentExtractor:
    """Extracts text from PDF (pypdf) and DOCX (python-docx) documents."""

    def extract_file(self, path: Union[str, Path], file_type: Optional[str] = None) -> ExtractedDocument:
        """
        Extract text from a document on disk.

        Raises:
            UnsupportedDocumentError: if the file is neither PDF nor DOCX
            DocumentExtractionError: if the file cannot be read or parsed
        """
        path = Path(path)
        kind = self._detect_kind(path.name, file_type)

        try:
            data = path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read {path}: {e}")
            raise DocumentExtractionError(FAILED_MESSAGE, file_name=path.name, file_type=file_type) from e

        return self._extract(data, path.name, kind)

    def extract_bytes(self, data: bytes, file_name: str,
                      file_type: Optional[str] = None) -> ExtractedDocument:
        """Extract text from document content already held in memory."""
        kind = self._detect_kind(file_name, file_type)
        return self._extract(data, file_name, kind)

    def _detect_kind(self, file_name: str, file_type: Optional[str]) -> str:
        """Return PDF_MIME_TYPE or DOCX_MIME_TYPE, or raise for anything else."""
        if file_type is None:
            file_type, _ = mimetypes.guess_type(file_name)

        suffix = Path(file_name).suffix.lower()
        if file_type == PDF_MIME_TYPE or suffix == ".pdf":
            return PDF_MIME_TYPE
        if file_type == DOCX_MIME_TYPE or suffix == ".docx":
            return DOCX_MIME_TYPE

        logger.warning(f"Unsupported document type for {file_name}: {file_type}")
        raise UnsupportedDocumentError(UNSUPPORTED_MESSAGE, file_name=file_name, file_type=file_type)

    def _extract(self, data: bytes, file_name: str, kind: str) -> ExtractedDocument:
        with PerformanceTimer(f"extracting text from {file_name}", logger):
            try:
                if kind == PDF_MIME_TYPE:
                    raw_text = self._extract_pdf(data)
                else:
                    raw_text = self._extract_docx(data)
            except Exception as e:
                # pypdf and python-docx raise a wide range of parser errors
                logger.error(f"Extraction error for {file_name}: {e}")
                raise DocumentExtractionError(FAILED_MESSAGE, file_name=file_name, file_type=kind) from e

        text = sanitize_text(raw_text)
        logger.info(f"Extracted {len(text)} characters from {file_name}")
        return ExtractedDocument(
            text=text,
            character_count=len(text),
            file_name=file_name,
            file_type=kind,
        )

    @staticmethod
    def _extract_pdf(data: bytes) -> str:
        reader = PdfReader(io.BytesIO(data))
        return "\n".join(page.extract_text() or "" for page in reader.pages)

    @staticmethod
    def _extract_docx(data: bytes) -> str:
        document = Document(io.BytesIO(data))
        parts = [paragraph.text for paragraph in document.paragraphs]
        for table in document.tables:
            for row in table.rows:
                parts.extend(cell.text for cell in row.cells)
        return "\n".join(parts)
