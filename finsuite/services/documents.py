"""
Text extraction for uploaded project documents.

Supports PDF (pypdf), DOCX (python-docx) and plain text.
"""

import io
import logging
import zipfile
from typing import Optional

import docx
from docx.opc.exceptions import PackageNotFoundError
from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

PDF_TYPE = "application/pdf"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_TYPE = "text/plain"

SUPPORTED_EXTENSIONS = {
    ".pdf": PDF_TYPE,
    ".docx": DOCX_TYPE,
    ".txt": TEXT_TYPE,
}


class UnsupportedDocumentError(ValueError):
    """Raised when the upload is not a PDF, DOCX or TXT file."""


class DocumentExtractionError(ValueError):
    """Raised when no text can be read from a supported document."""


def detect_document_type(filename: str, content_type: Optional[str] = None) -> str:
    """
    Resolve the document type from the file extension, then the MIME type.

    Raises:
        UnsupportedDocumentError: If neither identifies a supported type
    """
    name = (filename or "").lower()
    for extension, doc_type in SUPPORTED_EXTENSIONS.items():
        if name.endswith(extension):
            return doc_type

    if content_type in SUPPORTED_EXTENSIONS.values():
        return content_type

    raise UnsupportedDocumentError(
        f"Unsupported file type for '{filename}'. Upload a PDF, DOCX or TXT file."
    )


def _extract_pdf(data: bytes) -> str:
    try:
        reader = PdfReader(io.BytesIO(data))
        if reader.is_encrypted:
            raise DocumentExtractionError(
                "This PDF is password-protected. Please provide an unprotected version."
            )
        pages = [page.extract_text() or "" for page in reader.pages]
    except PdfReadError as e:
        raise DocumentExtractionError(
            f"This file is not a valid PDF or may be corrupted: {e}"
        ) from e

    text = "\n".join(pages)
    if not text.strip():
        raise DocumentExtractionError(
            "No text content found in PDF. It might be a scanned document or image-based PDF."
        )
    return text


def _extract_docx(data: bytes) -> str:
    try:
        document = docx.Document(io.BytesIO(data))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError) as e:
        raise DocumentExtractionError(
            "This file is not a valid DOCX document or may be corrupted."
        ) from e

    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def extract_text(filename: str, data: bytes, content_type: Optional[str] = None) -> str:
    """
    Extract plain text from an uploaded document.

    Args:
        filename: Original file name (used to detect the type)
        data: Raw file bytes
        content_type: Optional MIME type reported by the client

    Returns:
        Extracted text

    Raises:
        UnsupportedDocumentError: If the file type is not supported
        DocumentExtractionError: If the file is empty or unreadable
    """
    doc_type = detect_document_type(filename, content_type)

    if not data:
        raise DocumentExtractionError("File is empty or could not be read.")

    if doc_type == PDF_TYPE:
        text = _extract_pdf(data)
    elif doc_type == DOCX_TYPE:
        text = _extract_docx(data)
    else:
        text = data.decode("utf-8", errors="replace")

    if not text.strip():
        raise DocumentExtractionError(
            "Could not extract any text from the document. It might be empty or image-based."
        )

    logger.debug(f"Extracted {len(text)} characters from {filename}")
    return text
