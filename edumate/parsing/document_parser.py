"""Text extraction for uploaded study documents.

PDFs are read with pypdf; plain text and markdown are decoded as UTF-8.
Word documents are accepted by the upload control but cannot be
extracted here and are rejected with DocumentParseError.
"""

import io
import logging
from pathlib import PurePath

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from edumate.models.session import Document

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"
ACCEPTED_EXTENSIONS: tuple[str, ...] = (".pdf", ".doc", ".docx", ".txt", ".md")
TEXT_EXTENSIONS: tuple[str, ...] = (".txt", ".md")


class ExtractedDocument(BaseModel):
    """Text extracted from a document.

    Attributes:
        text: Combined text content.
        pages: Number of pages (1 for plain text).
        metadata: Document metadata (title, author, etc.).
    """

    text: str
    pages: int = Field(ge=0)
    metadata: dict[str, str] = Field(default_factory=dict)


class DocumentParseError(Exception):
    """Raised when a document cannot be read or extracted."""

    pass


def file_extension(filename: str) -> str:
    return PurePath(filename).suffix.lower()


def is_accepted(filename: str | None) -> bool:
    """Whether the upload control accepts a file with this name."""
    return bool(filename) and file_extension(filename) in ACCEPTED_EXTENSIONS


def _validate_size(content: bytes) -> None:
    if not content:
        raise DocumentParseError("Empty file provided")

    if len(content) > MAX_FILE_SIZE:
        size_mb = len(content) / (1024 * 1024)
        raise DocumentParseError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")


def _extract_pdf_metadata(reader: PdfReader) -> dict[str, str]:
    fields = {"/Title": "title", "/Author": "author", "/Subject": "subject"}
    metadata: dict[str, str] = {}

    try:
        if reader.metadata:
            for pdf_key, name in fields.items():
                value = reader.metadata.get(pdf_key)
                if value:
                    metadata[name] = str(value)
    except Exception as e:
        logger.warning(f"Failed to extract some metadata: {e}")

    return metadata


def parse_pdf(content: bytes) -> ExtractedDocument:
    """Extract text and metadata from PDF bytes.

    Raises:
        DocumentParseError: If the file is invalid, too large, empty, or corrupt.
    """
    _validate_size(content)

    if not content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise DocumentParseError("Invalid PDF: file does not start with PDF header")

    try:
        reader = PdfReader(io.BytesIO(content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise DocumentParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise DocumentParseError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise DocumentParseError("PDF contains no pages")

    text_parts: list[str] = []
    for i, page in enumerate(reader.pages):
        try:
            page_text = page.extract_text()
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1}: {e}")
            continue
        if page_text:
            text_parts.append(page_text)

    text = "\n\n".join(text_parts)
    if not text.strip():
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return ExtractedDocument(text=text, pages=pages, metadata=_extract_pdf_metadata(reader))


def parse_text(content: bytes) -> ExtractedDocument:
    """Decode a plain text or markdown document."""
    _validate_size(content)
    return ExtractedDocument(text=content.decode("utf-8", errors="replace"), pages=1)


def extract_text(document: Document) -> ExtractedDocument:
    """Extract text from ``document`` according to its file extension.

    Raises:
        DocumentParseError: If the type is unsupported or the content is unreadable.
    """
    extension = file_extension(document.name)
    if extension not in ACCEPTED_EXTENSIONS:
        raise DocumentParseError(f"Unsupported document type: {extension or 'none'}")

    try:
        content = document.read_bytes()
    except (OSError, TypeError) as e:
        raise DocumentParseError(f"Could not read {document.name}: {e}") from e

    if extension == ".pdf":
        return parse_pdf(content)
    if extension in TEXT_EXTENSIONS:
        return parse_text(content)
    raise DocumentParseError(f"Text extraction is not available for {extension} files")
