"""Document text extraction for the study agent.

Responsibilities:
    - PDF text extraction with pypdf
    - Plain text and markdown decoding
    - Size and type validation matching the upload control
"""

from edumate.parsing.document_parser import (
    ACCEPTED_EXTENSIONS,
    MAX_FILE_SIZE,
    DocumentParseError,
    ExtractedDocument,
    extract_text,
    is_accepted,
)

__all__ = [
    "ACCEPTED_EXTENSIONS",
    "MAX_FILE_SIZE",
    "DocumentParseError",
    "ExtractedDocument",
    "extract_text",
    "is_accepted",
]
