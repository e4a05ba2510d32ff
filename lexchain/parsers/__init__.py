"""Document parser abstraction for PyMuPDF and Azure Document Intelligence."""

from .factory import create_parser
from .base import BaseDocumentParser, ParsedDocument, DocumentParsingError, validate_pdf_upload

__all__ = [
    "create_parser",
    "BaseDocumentParser",
    "ParsedDocument",
    "DocumentParsingError",
    "validate_pdf_upload",
]
