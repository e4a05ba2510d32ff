"""Base classes for document parsing abstraction."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, Union, BinaryIO

from ..exceptions import LexchainError

PDF_MAGIC = b"%PDF-"


class DocumentParsingError(LexchainError):
    """Raised when a document cannot be converted to text."""
    pass


@dataclass
class ParsedDocument:
    """
    Standard output format from all document parsers.

    This provides a unified interface regardless of which parser was used.
    """
    content: str # Main text content (plain text or markdown)
    format: str # 'plain_text' or 'markdown'
    page_count: int
    metadata: Dict[str, Any] = field(default_factory=dict) # Parser-specific metadata


class BaseDocumentParser(ABC):
    """Abstract base class for document parsers."""

    @abstractmethod
    def parse(self, file_content: Union[bytes, BinaryIO]) -> ParsedDocument:
        """
        Parse document content and return standardized output.

        Args:
            file_content: PDF file as bytes or file-like object

        Returns:
            ParsedDocument with standardized format

        Raises:
            DocumentParsingError: If the document cannot be read
        """
        pass

    def parse_file(self, file_path: Union[str, Path]) -> ParsedDocument:
        """Read a file from disk and parse it."""
        try:
            data = Path(file_path).read_bytes()
        except OSError as e:
            raise DocumentParsingError(f"Failed to read {file_path}: {e}") from e
        return self.parse(data)


def validate_pdf_upload(filename: str, data: bytes, max_bytes: int) -> None:
    """
    Check an upload before it enters the pipeline.

    Raises:
        DocumentParsingError: If the file is not a PDF or is too large
    """
    if not filename.lower().endswith(".pdf") or not data.startswith(PDF_MAGIC):
        raise DocumentParsingError("Only PDF files are allowed")
    if len(data) > max_bytes:
        raise DocumentParsingError(f"File exceeds maximum size of {max_bytes} bytes")
