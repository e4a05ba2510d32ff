"""PyMuPDF parser wrapper."""

from typing import Union, BinaryIO
import fitz  # PyMuPDF
import pymupdf4llm
from .base import BaseDocumentParser, ParsedDocument, DocumentParsingError


class PyMuPDFParser(BaseDocumentParser):
    """
    Local PDF parsing with PyMuPDF.

    Plain text is the default because the term extractor works on
    whitespace-normalized prose; markdown output via pymupdf4llm is kept for
    the LLM-assisted path where layout hints help.
    """

    def __init__(self, output_format: str = "plain_text"):
        if output_format not in ("plain_text", "markdown"):
            raise ValueError(f"Unknown output format: {output_format}")
        self.output_format = output_format

    def parse(self, file_content: Union[bytes, BinaryIO]) -> ParsedDocument:
        if not isinstance(file_content, bytes):
            file_content = file_content.read()

        try:
            doc = fitz.open(stream=file_content, filetype="pdf")
        except Exception as e:
            raise DocumentParsingError(f"Failed to parse PDF: {e}") from e

        try:
            if self.output_format == "markdown":
                content = pymupdf4llm.to_markdown(doc)
            else:
                content = "\n".join(page.get_text() for page in doc)

            page_count = len(doc)

            metadata = {
                'parser': 'pymupdf',
                'page_count': page_count
            }
            if doc.metadata:
                metadata['document_metadata'] = {
                    k: v for k, v in doc.metadata.items()
                    if v  # Only include non-empty values
                }
        finally:
            doc.close()

        return ParsedDocument(
            content=content,
            format=self.output_format,
            page_count=page_count,
            metadata=metadata
        )
