"""Azure Document Intelligence parser implementation."""

from typing import Union, BinaryIO
from azure.core.credentials import AzureKeyCredential
from azure.core.exceptions import AzureError
from azure.ai.documentintelligence import DocumentIntelligenceClient
from .base import BaseDocumentParser, ParsedDocument, DocumentParsingError


class AzureDocumentParser(BaseDocumentParser):
    """
    OCR-capable parsing using Azure's prebuilt-read model.

    Used for scanned contracts where PyMuPDF finds no text layer.
    """

    def __init__(self, endpoint: str, key: str):
        if not endpoint or not key:
            raise ValueError(
                "Azure Document Intelligence requires DI_ENDPOINT and DI_KEY"
            )

        self.client = DocumentIntelligenceClient(
            endpoint=endpoint,
            credential=AzureKeyCredential(key)
        )

    def parse(self, file_content: Union[bytes, BinaryIO]) -> ParsedDocument:
        try:
            poller = self.client.begin_analyze_document(
                "prebuilt-read",
                file_content,
                content_type="application/octet-stream",
            )
            result = poller.result()
        except AzureError as e:
            raise DocumentParsingError(f"Failed to parse PDF: {e}") from e

        paragraphs = [p.content for p in (result.paragraphs or [])]
        content = '\n\n'.join(paragraphs) if paragraphs else (result.content or "")

        return ParsedDocument(
            content=content,
            format='plain_text',
            page_count=len(result.pages or []),
            metadata={
                'paragraphs_count': len(paragraphs),
                'parser': 'azure_document_intelligence'
            }
        )
