"""Factory for creating document parsers."""

from typing import Optional
from .base import BaseDocumentParser
from .azure_parser import AzureDocumentParser
from .pymupdf_parser import PyMuPDFParser


def create_parser(parser_type: Optional[str] = None, config=None) -> BaseDocumentParser:
    """ Create document parser based on configuration. """
    if config is None:
        from ..config import config

    parser_type = (parser_type or config.document_parser).lower()

    if parser_type == "azure":
        return AzureDocumentParser(endpoint=config.di_endpoint, key=config.di_key)

    elif parser_type == "pymupdf":
        return PyMuPDFParser()

    else:
        raise ValueError(
            f"Unknown document parser: {parser_type}. Use 'azure' or 'pymupdf'"
        )
