"""
Extraction strategies for legal contract documents.

Two strategies produce the same ContractTerms structure:

- pattern: ordered regular-expression rules, no external calls
- assisted: language-model extraction that falls back to pattern rules
  whenever the model is unavailable or its answer is unusable

Usage:
    from lexchain.extractors import ExtractorFactory

    factory = ExtractorFactory()
    extractor = factory.create_extractor("assisted")
    terms = extractor.extract(document_text)
"""

from .base import (
    ContractTermsExtractor,
    ContractCategory,
    ContractTerms,
    ExtractorConfig,
    TERM_KEYS,
    normalize_text,
    build_summary,
)
from .pattern import PatternExtractor
from .assisted import AssistedExtractor
from .factory import ExtractorFactory

__all__ = [
    # Main API
    "ExtractorFactory",
    "PatternExtractor",
    "AssistedExtractor",
    # Interfaces
    "ContractTermsExtractor",
    # Models
    "ContractCategory",
    "ContractTerms",
    "TERM_KEYS",
    # Config
    "ExtractorConfig",
    # Utils
    "normalize_text",
    "build_summary",
]
