"""
Base module for extraction strategies.

Exports core interfaces, models, and utilities used by all extractors.
"""

from .interfaces import ContractTermsExtractor

from .models import (
    ContractCategory,
    ContractTerms,
    TERM_KEYS,
    MAX_OBLIGATIONS,
)

from .config import ExtractorConfig

from .utils import (
    normalize_text,
    unique_in_order,
    build_summary,
    find_json_object,
)

__all__ = [
    # Interfaces
    "ContractTermsExtractor",
    # Models
    "ContractCategory",
    "ContractTerms",
    "TERM_KEYS",
    "MAX_OBLIGATIONS",
    # Config
    "ExtractorConfig",
    # Utils
    "normalize_text",
    "unique_in_order",
    "build_summary",
    "find_json_object",
]
