from .field_extractor import (
    PatternExtractor,
    extract_terms_with_patterns,
    extract_contract_type,
    extract_parties,
    extract_payment_terms,
    extract_duration,
    extract_trigger,
    extract_start_date,
    extract_end_date,
    extract_obligations,
    DEFAULT_CONTRACT_TYPE,
)

__all__ = [
    "PatternExtractor",
    "extract_terms_with_patterns",
    "extract_contract_type",
    "extract_parties",
    "extract_payment_terms",
    "extract_duration",
    "extract_trigger",
    "extract_start_date",
    "extract_end_date",
    "extract_obligations",
    "DEFAULT_CONTRACT_TYPE",
]
