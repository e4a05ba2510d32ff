"""
Shared data models for term extraction strategies.

This module defines the structure every extractor returns, ensuring the
generator and persistence layers see the same shape regardless of which
strategy produced it.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from enum import Enum

from .utils import build_summary, unique_in_order


# =============================================================================
# ENUMERATIONS
# =============================================================================

class ContractCategory(str, Enum):
    """Contract type labels recognised by the extractors."""
    SERVICE_AGREEMENT = "Service Agreement"
    PURCHASE_AGREEMENT = "Purchase Agreement"
    EMPLOYMENT_CONTRACT = "Employment Contract"
    LEASE_AGREEMENT = "Lease Agreement"
    NDA = "NDA"
    LOAN_AGREEMENT = "Loan Agreement"
    OTHER = "Other"


# Wire names of the individual terms, in display order
TERM_KEYS = ("payment", "duration", "trigger", "startDate", "endDate")

_TERM_ALIASES = {
    "start_date": "startDate",
    "end_date": "endDate",
}

MAX_OBLIGATIONS = 5


# =============================================================================
# DATA MODELS
# =============================================================================

def _clean_optional(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.lower() in ("null", "none"):
        return None
    return text


def _clean_list(values: Any) -> List[str]:
    if not isinstance(values, (list, tuple)):
        return []
    cleaned = [str(v).strip() for v in values if v is not None]
    return [v for v in cleaned if v]


@dataclass
class ContractTerms:
    """
    Canonical extracted contract structure.

    Parties and obligations are deduplicated in first-seen order, obligations
    are capped at five entries, and the summary is always recomputed from
    the other fields.
    """
    type: str
    parties: List[str] = field(default_factory=list)
    terms: Dict[str, Optional[str]] = field(default_factory=dict)
    obligations: List[str] = field(default_factory=list)
    summary: str = field(init=False, default="")

    def __post_init__(self):
        self.type = (self.type or "").strip()
        self.parties = unique_in_order(_clean_list(self.parties))
        self.obligations = unique_in_order(_clean_list(self.obligations))[:MAX_OBLIGATIONS]

        normalized = {key: None for key in TERM_KEYS}
        for key, value in (self.terms or {}).items():
            key = _TERM_ALIASES.get(key, key)
            if key in normalized:
                normalized[key] = _clean_optional(value)
        self.terms = normalized

        self.summary = build_summary(self.type, self.parties, self.payment, self.duration)

    # Term accessors
    @property
    def payment(self) -> Optional[str]:
        return self.terms.get("payment")

    @property
    def duration(self) -> Optional[str]:
        return self.terms.get("duration")

    @property
    def trigger(self) -> Optional[str]:
        return self.terms.get("trigger")

    @property
    def start_date(self) -> Optional[str]:
        return self.terms.get("startDate")

    @property
    def end_date(self) -> Optional[str]:
        return self.terms.get("endDate")

    def is_valid(self) -> bool:
        """A term set is usable only with a type and at least one party."""
        return bool(self.type) and len(self.parties) > 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the wire shape used by API responses and storage."""
        return {
            "type": self.type,
            "parties": list(self.parties),
            "terms": dict(self.terms),
            "obligations": list(self.obligations),
            "summary": self.summary,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContractTerms":
        """
        Build terms from a loosely-typed dictionary (LLM output, request body).

        Obligations are accepted either at the top level or nested inside
        ``terms``. Any provided ``summary`` is ignored.
        """
        if not isinstance(data, dict):
            raise ValueError("Contract data must be a JSON object")

        raw_terms = data.get("terms") or {}
        if not isinstance(raw_terms, dict):
            raw_terms = {}

        obligations = data.get("obligations")
        if obligations is None:
            obligations = raw_terms.get("obligations")

        raw_type = data.get("type")
        return cls(
            type=str(raw_type) if raw_type is not None else "",
            parties=data.get("parties") or [],
            terms={k: v for k, v in raw_terms.items() if k != "obligations"},
            obligations=obligations or [],
        )
