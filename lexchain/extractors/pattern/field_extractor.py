"""
Pattern-based contract term extractor.

Pure functions over whitespace-normalized text. Each field is located by an
ordered list of regular expressions; earlier rules win. Nothing here raises
on unrecognised input: absent fields come back as None or empty lists.

Approach:
1. Normalize whitespace
2. Run each field's rules in order
3. Assemble ContractTerms (summary is derived by the model)
"""

import logging
import re
from typing import List, Optional, Pattern, Tuple

from ..base import (
    ContractTermsExtractor,
    ContractCategory,
    ContractTerms,
    MAX_OBLIGATIONS,
    normalize_text,
    unique_in_order,
)

logger = logging.getLogger(__name__)


# =============================================================================
# RULES
# =============================================================================

CONTRACT_TYPE_RULES: List[Tuple[Pattern, str]] = [
    (re.compile(r"service\s+agreement", re.I), ContractCategory.SERVICE_AGREEMENT.value),
    (re.compile(r"purchase\s+agreement", re.I), ContractCategory.PURCHASE_AGREEMENT.value),
    (re.compile(r"employment\s+contract", re.I), ContractCategory.EMPLOYMENT_CONTRACT.value),
    (re.compile(r"lease\s+agreement", re.I), ContractCategory.LEASE_AGREEMENT.value),
    (re.compile(r"non[^a-z]*disclosure", re.I), ContractCategory.NDA.value),
    (re.compile(r"loan\s+agreement", re.I), ContractCategory.LOAN_AGREEMENT.value),
]

DEFAULT_CONTRACT_TYPE = ContractCategory.SERVICE_AGREEMENT.value

# A party name runs to the next clause delimiter, or ends at a corporate
# suffix together with its abbreviation period ("Globex Inc.").
_PARTY_NAME = r"(?:[^,.;\n]*?\b(?:Inc|Corp|Co|Ltd|LLC|LLP|PLC|GmbH|S\.A|N\.A)\.|[^,.;\n]+)"

PARTY_RULES: List[Pattern] = [
    re.compile(rf"\b(?:by\s+and\s+between|between)\s+({_PARTY_NAME})\s+and\s+({_PARTY_NAME})", re.I),
    re.compile(r"\bparty\s+(?:first|1st)\s*[:=]?\s*([^,.\n]+)", re.I),
    re.compile(r"\bparty\s+(?:second|2nd)\s*[:=]?\s*([^,.\n]+)", re.I),
]

PAYMENT_RULES: List[Pattern] = [
    re.compile(
        r"\b(?:payment|amount)\s*[:=]?\s*(?:\$|USDC|USD|EUR)?\s*"
        r"[0-9][0-9,]*(?:\.[0-9]{2})?(?:\s*(?-i:[A-Z]{3,4})\b)?",
        re.I,
    ),
    re.compile(r"\$?[0-9][0-9,]*(?:\.[0-9]{2})?\s+(?:USDC|USD|EUR|dollars|euros)\b", re.I),
]

DURATION_RULES: List[Pattern] = [
    re.compile(
        r"\b(?:duration|term|period|for)\s+(?:of\s+)?(?:a\s+)?([0-9]+\s+(?:days?|weeks?|months?|years?))\b",
        re.I,
    ),
]

TRIGGER_RULES: List[Pattern] = [
    re.compile(r"\b(?:upon|after|on)\s+([^,.\n]*?(?:delivery|completion|signing|receipt|acceptance))", re.I),
    re.compile(r"\b(?:payment\s+)?(?:trigger|condition)\s*[:=]?\s*([^,.\n]+)", re.I),
]

START_DATE_RULES: List[Pattern] = [
    re.compile(r"\b(?:start|commence)(?:ment|ing)?\s+(?:date)?\s*[:=]?\s*([^,.\n]+)", re.I),
]

END_DATE_RULES: List[Pattern] = [
    re.compile(r"\b(?:end|expiration|expires?|termination|completion)\s+(?:date)?\s*[:=]?\s*([^,.\n]+)", re.I),
]

OBLIGATION_RULES: List[Pattern] = [
    re.compile(r"\b(?:shall|must|required\s+to|agrees\s+to)\s+([^,.\n]{10,150})", re.I),
    re.compile(r"\b(?:obligation|duty|responsibility)\s*[:=]?\s*([^,.\n]{10,150})", re.I),
]

OBLIGATION_MIN_LENGTH = 10
OBLIGATION_MAX_LENGTH = 200


# =============================================================================
# FIELD EXTRACTORS
# =============================================================================

def _first_group(text: str, rules: List[Pattern]) -> Optional[str]:
    for pattern in rules:
        match = pattern.search(text)
        if match:
            value = match.group(1).strip()
            if value:
                return value
    return None


def extract_contract_type(text: str) -> str:
    """ First matching rule's label, or the default label. """
    for pattern, label in CONTRACT_TYPE_RULES:
        if pattern.search(text):
            return label
    return DEFAULT_CONTRACT_TYPE


def extract_parties(text: str) -> List[str]:
    """ All capture groups of every matching rule, trimmed and deduplicated. """
    parties = []
    for pattern in PARTY_RULES:
        match = pattern.search(text)
        if match:
            parties.extend(g.strip() for g in match.groups() if g and g.strip())
    return unique_in_order(parties)


def extract_payment_terms(text: str) -> Optional[str]:
    """ Whole text of the first payment rule that matches. """
    for pattern in PAYMENT_RULES:
        match = pattern.search(text)
        if match:
            return match.group(0).strip()
    return None


def extract_duration(text: str) -> Optional[str]:
    return _first_group(text, DURATION_RULES)


def extract_trigger(text: str) -> Optional[str]:
    return _first_group(text, TRIGGER_RULES)


def extract_start_date(text: str) -> Optional[str]:
    return _first_group(text, START_DATE_RULES)


def extract_end_date(text: str) -> Optional[str]:
    return _first_group(text, END_DATE_RULES)


def extract_obligations(text: str) -> List[str]:
    """
    Collect obligation clauses from both rule families.

    All non-overlapping matches are scanned per family, kept only when their
    length falls in [10, 200), deduplicated, and cut to the first five.
    """
    obligations = []
    for pattern in OBLIGATION_RULES:
        for match in pattern.finditer(text):
            obligation = match.group(1).strip()
            if OBLIGATION_MIN_LENGTH <= len(obligation) < OBLIGATION_MAX_LENGTH:
                obligations.append(obligation)
    return unique_in_order(obligations)[:MAX_OBLIGATIONS]


def extract_terms_with_patterns(document_text: str) -> ContractTerms:
    """ Run every field rule over the normalized text. """
    text = normalize_text(document_text)

    return ContractTerms(
        type=extract_contract_type(text),
        parties=extract_parties(text),
        terms={
            "payment": extract_payment_terms(text),
            "duration": extract_duration(text),
            "trigger": extract_trigger(text),
            "startDate": extract_start_date(text),
            "endDate": extract_end_date(text),
        },
        obligations=extract_obligations(text),
    )


# =============================================================================
# PATTERN EXTRACTOR
# =============================================================================

class PatternExtractor(ContractTermsExtractor):
    """
    Rule-based term extraction.

    Needs no external service and always returns a ContractTerms; it is the
    last link of every fallback chain.
    """

    @property
    def strategy_name(self) -> str:
        """Return the name of this strategy."""
        return "pattern"

    def extract(self, document_text: str) -> ContractTerms:
        terms = extract_terms_with_patterns(document_text or "")
        logger.info(
            f"Pattern extraction: type={terms.type!r}, parties={len(terms.parties)}, "
            f"obligations={len(terms.obligations)}"
        )
        return terms
