"""
Shared utility functions for extraction strategies.

This module provides text normalization, order-preserving deduplication,
summary building and JSON location helpers used by every extractor.
"""

import re
import logging
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


# =============================================================================
# TEXT NORMALIZATION
# =============================================================================

def normalize_text(text: str) -> str:
    """ Collapse all whitespace runs to single spaces and trim. """
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


# =============================================================================
# DEDUPLICATION
# =============================================================================

def unique_in_order(items: Iterable[str]) -> List[str]:
    """ Remove exact duplicates while keeping first-seen order. """
    seen = set()
    unique = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique


# =============================================================================
# SUMMARY
# =============================================================================

def build_summary(
    contract_type: str,
    parties: List[str],
    payment: Optional[str] = None,
    duration: Optional[str] = None
) -> str:
    """
    Build the one-line contract summary.

    Each segment is omitted when its source field is absent, e.g.
    "Service Agreement between Alice, Bob - Payment: $2,000 USDC - Duration: 30 days".
    """
    parties_text = f" between {', '.join(parties)}" if parties else ""
    payment_text = f" - Payment: {payment}" if payment else ""
    duration_text = f" - Duration: {duration}" if duration else ""

    return f"{contract_type}{parties_text}{payment_text}{duration_text}"


# =============================================================================
# JSON LOCATION
# =============================================================================

def find_json_object(text: str) -> Optional[str]:
    """
    Return the first balanced ``{...}`` substring of text, or None.

    Braces inside JSON string literals are ignored so values such as
    ``"a {b} c"`` do not unbalance the scan.
    """
    if not text:
        return None

    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False

        for i in range(start, len(text)):
            ch = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue

            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return text[start:i + 1]

        # Unbalanced from this brace; try the next opening brace
        start = text.find("{", start + 1)

    return None
