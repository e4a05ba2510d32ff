"""
Solidity contract generator.

Renders the escrow template from a validated ContractTerms. Output is
deterministic: the only varying line is the one starting with
"Generated on:", and its value can be pinned by the caller.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from lexchain.extractors.base import ContractTerms
from .filters import register_filters, sanitize_identifier

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = "escrow_contract.sol.j2"
SOLIDITY_VERSION = "0.8.20"

TIMESTAMP_MARKER = "Generated on:"

NOT_SPECIFIED = "Not specified"
MANUAL_TRIGGER = "Manual trigger"

_AMOUNT = re.compile(r"[0-9][0-9,]*")

UINT256_MAX = 2 ** 256 - 1


@dataclass(frozen=True)
class GeneratedArtifact:
    """Rendered contract source plus the identifier declared inside it."""
    source: str
    contract_name: str
    contract_type: str
    generated_at: str


def payment_amount(payment: Optional[str]) -> int:
    """
    Leading whole number of a payment term ("$2,000 USDC" -> 2000).

    Returns 0 when there is no number or it does not fit in a uint256.
    """
    if not payment:
        return 0
    match = _AMOUNT.search(payment)
    if not match:
        return 0
    digits = match.group(0).replace(",", "").lstrip("0") or "0"
    if len(digits) > len(str(UINT256_MAX)):
        return 0
    amount = int(digits)
    return amount if amount <= UINT256_MAX else 0


def describe(terms: ContractTerms) -> str:
    """Human-readable description used in the contract header and fields."""
    if terms.summary:
        return terms.summary
    return f"{terms.type} contract between {', '.join(terms.parties)}"


class SolidityGenerator:
    """
    Template-based Solidity generator.

    Example usage:
        generator = SolidityGenerator()
        artifact = generator.generate(terms)
        # artifact.source is the .sol text, artifact.contract_name the identifier
    """

    def __init__(self, template_name: str = DEFAULT_TEMPLATE, templates_dir: Path = TEMPLATES_DIR):
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        register_filters(self.env)
        self.template = self.env.get_template(template_name)

    def generate(self, terms: ContractTerms, generated_at: Optional[datetime] = None) -> GeneratedArtifact:
        """
        Render a contract for the given terms.

        Args:
            terms: Validated contract terms (type and at least one party)
            generated_at: Timestamp for the header line; defaults to now (UTC)

        Returns:
            GeneratedArtifact with source text and sanitized contract name

        Raises:
            ValueError: If the terms are missing a type or parties
        """
        if not terms.is_valid():
            raise ValueError("Contract terms must include type and at least one party")

        contract_name = sanitize_identifier(terms.type)
        timestamp = (generated_at or datetime.now(timezone.utc)).isoformat()

        context = {
            "solidity_version": SOLIDITY_VERSION,
            "contract_name": contract_name,
            "description": describe(terms),
            "party_names": ", ".join(terms.parties),
            "payment_terms": terms.payment or NOT_SPECIFIED,
            "payment_amount": payment_amount(terms.payment),
            "duration": terms.duration or NOT_SPECIFIED,
            "trigger": terms.trigger or MANUAL_TRIGGER,
            "start_date": terms.start_date or NOT_SPECIFIED,
            "end_date": terms.end_date or NOT_SPECIFIED,
            "obligations": "; ".join(terms.obligations),
            "generated_at": timestamp,
        }

        source = self.template.render(**context)
        logger.info(f"Generated Solidity contract {contract_name} ({len(source)} chars)")

        return GeneratedArtifact(
            source=source,
            contract_name=contract_name,
            contract_type=terms.type,
            generated_at=timestamp,
        )


def strip_timestamp(source: str) -> str:
    """Drop the generation timestamp line so two renders can be compared."""
    return "\n".join(line for line in source.splitlines() if TIMESTAMP_MARKER not in line)
