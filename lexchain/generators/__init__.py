"""Solidity source generation from extracted contract terms."""

from .filters import (
    sanitize_identifier,
    escape_solidity_string,
    escape_natspec,
    register_filters,
    MAX_IDENTIFIER_LENGTH,
)
from .solidity import (
    SolidityGenerator,
    GeneratedArtifact,
    SOLIDITY_VERSION,
    TIMESTAMP_MARKER,
    payment_amount,
    strip_timestamp,
)

__all__ = [
    "SolidityGenerator",
    "GeneratedArtifact",
    "SOLIDITY_VERSION",
    "TIMESTAMP_MARKER",
    "sanitize_identifier",
    "escape_solidity_string",
    "escape_natspec",
    "register_filters",
    "payment_amount",
    "strip_timestamp",
    "MAX_IDENTIFIER_LENGTH",
]
