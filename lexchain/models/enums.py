"""
Database enumeration types.

Workflow state for conversions and the set of storable networks. Values are
persisted verbatim, so they must not change.
"""

from enum import Enum


class ConversionStatus(str, Enum):
    """Pipeline status of a conversion."""
    UPLOADING = "UPLOADING"
    PARSING = "PARSING"
    EXTRACTING = "EXTRACTING"
    GENERATING = "GENERATING"
    DEPLOYING = "DEPLOYING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (ConversionStatus.COMPLETED, ConversionStatus.FAILED)


class ProcessingStep(str, Enum):
    """Stage a conversion is currently in (or last reached)."""
    UPLOAD = "UPLOAD"
    PARSE_PDF = "PARSE_PDF"
    EXTRACT_DATA = "EXTRACT_DATA"
    GENERATE_CONTRACT = "GENERATE_CONTRACT"
    DEPLOY = "DEPLOY"
    COMPLETED = "COMPLETED"


class BlockchainNetwork(str, Enum):
    """Target network for a conversion. SOLANA is storable but not deployable."""
    ETHEREUM = "ETHEREUM"
    POLYGON = "POLYGON"
    SOLANA = "SOLANA"

    @classmethod
    def parse(cls, value) -> "BlockchainNetwork":
        """Case-insensitive lookup; raises ValueError for unknown names."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown blockchain network: {value}")
