"""
Exception hierarchy for the conversion pipeline.

Extraction problems never leave the extractor chain, compilation and
deployment problems are normally reported as structured outcomes, and
persistence problems always propagate to the caller.
"""

from typing import List, Optional


class LexchainError(Exception):
    """Base class for all pipeline errors."""
    pass


class ValidationError(LexchainError):
    """Raised when input is malformed or missing before any stage runs."""
    pass


class ExtractionFailure(LexchainError):
    """Raised when no usable contract terms could be produced."""
    pass


class CompilationError(LexchainError):
    """Raised when the compiler rejects a generated contract."""

    def __init__(self, reason: str, warnings: Optional[List[str]] = None):
        super().__init__(reason)
        self.reason = reason
        self.warnings = list(warnings or [])


class DeploymentError(LexchainError):
    """Raised when configuration, submission or confirmation of a deployment fails."""
    pass


class PersistenceError(LexchainError):
    """Raised when the persistence layer rejects a write or lookup."""
    pass
