"""Pipeline orchestration and the conversion request surface."""

from ..exceptions import (
    LexchainError,
    ValidationError,
    ExtractionFailure,
    CompilationError,
    DeploymentError,
    PersistenceError,
)
from .processor import ConversionProcessor, ConversionResult
from .service import ConversionService, ConversionStatusView

__all__ = [
    "LexchainError",
    "ValidationError",
    "ExtractionFailure",
    "CompilationError",
    "DeploymentError",
    "PersistenceError",
    "ConversionProcessor",
    "ConversionResult",
    "ConversionService",
    "ConversionStatusView",
]
