"""Solidity compilation: validation gate, solc client and outcome types."""

from .base import (
    BaseSolidityCompiler,
    CompilationSucceeded,
    CompilationFailed,
    CompilationOutcome,
)
from .adapter import CompilationAdapter, build_compiler_input, validate_source, SOURCE_NAME
from .solc_compiler import SolcxCompiler

__all__ = [
    "BaseSolidityCompiler",
    "CompilationSucceeded",
    "CompilationFailed",
    "CompilationOutcome",
    "CompilationAdapter",
    "SolcxCompiler",
    "build_compiler_input",
    "validate_source",
    "SOURCE_NAME",
]
