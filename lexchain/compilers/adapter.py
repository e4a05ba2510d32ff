"""
Compilation adapter.

Checks that generated text looks like a Solidity contract before handing it
to the compiler, then turns the compiler's standard-JSON output into a
CompilationOutcome.
"""

import logging
from typing import Any, Dict, List, Optional

from .base import (
    BaseSolidityCompiler,
    CompilationFailed,
    CompilationOutcome,
    CompilationSucceeded,
)

logger = logging.getLogger(__name__)

SOURCE_NAME = "Contract.sol"
PRAGMA_MARKER = "pragma solidity"
DECLARATION_MARKER = "contract "
OPTIMIZER_RUNS = 200


def build_compiler_input(source: str) -> Dict[str, Any]:
    """Standard-JSON input: optimizer on, ABI and bytecode only."""
    return {
        "language": "Solidity",
        "sources": {SOURCE_NAME: {"content": source}},
        "settings": {
            "optimizer": {"enabled": True, "runs": OPTIMIZER_RUNS},
            "outputSelection": {
                "*": {"*": ["abi", "evm.bytecode.object"]},
            },
        },
    }


def validate_source(source: Optional[str]) -> Optional[str]:
    """Return the first structural problem with the source, or None."""
    if not source or not source.strip():
        return "Empty Solidity code provided"
    if PRAGMA_MARKER not in source:
        return "Missing pragma solidity declaration"
    if DECLARATION_MARKER not in source:
        return "Missing contract declaration"
    return None


def _messages(diagnostics: List[Dict[str, Any]]) -> List[str]:
    return [d.get("message") or d.get("formattedMessage") or "" for d in diagnostics]


class CompilationAdapter:
    """
    Validate and compile generated contracts.

    Example usage:
        adapter = CompilationAdapter(SolcxCompiler("0.8.20"))
        outcome = adapter.compile(artifact.source)
        if outcome.success:
            outcome.abi, outcome.bytecode
    """

    def __init__(self, compiler: Optional[BaseSolidityCompiler] = None):
        if compiler is None:
            from .solc_compiler import SolcxCompiler
            from ..config import config
            compiler = SolcxCompiler(config.solc_version)
        self.compiler = compiler

    @property
    def compiler_version(self) -> str:
        return self.compiler.version

    def compile(self, source: str) -> CompilationOutcome:
        problem = validate_source(source)
        if problem:
            logger.warning(f"Refusing to compile: {problem}")
            return CompilationFailed(reason=problem)

        logger.info("Compiling Solidity contract with solc...")

        try:
            output = self.compiler.compile_standard(build_compiler_input(source))
        except Exception as e:
            logger.error(f"Compiler invocation failed: {e}")
            return CompilationFailed(reason=f"Compilation failed: {e}")

        diagnostics = output.get("errors") or []
        errors = [d for d in diagnostics if d.get("severity") == "error"]
        warnings = _messages([d for d in diagnostics if d.get("severity") == "warning"])

        if errors:
            error_messages = "; ".join(_messages(errors))
            logger.error(f"Compilation errors: {error_messages}")
            return CompilationFailed(
                reason=f"Compilation failed: {error_messages}",
                warnings=warnings,
            )

        if warnings:
            logger.warning(f"Compilation warnings: {warnings}")

        contracts = (output.get("contracts") or {}).get(SOURCE_NAME) or {}
        if not contracts:
            return CompilationFailed(
                reason="No contracts found in compilation output",
                warnings=warnings,
            )

        artifact_name = next(iter(contracts))
        contract = contracts[artifact_name]
        abi = contract.get("abi")
        bytecode = ((contract.get("evm") or {}).get("bytecode") or {}).get("object")

        if abi is None or not bytecode:
            return CompilationFailed(
                reason="Missing ABI or bytecode in compilation output",
                warnings=warnings,
            )

        functions = len([item for item in abi if item.get("type") == "function"])
        logger.info(
            f"Compilation successful: {artifact_name}, bytecode {len(bytecode)} chars, "
            f"{functions} ABI functions"
        )

        return CompilationSucceeded(
            abi=abi,
            bytecode=bytecode,
            artifact_name=artifact_name,
            warnings=warnings,
        )
