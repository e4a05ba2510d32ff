"""Base classes for Solidity compilation."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


@dataclass(frozen=True)
class CompilationSucceeded:
    """Compiled artifact ready for deployment."""
    abi: List[Dict[str, Any]]
    bytecode: str
    artifact_name: str
    warnings: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class CompilationFailed:
    """Compilation was refused or the compiler reported errors."""
    reason: str
    warnings: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return False


CompilationOutcome = Union[CompilationSucceeded, CompilationFailed]


class BaseSolidityCompiler(ABC):
    """Thin client over a solc standard-JSON interface."""

    @property
    @abstractmethod
    def version(self) -> str:
        pass

    @abstractmethod
    def compile_standard(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run the compiler on a standard-JSON input.

        Returns:
            The compiler's standard-JSON output, including any diagnostics
            under "errors"
        """
        pass
