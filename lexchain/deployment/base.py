"""
Base classes for contract deployment.

A DeploymentStrategy runs one attempt as five steps:
Compile -> Connect -> BuildFactory -> Submit -> Confirm.
Every failure is returned as a DeploymentFailed; nothing is raised.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from lexchain.compilers import CompilationAdapter, CompilationSucceeded

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class DeploymentSucceeded:
    """Confirmed contract-creation transaction."""
    address: str
    transaction_hash: str
    network: str
    block_number: Optional[int] = None
    gas_used: Optional[int] = None
    bytecode: Optional[str] = None

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class DeploymentFailed:
    """Deployment attempt that did not produce a confirmed contract."""
    reason: str
    network: Optional[str] = None

    @property
    def success(self) -> bool:
        return False


DeploymentOutcome = Union[DeploymentSucceeded, DeploymentFailed]


@dataclass(frozen=True)
class DeploymentReceipt:
    """The parts of a transaction receipt the pipeline keeps."""
    contract_address: Optional[str]
    transaction_hash: str
    block_number: Optional[int] = None
    gas_used: Optional[int] = None


class NetworkClient(ABC):
    """Thin blocking client for one network, bound to one deployer account."""

    @property
    @abstractmethod
    def address(self) -> str:
        """Deployer account address."""
        pass

    @abstractmethod
    def build_factory(self, abi: List[Dict[str, Any]], bytecode: str) -> Any:
        pass

    @abstractmethod
    def submit(self, factory: Any, constructor_args: Sequence[Any]) -> str:
        """Sign and send the contract-creation transaction; returns its hash."""
        pass

    @abstractmethod
    def wait_for_receipt(self, transaction_hash: str, timeout: float) -> DeploymentReceipt:
        pass


# (rpc_url, private_key, chain_id, request_timeout) -> NetworkClient
ClientFactory = Callable[[str, str, int, float], NetworkClient]


def default_constructor_args(abi: List[Dict[str, Any]], deployer: str) -> List[Any]:
    """
    Constructor arguments used when the caller supplies none.

    Address parameters receive the deployer, so the generated escrow contract
    starts with the deployer as its single party.
    """
    constructor = next((item for item in abi if item.get("type") == "constructor"), None)
    if not constructor:
        return []

    args = []
    for param in constructor.get("inputs", []):
        solidity_type = param.get("type", "")
        if solidity_type == "address[]":
            args.append([deployer])
        elif solidity_type.endswith("]"):
            args.append([])
        elif solidity_type == "address":
            args.append(deployer)
        elif solidity_type.startswith(("uint", "int")):
            args.append(0)
        elif solidity_type == "bool":
            args.append(False)
        elif solidity_type == "string":
            args.append("")
        else:
            raise ValueError(f"No default value for constructor parameter of type {solidity_type}")
    return args


class DeploymentStrategy(ABC):
    """
    Compile and deploy a contract to one network.

    Subclasses declare the network name, chain id and the configuration key
    holding the RPC URL.
    """

    network: str = ""
    display_name: str = ""
    chain_id: int = 0
    rpc_env_var: str = ""

    def __init__(
        self,
        settings=None,
        adapter: Optional[CompilationAdapter] = None,
        client_factory: Optional[ClientFactory] = None,
    ):
        if settings is None:
            from lexchain.config import config as settings
        self.settings = settings
        self.adapter = adapter or CompilationAdapter()
        if client_factory is None:
            from .evm import Web3NetworkClient
            client_factory = Web3NetworkClient
        self.client_factory = client_factory

    @abstractmethod
    def rpc_url(self) -> str:
        """RPC endpoint from configuration, empty when unset."""
        pass

    def _fail(self, reason: str) -> DeploymentFailed:
        logger.error(f"[{self.display_name}] {reason}")
        return DeploymentFailed(reason=reason, network=self.network)

    def deploy(self, source: str, constructor_args: Optional[Sequence[Any]] = None) -> DeploymentOutcome:
        """
        Run one deployment attempt.

        Args:
            source: Solidity source text
            constructor_args: Arguments for the contract constructor; when
                None they are derived from the constructor's ABI

        Returns:
            DeploymentSucceeded with address and transaction hash, or
            DeploymentFailed with the reason
        """
        logger.info(f"[{self.display_name}] Step 1: Compiling contract...")
        compiled = self.adapter.compile(source)
        if not isinstance(compiled, CompilationSucceeded):
            return self._fail(compiled.reason)

        logger.info(f"[{self.display_name}] Step 2: Connecting...")
        rpc_url = self.rpc_url()
        if not rpc_url:
            return self._fail(f"Missing {self.rpc_env_var} in configuration")

        private_key = self.settings.deployer_private_key
        if not private_key:
            return self._fail("Missing DEPLOYER_PRIVATE_KEY in configuration")

        try:
            client = self.client_factory(rpc_url, private_key, self.chain_id, self.settings.request_timeout)
            logger.info(f"[{self.display_name}] Deployer address: {client.address}")

            logger.info(f"[{self.display_name}] Step 3: Creating contract factory...")
            factory = client.build_factory(compiled.abi, compiled.bytecode)

            args = list(constructor_args) if constructor_args is not None else \
                default_constructor_args(compiled.abi, client.address)

            logger.info(f"[{self.display_name}] Step 4: Submitting deployment transaction...")
            transaction_hash = client.submit(factory, args)
            logger.info(f"[{self.display_name}] Deployment tx: {transaction_hash}")

            logger.info(f"[{self.display_name}] Step 5: Waiting for confirmation...")
            receipt = client.wait_for_receipt(transaction_hash, self.settings.deploy_confirm_timeout)
        except Exception as e:
            return self._fail(f"Deployment failed: {e}")

        if not receipt.contract_address or not receipt.transaction_hash:
            return self._fail("Deployment receipt carried no contract address")

        logger.info(
            f"[{self.display_name}] Contract deployed at {receipt.contract_address} "
            f"(block {receipt.block_number}, gas {receipt.gas_used})"
        )

        return DeploymentSucceeded(
            address=receipt.contract_address,
            transaction_hash=receipt.transaction_hash,
            network=self.network,
            block_number=receipt.block_number,
            gas_used=receipt.gas_used,
            bytecode=compiled.bytecode,
        )
