"""Contract deployment to EVM testnets."""

from .base import (
    DeploymentSucceeded,
    DeploymentFailed,
    DeploymentOutcome,
    DeploymentReceipt,
    DeploymentStrategy,
    NetworkClient,
    default_constructor_args,
)
from .evm import EthereumSepoliaStrategy, PolygonMumbaiStrategy, Web3NetworkClient
from .router import DeploymentRouter
from .explorer import NetworkInfo, get_block_explorer_url, list_networks

__all__ = [
    "DeploymentSucceeded",
    "DeploymentFailed",
    "DeploymentOutcome",
    "DeploymentReceipt",
    "DeploymentStrategy",
    "NetworkClient",
    "default_constructor_args",
    "EthereumSepoliaStrategy",
    "PolygonMumbaiStrategy",
    "Web3NetworkClient",
    "DeploymentRouter",
    "NetworkInfo",
    "get_block_explorer_url",
    "list_networks",
]
