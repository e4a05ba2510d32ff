"""Deployable network catalogue and block explorer links."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from .evm import MUMBAI_CHAIN_ID, SEPOLIA_CHAIN_ID


@dataclass(frozen=True)
class NetworkInfo:
    name: str
    id: str
    chain_id: int
    explorer: str
    native_currency: str
    faucet: str
    testnet: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


NETWORKS = (
    NetworkInfo(
        name="Ethereum Sepolia",
        id="ethereum",
        chain_id=SEPOLIA_CHAIN_ID,
        explorer="https://sepolia.etherscan.io",
        native_currency="ETH",
        faucet="https://www.alchemy.com/faucets/ethereum-sepolia",
    ),
    NetworkInfo(
        name="Polygon Mumbai",
        id="polygon",
        chain_id=MUMBAI_CHAIN_ID,
        explorer="https://mumbai.polygonscan.com",
        native_currency="MATIC",
        faucet="https://faucet.polygon.technology/",
    ),
)

_EXPLORERS = {info.id.upper(): info.explorer for info in NETWORKS}


def list_networks() -> List[NetworkInfo]:
    return list(NETWORKS)


def get_block_explorer_url(blockchain, contract_address: str) -> str:
    """Explorer page for a contract, or "" for networks without one."""
    if not blockchain or not contract_address:
        return ""
    explorer = _EXPLORERS.get(str(getattr(blockchain, "value", blockchain)).upper())
    if not explorer:
        return ""
    return f"{explorer}/address/{contract_address}"
