"""EVM testnet deployment through web3.py."""

import logging
from typing import Any, Dict, List, Sequence

from eth_account import Account
from web3 import Web3

from lexchain.exceptions import DeploymentError
from lexchain.models.enums import BlockchainNetwork
from .base import DeploymentReceipt, DeploymentStrategy, NetworkClient

logger = logging.getLogger(__name__)

SEPOLIA_CHAIN_ID = 11155111
MUMBAI_CHAIN_ID = 80001


class Web3NetworkClient(NetworkClient):
    """JSON-RPC client signing locally with the deployer key."""

    def __init__(self, rpc_url: str, private_key: str, chain_id: int, timeout: float = 60):
        self.w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
        self.account = Account.from_key(private_key)
        self.chain_id = chain_id

    @property
    def address(self) -> str:
        return self.account.address

    def build_factory(self, abi: List[Dict[str, Any]], bytecode: str):
        return self.w3.eth.contract(abi=abi, bytecode=bytecode)

    def submit(self, factory, constructor_args: Sequence[Any]) -> str:
        transaction = factory.constructor(*constructor_args).build_transaction({
            "from": self.account.address,
            "nonce": self.w3.eth.get_transaction_count(self.account.address),
            "chainId": self.chain_id,
        })
        signed = self.account.sign_transaction(transaction)
        tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        return Web3.to_hex(tx_hash)

    def wait_for_receipt(self, transaction_hash: str, timeout: float) -> DeploymentReceipt:
        receipt = self.w3.eth.wait_for_transaction_receipt(transaction_hash, timeout=timeout)
        if receipt.get("status") == 0:
            raise DeploymentError(f"Contract creation transaction {transaction_hash} reverted")
        return DeploymentReceipt(
            contract_address=receipt.get("contractAddress"),
            transaction_hash=Web3.to_hex(receipt["transactionHash"]),
            block_number=receipt.get("blockNumber"),
            gas_used=receipt.get("gasUsed"),
        )


class EthereumSepoliaStrategy(DeploymentStrategy):
    network = BlockchainNetwork.ETHEREUM.value
    display_name = "Ethereum Sepolia"
    chain_id = SEPOLIA_CHAIN_ID
    rpc_env_var = "ETHEREUM_SEPOLIA_RPC_URL"

    def rpc_url(self) -> str:
        return self.settings.ethereum_rpc_url


class PolygonMumbaiStrategy(DeploymentStrategy):
    network = BlockchainNetwork.POLYGON.value
    display_name = "Polygon Mumbai"
    chain_id = MUMBAI_CHAIN_ID
    rpc_env_var = "POLYGON_MUMBAI_RPC_URL"

    def rpc_url(self) -> str:
        return self.settings.polygon_rpc_url
