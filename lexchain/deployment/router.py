"""Network-keyed registry of deployment strategies."""

import logging
from typing import Any, Dict, Optional, Sequence

from .base import DeploymentFailed, DeploymentOutcome, DeploymentStrategy
from .evm import EthereumSepoliaStrategy, PolygonMumbaiStrategy

logger = logging.getLogger(__name__)


class DeploymentRouter:
    """
    Route a deployment to the strategy registered for a network name.

    Lookup is case-insensitive: "ethereum", "ETHEREUM" and
    BlockchainNetwork.ETHEREUM all select the same strategy.

    Example usage:
        router = DeploymentRouter()
        outcome = router.deploy(source, "polygon")
    """

    _STRATEGIES = {
        "ethereum": EthereumSepoliaStrategy,
        "polygon": PolygonMumbaiStrategy,
    }

    def __init__(self, strategies: Optional[Dict[str, DeploymentStrategy]] = None, **strategy_kwargs):
        """
        Args:
            strategies: Prebuilt strategies keyed by network name; defaults to
                one instance of each registered strategy class
            **strategy_kwargs: Passed to each default strategy (settings,
                adapter, client_factory)
        """
        if strategies is None:
            strategies = {name: cls(**strategy_kwargs) for name, cls in self._STRATEGIES.items()}
        self._strategies = {name.lower(): strategy for name, strategy in strategies.items()}

    @staticmethod
    def _key(network) -> str:
        return str(getattr(network, "value", network) or "").strip().lower()

    @property
    def networks(self):
        return sorted(self._strategies)

    def get_strategy(self, network) -> Optional[DeploymentStrategy]:
        return self._strategies.get(self._key(network))

    def supports(self, network) -> bool:
        return self.get_strategy(network) is not None

    def deploy(
        self,
        source: str,
        network,
        constructor_args: Optional[Sequence[Any]] = None,
    ) -> DeploymentOutcome:
        strategy = self.get_strategy(network)
        if strategy is None:
            name = getattr(network, "value", network)
            logger.error(f"Unsupported network: {name}")
            return DeploymentFailed(reason=f"Unsupported network: {name}", network=str(name))

        logger.info(f"Starting deployment to {strategy.display_name}...")
        return strategy.deploy(source, constructor_args)
