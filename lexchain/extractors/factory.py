"""
Factory for creating extractor instances.
"""

from typing import Optional
import logging

from lexchain.llm import AssistedExtractionService

from .base import ContractTermsExtractor, ExtractorConfig
from .pattern import PatternExtractor
from .assisted import AssistedExtractor

logger = logging.getLogger(__name__)


class ExtractorFactory:
    """
    Factory for creating term extractors by strategy name.

    Usage:
        factory = ExtractorFactory()
        extractor = factory.create_extractor("assisted")
        terms = extractor.extract(document_text)
    """

    _EXTRACTORS = {
        "pattern": PatternExtractor,
        "assisted": AssistedExtractor,
    }

    def create_extractor(
        self,
        strategy: str = "assisted",
        config: Optional[ExtractorConfig] = None,
        service: Optional[AssistedExtractionService] = None
    ) -> ContractTermsExtractor:
        """Create a contract terms extractor."""
        if strategy not in self._EXTRACTORS:
            raise ValueError(
                f"Unknown extractor: {strategy}. "
                f"Available: {list(self._EXTRACTORS.keys())}"
            )

        logger.debug(f"Creating extractor: {strategy}")

        if strategy == "pattern":
            return PatternExtractor()

        return AssistedExtractor(service=service, config=config or ExtractorConfig())
