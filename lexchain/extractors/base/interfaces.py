"""
Base interfaces for extraction strategies.

Every strategy takes document text and returns ContractTerms, enabling the
Strategy pattern for swappable extraction approaches.
"""

from abc import ABC, abstractmethod
from .models import ContractTerms


class ContractTermsExtractor(ABC):
    """ Base class for all contract term extractors. """

    @abstractmethod
    def extract(self, document_text: str) -> ContractTerms:
        """ Extract contract terms from document text. Must not raise. """
        pass

    @property
    @abstractmethod
    def strategy_name(self) -> str:
        pass
