"""
LLM-assisted contract term extractor.

Sends the head of the document to a language model and accepts the answer
only when it is a well-formed term set. Anything else (no service, a
failed request, unparsable or incomplete output) is discarded and the
pattern extractor runs instead. Results are never merged.

Approach:
1. Skip to pattern extraction when no service is configured
2. One completion request over the first N characters
3. Locate the first balanced JSON object and validate it
4. Recompute the summary locally
"""

import json
import logging
from typing import Optional

from lexchain.llm import AssistedExtractionService, create_llm_client

from ..base import (
    ContractTermsExtractor,
    ContractTerms,
    ExtractorConfig,
    normalize_text,
    find_json_object,
)
from ..pattern import PatternExtractor

logger = logging.getLogger(__name__)


# =============================================================================
# PROMPT
# =============================================================================

SYSTEM_PROMPT = """You are a legal contract analyst. Extract structured information from contracts.
Return ONLY valid JSON with this structure:
{
  "type": "Service Agreement|Purchase Agreement|Employment Contract|Lease Agreement|NDA|Loan Agreement|Other",
  "parties": ["Party 1", "Party 2"],
  "terms": {
    "payment": "2000 USDC or amount",
    "duration": "10 days or time period",
    "trigger": "after delivery or trigger condition",
    "startDate": "date or null",
    "endDate": "date or null"
  },
  "obligations": ["obligation 1", "obligation 2"]
}"""


# =============================================================================
# ASSISTED EXTRACTOR
# =============================================================================

class AssistedExtractor(ContractTermsExtractor):
    """
    LLM-backed extraction with guaranteed pattern fallback.

    The service is injected so tests can substitute a fake; when none is
    given one is built from the config, and an unconfigured provider simply
    means every call falls back.
    """

    def __init__(
        self,
        service: Optional[AssistedExtractionService] = None,
        config: Optional[ExtractorConfig] = None,
        fallback: Optional[ContractTermsExtractor] = None,
    ):
        """Initialize the extractor."""
        self.config = config or ExtractorConfig()
        self.fallback = fallback or PatternExtractor()

        if service is None and self.config.validate():
            service = create_llm_client(self.config)
        elif service is None:
            logger.warning("LLM configuration incomplete. Using pattern extraction only.")

        self.service = service

    @property
    def strategy_name(self) -> str:
        """Return the name of this strategy."""
        return "assisted"

    def extract(self, document_text: str) -> ContractTerms:
        return self.extract_with_prompt(document_text, SYSTEM_PROMPT)

    def extract_with_prompt(self, document_text: str, system_prompt: str) -> ContractTerms:
        """
        Extract terms using a caller-supplied system prompt.

        Args:
            document_text: Raw or normalized document text
            system_prompt: Instruction describing the JSON output schema

        Returns:
            ContractTerms from the model, or from the fallback extractor
        """
        if self.service is None:
            return self.fallback.extract(document_text)

        text = normalize_text(document_text)
        if not text:
            logger.warning("Empty document text provided")
            return self.fallback.extract(document_text)

        try:
            content = self.service.complete(
                system_prompt=system_prompt,
                user_prompt=f"Extract from this text:\n\n{text[:self.config.max_input_chars]}",
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        except Exception as e:
            logger.error(f"LLM extraction request failed: {e}")
            return self.fallback.extract(document_text)

        terms = self._parse_response(content)
        if terms is None:
            return self.fallback.extract(document_text)

        logger.info(f"Assisted extraction: type={terms.type!r}, parties={len(terms.parties)}")
        return terms

    def _parse_response(self, content: Optional[str]) -> Optional[ContractTerms]:
        """Return validated terms from a model response, or None."""
        raw_json = find_json_object(content or "")
        if raw_json is None:
            logger.warning("No JSON object in LLM response, falling back")
            return None

        try:
            data = json.loads(raw_json)
            terms = ContractTerms.from_dict(data)
        except (ValueError, TypeError) as e:
            logger.warning(f"Unparsable LLM response, falling back: {e}")
            return None

        if not terms.is_valid():
            logger.warning("LLM response missing type or parties, falling back")
            return None

        return terms
