"""Factory for creating LLM clients based on configuration."""

import logging
from typing import Optional

from .client import AssistedExtractionService, AzureLLMClient, OpenAIClient

logger = logging.getLogger(__name__)


def create_llm_client(config) -> Optional[AssistedExtractionService]:
    """
    Create LLM client based on config.llm_provider.

    Returns None when the selected provider is not configured, which callers
    treat as "assisted extraction unavailable".
    """
    provider = config.llm_provider.lower()

    if provider == "azure":
        if not all([config.llm_endpoint, config.llm_api_key, config.llm_model]):
            logger.warning("Azure provider requires: llm_endpoint, llm_api_key, llm_model")
            return None
        return AzureLLMClient(
            azure_endpoint=config.llm_endpoint,
            api_key=config.llm_api_key,
            api_version=config.llm_api_version,
            model=config.llm_model,
            timeout=config.request_timeout,
        )

    elif provider == "openai":
        if not all([config.llm_api_key, config.llm_model]):
            logger.warning("OpenAI provider requires: llm_api_key, llm_model")
            return None
        return OpenAIClient(
            api_key=config.llm_api_key,
            model=config.llm_model,
            timeout=config.request_timeout,
        )

    else:
        raise ValueError(
            f"Unknown LLM provider: {provider}. Use 'azure' or 'openai'"
        )
