"""
Configuration classes for extraction strategies.

This module defines configuration dataclasses that allow customization
of extractor behavior without modifying code.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class ExtractorConfig:
    """
    Configuration for term extractors.

    Contains LLM connection details and the request budget for the assisted
    strategy. Unset connection fields are filled from the environment for the
    selected provider.
    """
    # LLM Provider Selection
    llm_provider: Optional[str] = None  # "azure" or "openai"

    # LLM Configuration (provider-agnostic)
    llm_api_key: Optional[str] = None
    llm_model: Optional[str] = None  # Deployment (Azure) or model (OpenAI)

    # Azure-specific
    llm_endpoint: Optional[str] = None
    llm_api_version: str = "2024-08-01-preview"

    # Generation Parameters
    temperature: float = 0.3
    max_tokens: Optional[int] = 1000

    # Only the head of the document is sent to the model
    max_input_chars: int = 2000

    # Seconds before an LLM request is abandoned
    request_timeout: float = 60.0

    def __post_init__(self):
        """Load from environment based on provider."""
        if self.llm_provider is None:
            self.llm_provider = os.getenv("LLM_PROVIDER", "openai").lower()
        else:
            self.llm_provider = self.llm_provider.lower()

        if self.llm_provider == "azure":
            if self.llm_endpoint is None:
                self.llm_endpoint = os.getenv("OPENAI_ENDPOINT")
            if self.llm_api_key is None:
                self.llm_api_key = os.getenv("OPENAI_KEY")
            if self.llm_model is None:
                self.llm_model = os.getenv("OPENAI_DEPLOYMENT")

        elif self.llm_provider == "openai":
            if self.llm_api_key is None:
                self.llm_api_key = os.getenv("OPENAI_API_KEY")
            if self.llm_model is None:
                self.llm_model = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")

        timeout = os.getenv("REQUEST_TIMEOUT_SECONDS")
        if timeout:
            self.request_timeout = float(timeout)

    def validate(self) -> bool:
        """Validate that required configuration is present based on provider."""
        if self.llm_provider == "azure":
            return all([self.llm_endpoint, self.llm_api_key, self.llm_model])
        elif self.llm_provider == "openai":
            return all([self.llm_api_key, self.llm_model])
        return False
