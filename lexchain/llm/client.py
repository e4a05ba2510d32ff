"""LLM client abstraction supporting Azure OpenAI and OpenAI."""

from abc import ABC, abstractmethod
from typing import List, Optional
from openai import AzureOpenAI, OpenAI


class AssistedExtractionService(ABC):
    """
    Capability used by the assisted extractor to obtain a model completion.

    Implementations return the raw text of the first completion choice.
    """

    @abstractmethod
    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: Optional[int] = None,
    ) -> str:
        pass


def _first_choice_text(response) -> str:
    if not response.choices:
        return ""
    return response.choices[0].message.content or ""


def _messages(system_prompt: str, user_prompt: str) -> List[dict]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]


class AzureLLMClient(AssistedExtractionService):
    """Azure OpenAI client wrapper."""

    def __init__(
        self,
        azure_endpoint: str,
        api_key: str,
        api_version: str,
        model: str,
        timeout: Optional[float] = None,
    ):
        self.model = model
        self.client = AzureOpenAI(
            azure_endpoint=azure_endpoint,
            api_key=api_key,
            api_version=api_version,
            timeout=timeout,
            max_retries=0,
        )

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: Optional[int] = None,
    ) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=_messages(system_prompt, user_prompt),
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return _first_choice_text(response)


class OpenAIClient(AssistedExtractionService):
    """OpenAI (direct) client wrapper."""

    def __init__(self, api_key: str, model: str, timeout: Optional[float] = None):
        self.model = model
        self.client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: Optional[int] = None,
    ) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=_messages(system_prompt, user_prompt),
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return _first_choice_text(response)
