from .llm_extractor import AssistedExtractor, SYSTEM_PROMPT

__all__ = ["AssistedExtractor", "SYSTEM_PROMPT"]
