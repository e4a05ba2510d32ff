"""
Unit tests for the LLM-assisted extractor and its fallback behaviour.

Uses a fake AssistedExtractionService so no request leaves the process.
"""

import json

import pytest

from lexchain.extractors import AssistedExtractor, ExtractorConfig, ExtractorFactory, PatternExtractor
from lexchain.llm import create_llm_client

from conftest import FakeLLMService, SERVICE_AGREEMENT_TEXT


@pytest.fixture
def extractor_config():
    return ExtractorConfig(llm_provider="openai", llm_api_key="test-key", llm_model="gpt-test")


@pytest.fixture
def llm_payload():
    return {
        "type": "Lease Agreement",
        "parties": ["Landlord LLC", "Tenant", "Landlord LLC"],
        "terms": {
            "payment": "1500 USD monthly",
            "duration": "12 months",
            "trigger": None,
            "startDate": "2024-01-01",
            "endDate": "null",
        },
        "obligations": ["Tenant shall keep the premises clean"],
        "summary": "ignored by the extractor",
    }


def _extractor(response="", error=None, config=None):
    service = FakeLLMService(response=response, error=error)
    return AssistedExtractor(service=service, config=config or ExtractorConfig(max_input_chars=50)), service


def test_uses_model_answer_when_valid(llm_payload):
    """Test a well-formed answer is accepted and cleaned."""
    response = "Here is the data:\n```json\n" + json.dumps(llm_payload) + "\n```"
    extractor, service = _extractor(response)

    terms = extractor.extract(SERVICE_AGREEMENT_TEXT)

    assert terms.type == "Lease Agreement"
    assert terms.parties == ["Landlord LLC", "Tenant"]
    assert terms.end_date is None
    assert terms.start_date == "2024-01-01"
    assert terms.summary == "Lease Agreement between Landlord LLC, Tenant - Payment: 1500 USD monthly - Duration: 12 months"
    assert len(service.calls) == 1


def test_only_head_of_document_is_sent():
    extractor, service = _extractor('{"type": "NDA", "parties": ["A"]}')

    extractor.extract("x" * 500)

    user_prompt = service.calls[0]["user_prompt"]
    assert user_prompt.endswith("x" * 50)
    assert "x" * 51 not in user_prompt


def test_accepts_nested_obligations():
    response = json.dumps({
        "type": "NDA",
        "parties": ["Acme"],
        "terms": {"obligations": ["Keep all information confidential"]},
    })
    extractor, _ = _extractor(response)

    terms = extractor.extract(SERVICE_AGREEMENT_TEXT)

    assert terms.obligations == ["Keep all information confidential"]


@pytest.mark.parametrize("response", [
    "I could not find any contract.",
    "{not json at all}",
    '{"type": "NDA", "parties": []}',
    '{"type": "", "parties": ["Acme"]}',
    '["type", "parties"]',
    "",
])
def test_falls_back_on_unusable_answer(response):
    """Test unusable answers are discarded in favour of pattern extraction."""
    extractor, _ = _extractor(response)

    terms = extractor.extract(SERVICE_AGREEMENT_TEXT)

    assert terms == PatternExtractor().extract(SERVICE_AGREEMENT_TEXT)
    assert terms.parties == ["Alice", "Bob"]


def test_falls_back_when_service_raises():
    extractor, _ = _extractor(error=TimeoutError("request timed out"))

    terms = extractor.extract(SERVICE_AGREEMENT_TEXT)

    assert terms.type == "Service Agreement"
    assert terms.parties == ["Alice", "Bob"]


def test_falls_back_without_service(monkeypatch):
    """Test an unconfigured provider means pattern extraction only."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    extractor = AssistedExtractor(config=ExtractorConfig(llm_provider="openai", llm_api_key=""))

    assert extractor.service is None
    assert extractor.extract(SERVICE_AGREEMENT_TEXT).parties == ["Alice", "Bob"]


def test_custom_prompt_is_forwarded():
    extractor, service = _extractor('{"type": "NDA", "parties": ["Acme"]}')

    terms = extractor.extract_with_prompt(SERVICE_AGREEMENT_TEXT, "Return JSON only.")

    assert terms.type == "NDA"
    assert service.calls[0]["system_prompt"] == "Return JSON only."


def test_custom_prompt_falls_back_identically():
    extractor, _ = _extractor("no json here")

    terms = extractor.extract_with_prompt(SERVICE_AGREEMENT_TEXT, "Return JSON only.")

    assert terms == PatternExtractor().extract(SERVICE_AGREEMENT_TEXT)


def test_factory_creates_strategies(extractor_config):
    factory = ExtractorFactory()

    assert factory.create_extractor("pattern").strategy_name == "pattern"
    assisted = factory.create_extractor("assisted", config=extractor_config, service=FakeLLMService())
    assert assisted.strategy_name == "assisted"

    with pytest.raises(ValueError, match="Unknown extractor"):
        factory.create_extractor("magic")


def test_llm_client_factory(extractor_config):
    """Test provider selection and the unconfigured case."""
    unconfigured = ExtractorConfig(llm_provider="azure", llm_endpoint="", llm_api_key="", llm_model="")
    assert create_llm_client(unconfigured) is None

    bad = ExtractorConfig(llm_provider="openai", llm_api_key="k", llm_model="m")
    bad.llm_provider = "cohere"
    with pytest.raises(ValueError, match="Unknown LLM provider"):
        create_llm_client(bad)

    assert create_llm_client(extractor_config) is not None
