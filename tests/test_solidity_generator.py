"""
Unit tests for Solidity generation and escaping.
"""

import re
from datetime import datetime, timezone

import pytest

from lexchain.extractors import ContractTerms
from lexchain.generators import (
    SolidityGenerator,
    escape_natspec,
    escape_solidity_string,
    payment_amount,
    sanitize_identifier,
    strip_timestamp,
)

IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,99}$")


@pytest.fixture
def generator():
    return SolidityGenerator()


@pytest.fixture
def terms():
    return ContractTerms(
        type="Service Agreement",
        parties=["Alice", "Bob"],
        terms={"payment": "$2,000 USDC", "duration": "30 days", "trigger": "delivery"},
        obligations=["deliver the software", "pay within 10 days"],
    )


# =============================================================================
# IDENTIFIERS
# =============================================================================

def test_sanitize_identifier_fixture():
    assert sanitize_identifier("3 Party NDA!!") == "_3_Party_NDA"


@pytest.mark.parametrize("name", [
    "Service Agreement",
    "a" * 250,
    "!!!",
    "",
    None,
    "__weird__--name__",
    "9" * 150,
    "contract",
    "Überlassungsvertrag (Miete)",
])
def test_sanitize_identifier_always_valid(name):
    ident = sanitize_identifier(name)

    assert IDENTIFIER.match(ident)
    assert "__" not in ident
    assert len(ident) <= 100


def test_sanitize_identifier_empty_becomes_default():
    assert sanitize_identifier("!!!") == "Contract"
    assert sanitize_identifier("") == "Contract"


def test_sanitize_identifier_reserved_word():
    assert sanitize_identifier("contract") == "contractContract"
    assert sanitize_identifier("Contract") == "Contract"


@pytest.mark.parametrize("name", [
    "uint256", "int8", "bytes32", "fixed128x18", "if", "return", "emit", "true", "memory", "mapping",
])
def test_sanitize_identifier_keywords_and_sized_types(name):
    assert sanitize_identifier(name) == name + "Contract"


def test_sanitize_identifier_keeps_names_that_only_look_like_types():
    assert sanitize_identifier("Uint256") == "Uint256"
    assert sanitize_identifier("uint256 Lease") == "uint256_Lease"


# =============================================================================
# ESCAPING
# =============================================================================

def test_escape_solidity_string():
    assert escape_solidity_string('say "hi"\n') == 'say \\"hi\\"\\n'
    assert escape_solidity_string("back\\slash") == "back\\\\slash"
    assert escape_solidity_string("café") == "caf\\u00e9"
    assert escape_solidity_string("bell\x07") == "bell\\x07"


def test_escape_natspec_cannot_close_comment():
    text = escape_natspec("ends here */ contract Evil {} /* @dev owned\nnext")

    assert "*/" not in text
    assert "/*" not in text
    assert "@" not in text
    assert "\n" not in text


def test_payment_amount():
    assert payment_amount("$2,000 USDC") == 2000
    assert payment_amount("Payment: 15 EUR") == 15
    assert payment_amount("to be agreed") == 0
    assert payment_amount(None) == 0


def test_payment_amount_above_uint256_is_zero():
    assert payment_amount("Payment: 1" + "0" * 80 + " USD") == 0
    assert payment_amount(str(2 ** 256 - 1)) == 2 ** 256 - 1
    assert payment_amount(str(2 ** 256)) == 0
    assert payment_amount("9" * 5000) == 0
    assert payment_amount("0" * 100 + "42") == 42


def test_generate_with_oversized_payment(generator):
    terms = ContractTerms(type="NDA", parties=["Acme"], terms={"payment": "1" + "0" * 80 + " USD"})

    assert "uint256 public paymentAmount = 0;" in generator.generate(terms).source


# =============================================================================
# GENERATION
# =============================================================================

def test_generate_contract(generator, terms):
    artifact = generator.generate(terms)

    assert artifact.contract_name == "Service_Agreement"
    assert artifact.contract_type == "Service Agreement"
    assert "pragma solidity ^0.8.20;" in artifact.source
    assert "contract Service_Agreement {" in artifact.source
    assert "uint256 public paymentAmount = 2000;" in artifact.source
    assert 'string public partyNames = "Alice, Bob";' in artifact.source
    assert 'string public contractDuration = "30 days";' in artifact.source
    assert 'string public obligations = "deliver the software; pay within 10 days";' in artifact.source


def test_generate_uses_defaults_for_missing_terms(generator):
    artifact = generator.generate(ContractTerms(type="NDA", parties=["Acme"]))

    assert 'string public paymentTerms = "Not specified";' in artifact.source
    assert 'string public triggerCondition = "Manual trigger";' in artifact.source
    assert 'string public startDateText = "Not specified";' in artifact.source
    assert "uint256 public paymentAmount = 0;" in artifact.source


def test_generate_is_deterministic(generator, terms):
    """Test two renders differ only in the timestamp line."""
    first = generator.generate(terms, generated_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
    second = generator.generate(terms)

    assert first.source != second.source
    assert strip_timestamp(first.source) == strip_timestamp(second.source)


def test_generate_with_pinned_timestamp_is_identical(generator, terms):
    when = datetime(2024, 1, 1, tzinfo=timezone.utc)

    assert generator.generate(terms, generated_at=when).source == generator.generate(terms, generated_at=when).source


def test_generate_escapes_hostile_terms(generator):
    """Test document text cannot break out of string literals or comments."""
    terms = ContractTerms(
        type='Evil"; selfdestruct(payable(msg.sender)); //',
        parties=['Mallory "the owner"', "Eve */ contract X {} /*"],
        terms={"payment": "100 USD\"; uint x = 1;"},
    )

    artifact = generator.generate(terms)

    assert IDENTIFIER.match(artifact.contract_name)
    assert 'Mallory \\"the owner\\"' in artifact.source
    assert 'string public paymentTerms = "100 USD\\"; uint x = 1;";' in artifact.source
    assert f'string public description = "{escape_solidity_string(terms.summary)}";' in artifact.source
    for line in artifact.source.splitlines():
        if line.strip().startswith("* @notice"):
            assert "*/" not in line


def test_generate_rejects_invalid_terms(generator):
    with pytest.raises(ValueError):
        generator.generate(ContractTerms(type="NDA", parties=[]))
