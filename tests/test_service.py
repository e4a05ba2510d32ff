"""
Tests for the conversion service request surface.
"""

import uuid
from pathlib import Path

import pytest

from lexchain.core import ConversionService, PersistenceError, ValidationError
from lexchain.deployment import DeploymentFailed, DeploymentSucceeded
from lexchain.models.db import Conversion
from lexchain.models.enums import BlockchainNetwork, ConversionStatus, ProcessingStep

from conftest import CONTRACT_ADDRESS, FakeNetworkClient

VALID_SOURCE = "// SPDX-License-Identifier: MIT\npragma solidity ^0.8.20;\ncontract Escrow {}\n"
NO_CONTRACT_SOURCE = "// SPDX-License-Identifier: MIT\npragma solidity ^0.8.20;\n"


@pytest.fixture
def service(session, pipeline_kwargs):
    return ConversionService(session, **pipeline_kwargs)


@pytest.fixture
def pending(service):
    """A conversion that has only been uploaded."""
    return service.repository.create_conversion("user-1", "agreement.pdf")


# =============================================================================
# DEPLOY
# =============================================================================

def test_deploy_without_contract_declaration_fails_conversion(service, session, pending):
    """Test a source missing its contract keyword never reaches the network."""
    outcome = service.deploy(NO_CONTRACT_SOURCE, "ethereum", pending.id)

    assert isinstance(outcome, DeploymentFailed)
    conversion = session.get(Conversion, pending.id)
    assert conversion.status == ConversionStatus.FAILED
    assert conversion.processing_step == ProcessingStep.DEPLOY
    assert "Missing contract declaration" in conversion.error_message
    assert conversion.deployed_contract is None
    assert FakeNetworkClient.instances == []


def test_deploy_success_records_contract(service, session, pending):
    outcome = service.deploy(VALID_SOURCE, "Ethereum", str(pending.id))

    assert isinstance(outcome, DeploymentSucceeded)
    conversion = session.get(Conversion, pending.id)
    assert conversion.status == ConversionStatus.COMPLETED
    assert conversion.processing_step == ProcessingStep.COMPLETED
    assert conversion.deployed_contract.solidity_code == VALID_SOURCE

    by_address = service.get_deployed_contract_by_address(CONTRACT_ADDRESS)
    assert by_address.conversion_id == pending.id
    assert by_address.blockchain == BlockchainNetwork.ETHEREUM
    assert by_address.explorer_url == f"https://sepolia.etherscan.io/address/{CONTRACT_ADDRESS}"
    assert service.get_deployed_contract_by_conversion(pending.id).transaction_hash == outcome.transaction_hash


def test_deploy_requires_conversion_id(service):
    with pytest.raises(ValidationError, match="conversion_id"):
        service.deploy(VALID_SOURCE, "ethereum", None)


@pytest.mark.parametrize("network", ["SOLANA", "bitcoin"])
def test_deploy_rejects_unsupported_network(service, session, pending, network):
    with pytest.raises(ValidationError):
        service.deploy(VALID_SOURCE, network, pending.id)

    assert session.get(Conversion, pending.id).status == ConversionStatus.UPLOADING


def test_deploy_rejects_blank_source(service, pending):
    with pytest.raises(ValidationError, match="solidity_code"):
        service.deploy("   ", "ethereum", pending.id)


def test_deploy_rejects_finished_conversion(service, pending):
    service.repository.mark_completed(pending.id)

    with pytest.raises(ValidationError, match="already COMPLETED"):
        service.deploy(VALID_SOURCE, "ethereum", pending.id)


def test_deploy_unknown_conversion(service):
    with pytest.raises(PersistenceError):
        service.deploy(VALID_SOURCE, "ethereum", uuid.uuid4())


# =============================================================================
# STATUS
# =============================================================================

def test_get_status_unknown_is_none(service):
    assert service.get_status(uuid.uuid4()) is None


def test_get_status_after_submission(service, upload):
    result = service.submit_document(upload, "agreement.pdf", "ethereum", deploy=True, owner_id="user-1")

    view = service.get_status(result.conversion_id)
    assert view.status == ConversionStatus.COMPLETED
    assert view.processing_step == ProcessingStep.COMPLETED
    assert view.explorer_url.endswith(CONTRACT_ADDRESS)

    data = view.to_dict()
    assert data["status"] == "COMPLETED"
    assert data["extracted_data"]["parties"] == "Alice, Bob"
    assert data["deployed_contract"]["contract_address"] == CONTRACT_ADDRESS


@pytest.mark.parametrize("finish", ["mark_completed", "mark_failed"])
def test_get_status_is_read_only(service, pending, finish):
    """Test repeated reads of a finished conversion return the same record."""
    if finish == "mark_failed":
        service.repository.mark_failed(pending.id, "boom")
    else:
        service.repository.mark_completed(pending.id)

    first = service.get_status(pending.id).to_dict()
    second = service.get_status(pending.id).to_dict()

    assert first == second
    assert first["explorer_url"] == ""


# =============================================================================
# GENERATE FROM TERMS
# =============================================================================

TERMS = {
    "type": "Rental Agreement",
    "parties": ["Landlord LLC", "Tenant"],
    "terms": {"payment": "$1,200 USD", "duration": "12 months"},
    "summary": "ignored",
}


def test_generate_from_terms_dict(service):
    artifact = service.generate_from_terms(TERMS)

    assert artifact.contract_name == "Rental_Agreement"
    assert "uint256 public paymentAmount = 1200;" in artifact.source


@pytest.mark.parametrize("payload", [
    {"type": "NDA", "parties": []},
    {"type": "  ", "parties": ["Acme"]},
    {"parties": ["Acme"]},
    {"type": "NDA"},
])
def test_generate_from_terms_rejects_invalid(service, payload):
    with pytest.raises(ValidationError):
        service.generate_from_terms(payload)


def test_generate_from_terms_advances_conversion(service, session, pending):
    service.generate_from_terms(TERMS, conversion_id=pending.id)

    conversion = session.get(Conversion, pending.id)
    assert conversion.status == ConversionStatus.GENERATING
    assert conversion.processing_step == ProcessingStep.GENERATE_CONTRACT
    assert conversion.contract_type == "Rental Agreement"
    assert conversion.extracted_data.additional_terms["strategy"] == "provided"


def test_generate_from_terms_keeps_existing_extraction(service, session, pending):
    service.generate_from_terms(TERMS, conversion_id=pending.id)
    service.generate_from_terms(dict(TERMS, parties=["Someone Else"]), conversion_id=pending.id)

    assert session.get(Conversion, pending.id).extracted_data.parties == "Landlord LLC, Tenant"


def test_generate_then_deploy(service, session, pending):
    artifact = service.generate_from_terms(TERMS, conversion_id=pending.id)

    outcome = service.deploy(artifact.source, BlockchainNetwork.POLYGON, pending.id)

    assert outcome.success
    assert session.get(Conversion, pending.id).status == ConversionStatus.COMPLETED


def test_list_networks():
    networks = ConversionService.list_networks()

    assert [n["id"] for n in networks] == ["ethereum", "polygon"]
    assert networks[0]["explorer"] == "https://sepolia.etherscan.io"


# =============================================================================
# REGISTERED UPLOADS
# =============================================================================

def test_registered_upload_is_open(service, settings, upload):
    view = service.register_upload(upload, "agreement.pdf", "polygon", owner_id="user-1")

    assert view.status == ConversionStatus.UPLOADING
    assert view.processing_step == ProcessingStep.UPLOAD
    assert view.conversion.blockchain == BlockchainNetwork.POLYGON
    assert not upload.exists()

    stored = Path(view.conversion.file_url)
    assert stored.parent == Path(settings.upload_dir)
    assert stored.name.endswith("-agreement.pdf")
    assert stored.read_bytes() == b"%PDF-1.4 sample content"


def test_registered_upload_continues_to_deployment(service, session, upload):
    """Test an upload opened by the service can be generated and deployed."""
    opened = service.register_upload(upload, "agreement.pdf", "ethereum", owner_id="user-1")

    artifact = service.generate_from_terms(TERMS, conversion_id=opened.conversion_id)
    outcome = service.deploy(artifact.source, "ethereum", opened.conversion_id)

    assert outcome.success
    view = service.get_status(opened.conversion_id)
    assert view.status == ConversionStatus.COMPLETED
    assert view.conversion.contract_type == "Rental Agreement"
    assert view.conversion.extracted_data.parties == "Landlord LLC, Tenant"
    assert view.conversion.deployed_contract.solidity_code == artifact.source
    assert view.explorer_url.endswith(CONTRACT_ADDRESS)


def test_register_rejects_non_pdf(service, session, tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("not a pdf")

    with pytest.raises(ValidationError, match="Only PDF files are allowed"):
        service.register_upload(path, "notes.txt")

    assert session.query(Conversion).count() == 0
    assert not path.exists()
