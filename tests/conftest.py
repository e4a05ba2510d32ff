"""
Pytest configuration and shared fixtures.

Everything external is faked: the database is in-memory SQLite, and the
language model, solc, the document parser and the network client are
replaced by small in-process doubles.
"""

from types import SimpleNamespace

import pytest

from lexchain.compilers import BaseSolidityCompiler, CompilationAdapter
from lexchain.deployment import DeploymentReceipt, DeploymentRouter, NetworkClient
from lexchain.extractors import PatternExtractor
from lexchain.llm import AssistedExtractionService
from lexchain.models.db import Base, create_db_engine, get_session_maker
from lexchain.parsers import BaseDocumentParser, ParsedDocument


SERVICE_AGREEMENT_TEXT = (
    "This Service Agreement is made between Alice and Bob. "
    "Payment of $2,000 USDC is due upon delivery. "
    "The term of this agreement is for 30 days."
)

DEPLOYER = "0x1111111111111111111111111111111111111111"
CONTRACT_ADDRESS = "0x2222222222222222222222222222222222222222"
TX_HASH = "0x" + "ab" * 32

ESCROW_ABI = [
    {
        "type": "constructor",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "_parties", "type": "address[]", "internalType": "address[]"}],
    },
    {
        "type": "function",
        "name": "getStatus",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string", "internalType": "string"}],
    },
]


def solc_output(contract_name="ServiceAgreement", errors=None, bytecode="6080604052348015600f57600080fd5b50"):
    """Standard-JSON output shaped like solc's for a single contract."""
    return {
        "errors": errors or [],
        "contracts": {
            "Contract.sol": {
                contract_name: {
                    "abi": ESCROW_ABI,
                    "evm": {"bytecode": {"object": bytecode}},
                }
            }
        },
        "sources": {"Contract.sol": {"id": 0}},
    }


# =============================================================================
# FAKES
# =============================================================================

class FakeLLMService(AssistedExtractionService):
    """Returns a canned completion, or raises the given exception."""

    def __init__(self, response="", error=None):
        self.response = response
        self.error = error
        self.calls = []

    def complete(self, system_prompt, user_prompt, temperature=0.3, max_tokens=None):
        self.calls.append({"system_prompt": system_prompt, "user_prompt": user_prompt})
        if self.error:
            raise self.error
        return self.response


class FakeCompiler(BaseSolidityCompiler):
    """Returns canned standard-JSON output and records every input."""

    def __init__(self, output=None, error=None):
        self.output = output if output is not None else solc_output()
        self.error = error
        self.inputs = []

    @property
    def version(self):
        return "0.8.20"

    def compile_standard(self, input_data):
        self.inputs.append(input_data)
        if self.error:
            raise self.error
        return self.output


class FakeNetworkClient(NetworkClient):
    """Records submissions and confirms them with a fixed receipt."""

    instances = []

    def __init__(self, rpc_url, private_key, chain_id, timeout=60):
        self.rpc_url = rpc_url
        self.private_key = private_key
        self.chain_id = chain_id
        self.timeout = timeout
        self.submitted_args = None
        self.receipt_timeout = None
        FakeNetworkClient.instances.append(self)

    @property
    def address(self):
        return DEPLOYER

    def build_factory(self, abi, bytecode):
        return {"abi": abi, "bytecode": bytecode}

    def submit(self, factory, constructor_args):
        self.submitted_args = list(constructor_args)
        return TX_HASH

    def wait_for_receipt(self, transaction_hash, timeout):
        self.receipt_timeout = timeout
        return DeploymentReceipt(
            contract_address=CONTRACT_ADDRESS,
            transaction_hash=transaction_hash,
            block_number=123,
            gas_used=456789,
        )


class FakeParser(BaseDocumentParser):
    """Ignores the bytes and returns fixed text."""

    def __init__(self, text=SERVICE_AGREEMENT_TEXT, page_count=1):
        self.text = text
        self.page_count = page_count

    def parse(self, file_content):
        return ParsedDocument(content=self.text, format="plain_text", page_count=self.page_count)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def settings(tmp_path):
    """Configuration double with every deployment setting present."""
    return SimpleNamespace(
        ethereum_rpc_url="https://sepolia.example/rpc",
        polygon_rpc_url="https://mumbai.example/rpc",
        deployer_private_key="0x" + "11" * 32,
        request_timeout=5.0,
        deploy_confirm_timeout=30.0,
        max_upload_bytes=10 * 1024 * 1024,
        upload_dir=str(tmp_path),
    )


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    session = get_session_maker(engine)()
    yield session
    session.close()


@pytest.fixture
def fake_compiler():
    return FakeCompiler()


@pytest.fixture
def adapter(fake_compiler):
    return CompilationAdapter(fake_compiler)


@pytest.fixture
def router(settings, adapter):
    FakeNetworkClient.instances = []
    return DeploymentRouter(settings=settings, adapter=adapter, client_factory=FakeNetworkClient)


@pytest.fixture
def pipeline_kwargs(settings, adapter, router):
    """Collaborators for ConversionProcessor / ConversionService."""
    return {
        "parser": FakeParser(),
        "extractor": PatternExtractor(),
        "compiler": adapter,
        "router": router,
        "settings": settings,
    }


@pytest.fixture
def upload(tmp_path):
    """A temporary uploaded PDF file."""
    path = tmp_path / "upload-1234.pdf"
    path.write_bytes(b"%PDF-1.4 sample content")
    return path
