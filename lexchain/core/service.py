# lexchain/core/service.py
"""
Conversion service: the request surface over the pipeline.

Each public method corresponds to one request: submit a document, register
an upload to be continued later, read its status, generate a contract from
caller-supplied terms, and deploy an already generated contract against an
open conversion.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from lexchain.compilers import CompilationAdapter
from lexchain.deployment import DeploymentFailed, DeploymentOutcome, DeploymentRouter, list_networks
from lexchain.extractors import ContractTerms, ContractTermsExtractor
from lexchain.generators import GeneratedArtifact, SolidityGenerator
from lexchain.models.converters import contract_terms_to_extracted_data, deployment_to_deployed_contract
from lexchain.models.db import ConversionRepository
from lexchain.models.enums import BlockchainNetwork, ConversionStatus, ProcessingStep
from lexchain.models.pydantic import (
    ContractTermsPayload,
    ConversionResponse,
    DeployedContractResponse,
    DeployRequest,
)
from lexchain.parsers import BaseDocumentParser

from ..exceptions import ValidationError
from .processor import ConversionProcessor, ConversionResult

logger = logging.getLogger(__name__)


def _schema_message(error: SchemaValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in e['loc'])}: {e['msg']}" for e in error.errors()
    )


class ConversionStatusView:
    """Read-only snapshot of a conversion plus its block explorer link."""

    def __init__(self, conversion: ConversionResponse):
        self.conversion = conversion

    @property
    def conversion_id(self):
        return self.conversion.id

    @property
    def status(self) -> ConversionStatus:
        return self.conversion.status

    @property
    def processing_step(self) -> ProcessingStep:
        return self.conversion.processing_step

    @property
    def explorer_url(self) -> str:
        deployed = self.conversion.deployed_contract
        return deployed.explorer_url if deployed else ""

    def to_dict(self) -> Dict[str, Any]:
        data = self.conversion.model_dump(mode="json")
        data["explorer_url"] = self.explorer_url
        return data


class ConversionService:
    """
    Entry point for callers of the conversion pipeline.

    Example usage:
        service = ConversionService(session)
        result = service.submit_document("/tmp/upload.pdf", "nda.pdf", "ethereum", deploy=False, owner_id="u1")
        view = service.get_status(result.conversion_id)

        opened = service.register_upload("/tmp/upload.pdf", "nda.pdf", "polygon")
        artifact = service.generate_from_terms(terms, conversion_id=opened.conversion_id)
        outcome = service.deploy(artifact.source, "polygon", opened.conversion_id)
    """

    def __init__(
        self,
        session: Session,
        parser: BaseDocumentParser = None,
        extractor: ContractTermsExtractor = None,
        generator: SolidityGenerator = None,
        compiler: CompilationAdapter = None,
        router: DeploymentRouter = None,
        settings=None
    ):
        self.processor = ConversionProcessor(
            session,
            parser=parser,
            extractor=extractor,
            generator=generator,
            compiler=compiler,
            router=router,
            settings=settings,
        )
        self.repository = self.processor.repository

    @property
    def generator(self) -> SolidityGenerator:
        return self.processor.generator

    @property
    def compiler(self) -> CompilationAdapter:
        return self.processor.compiler

    @property
    def router(self) -> DeploymentRouter:
        return self.processor.router

    # =========================================================================
    # REQUESTS
    # =========================================================================

    def submit_document(
        self,
        file_path: Union[str, Path],
        filename: str,
        target_network: Union[str, BlockchainNetwork] = BlockchainNetwork.ETHEREUM,
        deploy: bool = False,
        owner_id: str = "anonymous",
        constructor_args: Optional[Sequence[Any]] = None
    ) -> ConversionResult:
        """Run an uploaded file through the pipeline. The file is removed afterwards."""
        return self.processor.process_document(
            file_path,
            filename,
            owner_id=owner_id,
            target_network=target_network,
            deploy=deploy,
            constructor_args=constructor_args,
        )

    def register_upload(
        self,
        file_path: Union[str, Path],
        filename: str,
        target_network: Union[str, BlockchainNetwork] = BlockchainNetwork.ETHEREUM,
        owner_id: str = "anonymous"
    ) -> ConversionStatusView:
        """
        Open an UPLOADING conversion for a file without running the pipeline.

        Follow with generate_from_terms(..., conversion_id=...) and deploy(...)
        to carry it to COMPLETED.
        """
        conversion = self.processor.register_upload(
            file_path, filename, owner_id=owner_id, target_network=target_network
        )
        return ConversionStatusView(ConversionResponse.model_validate(conversion))

    def get_status(self, conversion_id) -> Optional[ConversionStatusView]:
        """Current record with children and explorer link, or None if unknown. Never writes."""
        conversion = self.repository.get_conversion(conversion_id)
        if conversion is None:
            return None
        return ConversionStatusView(ConversionResponse.model_validate(conversion))

    def generate_from_terms(
        self,
        terms: Union[ContractTerms, Dict[str, Any]],
        conversion_id=None
    ) -> GeneratedArtifact:
        """
        Render a contract from caller-supplied terms.

        When a conversion id is given, the conversion is advanced to
        GENERATING / GENERATE_CONTRACT and the terms are stored if it has none.

        Raises:
            ValidationError: If the terms lack a type or parties, or the
                conversion is already finished
            PersistenceError: If the conversion does not exist
        """
        if not isinstance(terms, ContractTerms):
            try:
                terms = ContractTermsPayload.model_validate(terms).to_terms()
            except SchemaValidationError as e:
                raise ValidationError(f"Invalid contract terms: {_schema_message(e)}")
            except ValueError as e:
                raise ValidationError(f"Invalid contract terms: {e}")

        if not terms.is_valid():
            raise ValidationError("Contract terms must include type and at least one party")

        if conversion_id is None:
            return self.generator.generate(terms)

        with self.repository.lock(conversion_id):
            conversion = self._require_open(conversion_id)
            self.repository.advance(conversion.id, ConversionStatus.GENERATING, ProcessingStep.GENERATE_CONTRACT)
            self.repository.update_conversion(conversion.id, contract_type=terms.type)
            if conversion.extracted_data is None:
                self.repository.create_extracted_data(
                    conversion.id, contract_terms_to_extracted_data(terms, strategy="provided")
                )
            return self.generator.generate(terms)

    def deploy(
        self,
        source: str,
        network: Union[str, BlockchainNetwork],
        conversion_id,
        constructor_args: Optional[Sequence[Any]] = None
    ) -> DeploymentOutcome:
        """
        Compile and deploy a contract and attach the result to a conversion.

        Compilation and deployment failures mark the conversion FAILED and are
        returned as DeploymentFailed.

        Raises:
            ValidationError: If the source is empty, the network unsupported,
                the conversion id missing, or the conversion already finished
            PersistenceError: If the conversion does not exist
        """
        if conversion_id is None:
            raise ValidationError("conversion_id is required to record a deployment")

        try:
            request = DeployRequest(
                solidity_code=source,
                blockchain=network,
                conversion_id=conversion_id,
                constructor_args=constructor_args,
            )
        except SchemaValidationError as e:
            raise ValidationError(f"Invalid deploy request: {_schema_message(e)}")

        if not self.router.supports(request.blockchain):
            raise ValidationError(f"Unsupported network for deployment: {request.blockchain.value}")

        with self.repository.lock(request.conversion_id):
            conversion = self._require_open(request.conversion_id)
            self.repository.advance(conversion.id, ConversionStatus.DEPLOYING, ProcessingStep.DEPLOY)

            outcome = self.router.deploy(request.solidity_code, request.blockchain, request.constructor_args)
            if isinstance(outcome, DeploymentFailed):
                self.repository.mark_failed(conversion.id, outcome.reason)
                return outcome

            self.repository.create_deployed_contract(
                conversion.id,
                deployment_to_deployed_contract(outcome, request.solidity_code, self.compiler.compiler_version),
            )
            self.repository.mark_completed(conversion.id)
            return outcome

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def get_deployed_contract_by_address(self, address: str) -> Optional[DeployedContractResponse]:
        deployed = self.repository.get_deployed_contract_by_address(address)
        return DeployedContractResponse.model_validate(deployed) if deployed else None

    def get_deployed_contract_by_conversion(self, conversion_id) -> Optional[DeployedContractResponse]:
        deployed = self.repository.get_deployed_contract_by_conversion(conversion_id)
        return DeployedContractResponse.model_validate(deployed) if deployed else None

    @staticmethod
    def list_networks() -> List[Dict[str, Any]]:
        return [network.to_dict() for network in list_networks()]

    def _require_open(self, conversion_id):
        conversion = self.repository.require(conversion_id)
        if conversion.is_terminal:
            raise ValidationError(
                f"Conversion {conversion.id} is already {conversion.status.value}"
            )
        return conversion
