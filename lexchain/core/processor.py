# lexchain/core/processor.py
"""
Core conversion pipeline.

Drives one uploaded document through
Ingest -> Parse -> Extract -> Generate -> Compile -> (optional) Deploy,
persisting (status, processing_step) before each stage. Every run ends in
COMPLETED or FAILED unless the database itself rejects a write.
"""

import logging
import uuid
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from sqlalchemy.orm import Session

from lexchain.compilers import CompilationAdapter, CompilationOutcome
from lexchain.deployment import DeploymentOutcome, DeploymentRouter
from lexchain.extractors import ContractTerms, ContractTermsExtractor, ExtractorFactory
from lexchain.generators import GeneratedArtifact, SolidityGenerator
from lexchain.models.converters import contract_terms_to_extracted_data, deployment_to_deployed_contract
from lexchain.models.db import Conversion, ConversionRepository
from lexchain.models.enums import BlockchainNetwork, ConversionStatus, ProcessingStep
from lexchain.parsers import BaseDocumentParser, DocumentParsingError, validate_pdf_upload

from ..exceptions import PersistenceError, ValidationError

logger = logging.getLogger(__name__)


class ConversionResult:
    """Result of one pipeline run."""

    def __init__(
        self,
        conversion_id,
        success: bool,
        status: ConversionStatus,
        message: str,
        terms: Optional[ContractTerms] = None,
        artifact: Optional[GeneratedArtifact] = None,
        compilation: Optional[CompilationOutcome] = None,
        deployment: Optional[DeploymentOutcome] = None,
        error: Exception = None
    ):
        self.conversion_id = conversion_id
        self.success = success
        self.status = status
        self.message = message
        self.terms = terms
        self.artifact = artifact
        self.compilation = compilation
        self.deployment = deployment
        self.error = error

    def __str__(self):
        return (
            f"ConversionResult(conversion_id={self.conversion_id}, success={self.success}, "
            f"status={self.status.value}, message='{self.message}')"
        )


class ConversionProcessor:
    """
    Core business logic for converting a legal document into a contract.
    Orchestrates parsing, term extraction, code generation, compilation,
    deployment and database persistence.
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
        """
        Initialize the conversion processor.

        Args:
            session: SQLAlchemy database session
            parser: Document parser (created from configuration if None)
            extractor: Contract terms extractor (assisted, with pattern fallback, if None)
            generator: Solidity generator (escrow template if None)
            compiler: Compilation adapter (local solc if None)
            router: Deployment router (default EVM strategies if None)
            settings: Configuration object (global config if None)
        """
        if settings is None:
            from lexchain.config import config as settings
        self.settings = settings
        self.repository = ConversionRepository(session)

        if parser is None:
            from lexchain.parsers import create_parser
            parser = create_parser(config=settings)
        self.parser = parser

        self.extractor = extractor or ExtractorFactory().create_extractor("assisted")
        self.generator = generator or SolidityGenerator()
        self.compiler = compiler or CompilationAdapter()
        self.router = router or DeploymentRouter(settings=settings, adapter=self.compiler)

    def process_document(
        self,
        file_path: Union[str, Path],
        filename: str,
        owner_id: str,
        target_network: Union[str, BlockchainNetwork] = BlockchainNetwork.ETHEREUM,
        deploy: bool = False,
        constructor_args: Optional[Sequence[Any]] = None
    ) -> ConversionResult:
        """
        Run the full pipeline for an uploaded file.

        The file at file_path is removed when this returns or raises.

        Args:
            file_path: Temporary location of the uploaded PDF
            filename: Original file name as uploaded
            owner_id: Owning user id
            target_network: Network to record and, if deploy is set, deploy to
            deploy: Whether to deploy the compiled contract
            constructor_args: Constructor arguments for deployment

        Returns:
            ConversionResult with final status and stage outputs

        Raises:
            ValidationError: If the upload or network is rejected before a
                conversion is created
            PersistenceError: If the database rejects a write
        """
        file_path = Path(file_path)
        try:
            network, data = self._ingest(file_path, filename, target_network, deploy)

            conversion = self.repository.create_conversion(
                owner_id=owner_id,
                original_filename=filename,
                file_url=str(file_path),
                blockchain=network,
            )
            logger.info(f"Processing file: {filename} (conversion {conversion.id})")

            with self.repository.lock(conversion.id):
                return self._run(conversion.id, data, network, deploy, constructor_args)
        finally:
            self._cleanup(file_path)

    def register_upload(
        self,
        file_path: Union[str, Path],
        filename: str,
        owner_id: str,
        target_network: Union[str, BlockchainNetwork] = BlockchainNetwork.ETHEREUM
    ) -> Conversion:
        """
        Keep an uploaded file and open an UPLOADING conversion for it.

        The conversion is left open so that generate-from-terms and deploy
        requests can continue it. The file is copied under the configured
        upload directory and the temporary upload is removed.

        Raises:
            ValidationError: If the upload or network is rejected
            PersistenceError: If the database rejects the write
        """
        file_path = Path(file_path)
        try:
            network, data = self._ingest(file_path, filename, target_network, deploy=False)

            stored = Path(self.settings.upload_dir) / f"{uuid.uuid4().hex}-{Path(filename).name}"
            try:
                stored.parent.mkdir(parents=True, exist_ok=True)
                stored.write_bytes(data)
            except OSError as e:
                raise ValidationError(f"Could not store uploaded file {filename}: {e}")

            try:
                conversion = self.repository.create_conversion(
                    owner_id=owner_id,
                    original_filename=filename,
                    file_url=str(stored),
                    blockchain=network,
                )
            except PersistenceError:
                self._cleanup(stored)
                raise

            logger.info(f"Registered upload {filename} as conversion {conversion.id}")
            return conversion
        finally:
            self._cleanup(file_path)

    # =========================================================================
    # STAGES
    # =========================================================================

    def _ingest(self, file_path: Path, filename: str, target_network, deploy: bool):
        """Validate the upload and network before anything is persisted."""
        try:
            network = BlockchainNetwork.parse(target_network)
        except ValueError as e:
            raise ValidationError(str(e))

        if deploy and not self.router.supports(network):
            raise ValidationError(f"Unsupported network for deployment: {network.value}")

        try:
            data = file_path.read_bytes()
        except OSError as e:
            raise ValidationError(f"Could not read uploaded file {filename}: {e}")

        try:
            validate_pdf_upload(filename, data, self.settings.max_upload_bytes)
        except DocumentParsingError as e:
            raise ValidationError(str(e))

        return network, data

    def _run(
        self,
        conversion_id,
        data: bytes,
        network: BlockchainNetwork,
        deploy: bool,
        constructor_args: Optional[Sequence[Any]]
    ) -> ConversionResult:
        terms = artifact = compilation = deployment = None
        try:
            # Step 1: Parse document
            self.repository.advance(conversion_id, ConversionStatus.PARSING, ProcessingStep.PARSE_PDF)
            parsed = self.parser.parse(data)
            if not parsed.content.strip():
                return self._fail(conversion_id, "No text could be extracted from the document")
            logger.info(f"Extracted {len(parsed.content)} characters from {parsed.page_count} pages")

            # Step 2: Extract contract terms
            self.repository.advance(conversion_id, ConversionStatus.EXTRACTING, ProcessingStep.EXTRACT_DATA)
            terms = self.extractor.extract(parsed.content)
            if not terms.is_valid():
                return self._fail(conversion_id, "Could not identify contract parties in the document", terms=terms)

            self.repository.update_conversion(conversion_id, contract_type=terms.type)
            self.repository.create_extracted_data(
                conversion_id,
                contract_terms_to_extracted_data(
                    terms,
                    strategy=self.extractor.strategy_name,
                    page_count=parsed.page_count,
                ),
            )

            # Step 3: Generate and compile
            self.repository.advance(conversion_id, ConversionStatus.GENERATING, ProcessingStep.GENERATE_CONTRACT)
            artifact = self.generator.generate(terms)
            compilation = self.compiler.compile(artifact.source)
            if not compilation.success:
                return self._fail(conversion_id, compilation.reason, terms=terms, artifact=artifact,
                                  compilation=compilation)

            # Step 4: Deploy
            if deploy:
                self.repository.advance(conversion_id, ConversionStatus.DEPLOYING, ProcessingStep.DEPLOY)
                deployment = self.router.deploy(artifact.source, network, constructor_args)
                if not deployment.success:
                    return self._fail(conversion_id, deployment.reason, terms=terms, artifact=artifact,
                                      compilation=compilation, deployment=deployment)
                self.repository.create_deployed_contract(
                    conversion_id,
                    deployment_to_deployed_contract(deployment, artifact.source, self.compiler.compiler_version),
                )

        except PersistenceError:
            raise
        except Exception as e:
            logger.error(f"Error processing conversion {conversion_id}: {str(e)}", exc_info=True)
            return self._fail(conversion_id, f"Error processing document: {str(e)}", terms=terms,
                              artifact=artifact, compilation=compilation, deployment=deployment, error=e)

        self.repository.mark_completed(conversion_id)
        return ConversionResult(
            conversion_id=conversion_id,
            success=True,
            status=ConversionStatus.COMPLETED,
            message="Contract deployed successfully" if deploy else "Contract generated successfully",
            terms=terms,
            artifact=artifact,
            compilation=compilation,
            deployment=deployment,
        )

    def _fail(self, conversion_id, message: str, **outputs) -> ConversionResult:
        self.repository.mark_failed(conversion_id, message)
        return ConversionResult(
            conversion_id=conversion_id,
            success=False,
            status=ConversionStatus.FAILED,
            message=message,
            **outputs
        )

    @staticmethod
    def _cleanup(file_path: Path):
        try:
            file_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove temporary upload {file_path}: {e}")
