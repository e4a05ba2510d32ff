"""
Conversion repository.

All reads and writes of conversions and their child rows go through here.
Each write commits immediately. Writes the schema or the state machine does
not allow raise PersistenceError and leave the session rolled back.
"""

import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Dict, Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from lexchain.exceptions import PersistenceError
from .conversion import Conversion, ExtractedData, DeployedContract
from ..enums import ConversionStatus, ProcessingStep, BlockchainNetwork

logger = logging.getLogger(__name__)

IdLike = Union[uuid.UUID, str]


class _RecordLock:
    """A lock plus the number of callers holding or waiting on it."""

    def __init__(self):
        self.lock = threading.Lock()
        self.holders = 0


# Entries exist only while some caller holds or waits on them
_locks: Dict[uuid.UUID, _RecordLock] = {}
_locks_guard = threading.Lock()


def _as_uuid(conversion_id: IdLike) -> uuid.UUID:
    if isinstance(conversion_id, uuid.UUID):
        return conversion_id
    try:
        return uuid.UUID(str(conversion_id))
    except ValueError:
        raise PersistenceError(f"Invalid conversion id: {conversion_id}")


class ConversionRepository:
    """
    Persistence boundary for the pipeline.

    Example usage:
        repo = ConversionRepository(session)
        conversion = repo.create_conversion("user-1", "nda.pdf")
        repo.update_conversion(conversion.id, ConversionStatus.PARSING, ProcessingStep.PARSE_PDF)
    """

    def __init__(self, session: Session):
        self.session = session

    # =========================================================================
    # LOCKING
    # =========================================================================

    @staticmethod
    @contextmanager
    def lock(conversion_id: IdLike):
        """Hold the single-writer lock for one conversion."""
        key = _as_uuid(conversion_id)
        with _locks_guard:
            entry = _locks.setdefault(key, _RecordLock())
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with _locks_guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del _locks[key]

    # =========================================================================
    # WRITES
    # =========================================================================

    def _commit(self, action: str):
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise PersistenceError(f"Could not {action}: {e.orig}") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise PersistenceError(f"Could not {action}: {e}") from e

    def create_conversion(
        self,
        owner_id: str,
        original_filename: str,
        file_url: Optional[str] = None,
        blockchain: Optional[BlockchainNetwork] = None,
    ) -> Conversion:
        conversion = Conversion(
            user_id=owner_id,
            original_filename=original_filename,
            file_url=file_url,
            blockchain=blockchain,
            status=ConversionStatus.UPLOADING,
            processing_step=ProcessingStep.UPLOAD,
        )
        self.session.add(conversion)
        self._commit("create conversion")
        logger.debug(f"Created conversion {conversion.id} for {original_filename}")
        return conversion

    def require(self, conversion_id: IdLike) -> Conversion:
        conversion = self.session.get(Conversion, _as_uuid(conversion_id))
        if conversion is None:
            raise PersistenceError(f"Conversion {conversion_id} not found")
        return conversion

    def update_conversion(
        self,
        conversion_id: IdLike,
        status: Optional[ConversionStatus] = None,
        processing_step: Optional[ProcessingStep] = None,
        error_message: Optional[str] = None,
        contract_type: Optional[str] = None,
    ) -> Conversion:
        """
        Update status, step, error message or contract type.

        Raises:
            PersistenceError: If the conversion does not exist or is already
                COMPLETED or FAILED
        """
        conversion = self.require(conversion_id)
        if conversion.is_terminal:
            raise PersistenceError(
                f"Conversion {conversion.id} is {conversion.status.value} and can no longer change"
            )

        if status is not None:
            conversion.status = status
        if processing_step is not None:
            conversion.processing_step = processing_step
        if error_message is not None:
            conversion.error_message = error_message
        if contract_type is not None:
            conversion.contract_type = contract_type

        self._commit(f"update conversion {conversion.id}")
        return conversion

    def advance(self, conversion_id: IdLike, status: ConversionStatus, step: ProcessingStep) -> Conversion:
        logger.info(f"Conversion {conversion_id}: {status.value} / {step.value}")
        return self.update_conversion(conversion_id, status=status, processing_step=step)

    def mark_failed(self, conversion_id: IdLike, message: str) -> Conversion:
        logger.error(f"Conversion {conversion_id} failed: {message}")
        return self.update_conversion(conversion_id, status=ConversionStatus.FAILED, error_message=message)

    def mark_completed(self, conversion_id: IdLike) -> Conversion:
        return self.advance(conversion_id, ConversionStatus.COMPLETED, ProcessingStep.COMPLETED)

    def create_extracted_data(self, conversion_id: IdLike, extracted: ExtractedData) -> ExtractedData:
        """Attach extracted terms. A conversion holds at most one row."""
        conversion = self.require(conversion_id)
        if conversion.extracted_data is not None:
            raise PersistenceError(f"Conversion {conversion.id} already has extracted data")
        extracted.conversion_id = conversion.id
        self.session.add(extracted)
        self._commit(f"store extracted data for conversion {conversion.id}")
        self.session.expire(conversion, ["extracted_data"])
        return extracted

    def create_deployed_contract(self, conversion_id: IdLike, deployed: DeployedContract) -> DeployedContract:
        """Attach a deployment record. A conversion holds at most one row."""
        conversion = self.require(conversion_id)
        if conversion.deployed_contract is not None:
            raise PersistenceError(f"Conversion {conversion.id} already has a deployed contract")
        deployed.conversion_id = conversion.id
        self.session.add(deployed)
        self._commit(f"store deployed contract for conversion {conversion.id}")
        self.session.expire(conversion, ["deployed_contract"])
        return deployed

    # =========================================================================
    # READS
    # =========================================================================

    def get_conversion(self, conversion_id: IdLike) -> Optional[Conversion]:
        """Conversion with its extracted data and deployed contract, or None."""
        return self.session.get(Conversion, _as_uuid(conversion_id))

    def get_deployed_contract_by_address(self, address: str) -> Optional[DeployedContract]:
        stmt = select(DeployedContract).where(DeployedContract.contract_address == address)
        return self.session.execute(stmt).scalars().first()

    def get_deployed_contract_by_conversion(self, conversion_id: IdLike) -> Optional[DeployedContract]:
        stmt = select(DeployedContract).where(DeployedContract.conversion_id == _as_uuid(conversion_id))
        return self.session.execute(stmt).scalars().first()
