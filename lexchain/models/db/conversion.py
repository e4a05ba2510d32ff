"""
Conversion database models.

A Conversion tracks one document through the pipeline. It owns at most one
ExtractedData row and at most one DeployedContract row.
"""

from typing import Optional, Dict, Any
from datetime import datetime
import uuid
from sqlalchemy import String, Text, Integer, Index, ForeignKey, JSON, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, uuid_pk, created_at, updated_at, utcnow
from ..enums import ConversionStatus, ProcessingStep, BlockchainNetwork


class Conversion(Base):
    """
    Pipeline record for one uploaded document.

    Status and processing step advance together; COMPLETED and FAILED are
    terminal.
    """
    __tablename__ = "conversions"

    # Primary key
    id: Mapped[uuid.UUID] = uuid_pk()

    # Ownership and source
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    original_filename: Mapped[str] = mapped_column(String(500), nullable=False)
    file_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    blockchain: Mapped[Optional[BlockchainNetwork]] = mapped_column(nullable=True)

    # Workflow state
    status: Mapped[ConversionStatus] = mapped_column(
        default=ConversionStatus.UPLOADING,
        nullable=False,
        index=True
    )
    processing_step: Mapped[ProcessingStep] = mapped_column(
        default=ProcessingStep.UPLOAD,
        nullable=False
    )
    contract_type: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = created_at()
    updated_at: Mapped[datetime] = updated_at()

    # Relationships
    extracted_data: Mapped[Optional["ExtractedData"]] = relationship(
        "ExtractedData",
        back_populates="conversion",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin"
    )
    deployed_contract: Mapped[Optional["DeployedContract"]] = relationship(
        "DeployedContract",
        back_populates="conversion",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    __table_args__ = (
        Index('idx_conversion_user_created', 'user_id', 'created_at'),
    )

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def __repr__(self) -> str:
        return f"<Conversion(id={self.id}, status={self.status.value}, step={self.processing_step.value})>"


class ExtractedData(Base):
    """Contract terms extracted for a conversion."""
    __tablename__ = "extracted_data"

    id: Mapped[uuid.UUID] = uuid_pk()
    conversion_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("conversions.id", ondelete="CASCADE"),
        nullable=False,
        unique=True
    )

    parties: Mapped[str] = mapped_column(Text, nullable=False)  # comma-joined
    contract_type: Mapped[str] = mapped_column(Text, nullable=False)
    payment_amount: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    duration: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    obligations: Mapped[str] = mapped_column(Text, nullable=False, default="")
    start_date: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    end_date: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # trigger, summary, extraction strategy, page count
    additional_terms: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = created_at()

    conversion: Mapped["Conversion"] = relationship("Conversion", back_populates="extracted_data")

    def __repr__(self) -> str:
        return f"<ExtractedData(conversion_id={self.conversion_id}, type={self.contract_type})>"


class DeployedContract(Base):
    """On-chain deployment of a conversion's generated contract. Immutable once written."""
    __tablename__ = "deployed_contracts"

    id: Mapped[uuid.UUID] = uuid_pk()
    conversion_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("conversions.id", ondelete="CASCADE"),
        nullable=False,
        unique=True
    )

    contract_address: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    blockchain: Mapped[BlockchainNetwork] = mapped_column(nullable=False, index=True)
    transaction_hash: Mapped[str] = mapped_column(String(80), nullable=False)
    solidity_code: Mapped[str] = mapped_column(Text, nullable=False)
    compiled_bytecode: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    block_number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    gas_used: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    compiler_version: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    deployed_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    conversion: Mapped["Conversion"] = relationship("Conversion", back_populates="deployed_contract")

    def __repr__(self) -> str:
        return f"<DeployedContract(address={self.contract_address}, network={self.blockchain.value})>"
