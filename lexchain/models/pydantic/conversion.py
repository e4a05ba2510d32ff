"""
Conversion Pydantic schemas for API responses.
"""

from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, computed_field
from datetime import datetime
import uuid

from lexchain.deployment.explorer import get_block_explorer_url
from ..enums import ConversionStatus, ProcessingStep, BlockchainNetwork
from .common import TimestampMixin


class ExtractedDataResponse(BaseModel):
    """Schema for stored extracted terms."""
    id: uuid.UUID
    conversion_id: uuid.UUID
    parties: str
    contract_type: str
    payment_amount: Optional[str] = None
    duration: Optional[str] = None
    obligations: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    additional_terms: Optional[Dict[str, Any]] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DeployedContractResponse(BaseModel):
    """Schema for a deployment record, with its block explorer link."""
    id: uuid.UUID
    conversion_id: uuid.UUID
    contract_address: str
    blockchain: BlockchainNetwork
    transaction_hash: str
    solidity_code: str
    compiled_bytecode: Optional[str] = None
    block_number: Optional[int] = None
    gas_used: Optional[str] = None
    compiler_version: Optional[str] = None
    deployed_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def explorer_url(self) -> str:
        return get_block_explorer_url(self.blockchain, self.contract_address)


class ConversionResponse(TimestampMixin):
    """Schema for a conversion with its child records."""
    id: uuid.UUID
    user_id: str
    original_filename: str
    file_url: Optional[str] = None
    blockchain: Optional[BlockchainNetwork] = None
    status: ConversionStatus
    processing_step: ProcessingStep
    contract_type: Optional[str] = None
    error_message: Optional[str] = None
    extracted_data: Optional[ExtractedDataResponse] = None
    deployed_contract: Optional[DeployedContractResponse] = None

    model_config = ConfigDict(from_attributes=True)
