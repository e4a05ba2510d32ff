"""
Request schemas for the conversion service.
"""

from typing import Any, Dict, List, Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lexchain.extractors.base import ContractTerms
from ..enums import BlockchainNetwork


class ContractTermsPayload(BaseModel):
    """Caller-supplied contract terms for generate-from-terms."""
    type: str = Field(..., min_length=1)
    parties: List[str] = Field(..., min_length=1)
    terms: Dict[str, Any] = Field(default_factory=dict)
    obligations: Optional[List[str]] = None

    # a supplied "summary" is dropped; it is always recomputed
    model_config = ConfigDict(extra="ignore")

    @field_validator("type")
    @classmethod
    def type_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("type must not be blank")
        return v

    def to_terms(self) -> ContractTerms:
        return ContractTerms.from_dict(self.model_dump(exclude_none=True))


class DeployRequest(BaseModel):
    """Deploy an already generated contract for an existing conversion."""
    solidity_code: str
    blockchain: BlockchainNetwork
    conversion_id: uuid.UUID
    constructor_args: Optional[List[Any]] = None

    @field_validator("solidity_code")
    @classmethod
    def code_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("solidity_code is required")
        return v

    @field_validator("blockchain", mode="before")
    @classmethod
    def parse_network(cls, v):
        return BlockchainNetwork.parse(v)
