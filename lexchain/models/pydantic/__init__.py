"""
Pydantic schemas for validation and API responses.
"""

from .common import TimestampMixin
from .conversion import ConversionResponse, ExtractedDataResponse, DeployedContractResponse
from .requests import ContractTermsPayload, DeployRequest

__all__ = [
    'TimestampMixin',
    'ConversionResponse',
    'ExtractedDataResponse',
    'DeployedContractResponse',
    'ContractTermsPayload',
    'DeployRequest',
]
