"""
Converters between pipeline models and database models.

1. ContractTerms (extraction layer) -> ExtractedData row
2. DeploymentSucceeded (deployment layer) -> DeployedContract row
3. DB models -> Pydantic schemas (handled by Pydantic's from_attributes)
"""

from typing import Optional

from lexchain.extractors.base import ContractTerms
from lexchain.deployment.base import DeploymentSucceeded
from .db.conversion import ExtractedData, DeployedContract
from .enums import BlockchainNetwork


# =============================================================================
# EXTRACTION -> DATABASE CONVERSIONS
# =============================================================================

def contract_terms_to_extracted_data(
    terms: ContractTerms,
    strategy: Optional[str] = None,
    page_count: Optional[int] = None
) -> ExtractedData:
    """
    Convert ContractTerms to an ExtractedData row.

    Args:
        terms: Validated contract terms
        strategy: Name of the extractor that produced them
        page_count: Page count of the source document, when known

    Returns:
        ExtractedData model (unsaved, conversion_id set by the repository)
    """
    additional = {
        "trigger": terms.trigger,
        "summary": terms.summary,
    }
    if strategy:
        additional["strategy"] = strategy
    if page_count is not None:
        additional["pageCount"] = page_count

    return ExtractedData(
        parties=", ".join(terms.parties),
        contract_type=terms.type,
        payment_amount=terms.payment,
        duration=terms.duration,
        obligations="; ".join(terms.obligations),
        start_date=terms.start_date,
        end_date=terms.end_date,
        additional_terms=additional,
    )


# =============================================================================
# DEPLOYMENT -> DATABASE CONVERSIONS
# =============================================================================

def deployment_to_deployed_contract(
    outcome: DeploymentSucceeded,
    solidity_code: str,
    compiler_version: Optional[str] = None
) -> DeployedContract:
    """
    Convert a successful deployment to a DeployedContract row.

    Gas used is stored as text.
    """
    return DeployedContract(
        contract_address=outcome.address,
        blockchain=BlockchainNetwork.parse(outcome.network),
        transaction_hash=outcome.transaction_hash,
        solidity_code=solidity_code,
        compiled_bytecode=outcome.bytecode,
        block_number=outcome.block_number,
        gas_used=str(outcome.gas_used) if outcome.gas_used is not None else None,
        compiler_version=compiler_version,
    )
