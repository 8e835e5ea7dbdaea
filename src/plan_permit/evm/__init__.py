from .constants import MAX_UINT256, DEFAULT_PERMIT_VERSION
from .schemas import PermitOverrides, PlanPermitSignature, SignedPlanPermit
from .standards import EIP712Domain, PlanPermitMessage, PlanPermitTypedData
from .signers import PermitSigner, LocalAccountSigner, Web3AccountSigner
from .plan_manager import PlanRecordSource, AsyncPlanManager, extract_plan_nonce
from .signatures import (
    sign_plan_permit,
    create_signed_plan_permit,
    build_plan_permit_typed_data,
    resolve_permit_domain,
)
from .verifies import (
    plan_permit_digest,
    recover_plan_permit_signer,
    verify_plan_permit,
)

__all__ = [
    "MAX_UINT256",
    "DEFAULT_PERMIT_VERSION",
    "PermitOverrides",
    "PlanPermitSignature",
    "SignedPlanPermit",
    "EIP712Domain",
    "PlanPermitMessage",
    "PlanPermitTypedData",
    "PermitSigner",
    "LocalAccountSigner",
    "Web3AccountSigner",
    "PlanRecordSource",
    "AsyncPlanManager",
    "extract_plan_nonce",
    "sign_plan_permit",
    "create_signed_plan_permit",
    "build_plan_permit_typed_data",
    "resolve_permit_domain",
    "plan_permit_digest",
    "recover_plan_permit_signer",
    "verify_plan_permit",
]
