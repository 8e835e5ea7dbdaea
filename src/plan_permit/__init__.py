from .evm import (
    MAX_UINT256,
    PermitOverrides,
    PlanPermitSignature,
    SignedPlanPermit,
    LocalAccountSigner,
    Web3AccountSigner,
    AsyncPlanManager,
    sign_plan_permit,
    create_signed_plan_permit,
    verify_plan_permit,
)
from .engine.exceptions import (
    PlanPermitError,
    ResolutionError,
    SigningError,
    ConfigurationError,
    PermitVerificationError,
)

__all__ = [
    "MAX_UINT256",
    "PermitOverrides",
    "PlanPermitSignature",
    "SignedPlanPermit",
    "LocalAccountSigner",
    "Web3AccountSigner",
    "AsyncPlanManager",
    "sign_plan_permit",
    "create_signed_plan_permit",
    "verify_plan_permit",
    "PlanPermitError",
    "ResolutionError",
    "SigningError",
    "ConfigurationError",
    "PermitVerificationError",
]
