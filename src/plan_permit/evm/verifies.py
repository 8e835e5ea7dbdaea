"""
Plan Permit Signature Verification

Off-chain checks for plan permit signatures. The EIP-712 signable is
rebuilt from the same ``PlanPermitTypedData`` envelope used on the signing
path, so the digest verified here is identical to the one signed by
``sign_plan_permit``.

All cryptographic operations are performed in-process using
``eth_account``; no RPC calls are made.
"""

import logging
from typing import Optional

from eth_account import Account
from eth_account.messages import encode_typed_data
from eth_utils import keccak

from .schemas import SignedPlanPermit
from .standards import PlanPermitTypedData
from ..engine.exceptions import PermitVerificationError

logger = logging.getLogger(__name__)


def plan_permit_digest(typed_data: PlanPermitTypedData) -> bytes:
    """
    Compute the 32-byte EIP-712 digest ``keccak(0x19 0x01 || domainSeparator || structHash)``.

    Args:
        typed_data: The permit envelope.

    Returns:
        The digest a plan manager contract recovers the owner from.
    """
    signable = encode_typed_data(full_message=typed_data.to_dict())
    return keccak(b"\x19" + signable.version + signable.header + signable.body)


def recover_plan_permit_signer(typed_data: PlanPermitTypedData, *, v: int, r: str, s: str) -> str:
    """
    Recover the address that signed ``typed_data``.

    Args:
        typed_data: The permit envelope that was signed.
        v:          ECDSA recovery ID.
        r:          Signature ``r`` component (0x-prefixed hex).
        s:          Signature ``s`` component (0x-prefixed hex).

    Returns:
        Checksummed signer address.

    Raises:
        PermitVerificationError: If the components cannot be recovered.
    """
    signable = encode_typed_data(full_message=typed_data.to_dict())
    try:
        return Account.recover_message(signable, vrs=(v, int(r, 16), int(s, 16)))
    except Exception as exc:
        raise PermitVerificationError(f"Cannot recover plan permit signer: {exc}") from exc


def verify_plan_permit(permit: SignedPlanPermit, expected_owner: Optional[str] = None) -> bool:
    """
    Check that ``permit.signature`` was produced by the permit owner.

    Args:
        permit:         Signed plan permit to check.
        expected_owner: Address the signature must recover to; defaults to
                        ``permit.owner``.

    Returns:
        ``True`` if the recovered signer matches, ``False`` otherwise.

    Raises:
        PermitVerificationError: If the signature is malformed.
    """
    try:
        permit.validate_structure()
    except ValueError as exc:
        raise PermitVerificationError(str(exc)) from exc

    owner = expected_owner or permit.owner
    sig = permit.signature
    recovered = recover_plan_permit_signer(permit.to_typed_data(), v=sig.v, r=sig.r, s=sig.s)
    if recovered.lower() != owner.lower():
        logger.warning(
            "Plan permit for token %s recovered %s, expected %s",
            permit.token_id, recovered, owner,
        )
        return False
    return True
