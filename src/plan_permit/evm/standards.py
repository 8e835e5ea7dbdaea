from copy import deepcopy
from dataclasses import dataclass, field
from typing import Dict, Any, List

from .constants import EIP712_DOMAIN_FIELDS, PERMIT_PRIMARY_TYPE, PERMIT_TYPE_FIELDS


# -----------------------------
# EIP-712 Domain
# -----------------------------

@dataclass(frozen=True)
class EIP712Domain:
    """
    EIP-712 domain separator.
    Used to prevent signature replay across domains.
    """
    name: str
    version: str
    chainId: int
    verifyingContract: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chainId,
            "verifyingContract": self.verifyingContract,
        }


# -----------------------------
# Plan Permit Message
# -----------------------------

@dataclass(frozen=True)
class PlanPermitMessage:
    """
    Permit message authorizing ``spender`` to act on plan ``tokenId``.

    ``owner`` travels with the message for the benefit of consumers of the
    payload; it is not part of the ``Permit`` type and therefore does not
    enter the struct hash. The verifying contract binds the owner through
    signature recovery instead.
    """
    owner: str
    spender: str
    tokenId: int
    nonce: int
    deadline: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "owner": self.owner,
            "spender": self.spender,
            "tokenId": self.tokenId,
            "nonce": self.nonce,
            "deadline": self.deadline,
        }


# -----------------------------
# EIP-712 Typed Data Wrapper
# -----------------------------

@dataclass(frozen=True)
class PlanPermitTypedData:
    """
    EIP-712 typed-data container for a plan permit.

    ``to_dict()`` produces the ``{types, primaryType, domain, message}``
    layout consumed by ``eth_account.Account.sign_typed_data`` and
    ``eth_signTypedData_v4``.

    Attributes:
        domain: EIP712Domain instance describing the signing domain.
        message: PlanPermitMessage carrying the payload.
        primary_type: The primary EIP-712 type (always "Permit").
        types: The typed definitions required by EIP-712 (automatically set).
    """
    domain: EIP712Domain
    message: PlanPermitMessage

    primary_type: str = PERMIT_PRIMARY_TYPE

    types: Dict[str, List[Dict[str, str]]] = field(
        default_factory=lambda: {
            "EIP712Domain": deepcopy(EIP712_DOMAIN_FIELDS),
            PERMIT_PRIMARY_TYPE: deepcopy(PERMIT_TYPE_FIELDS),
        }
    )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the typed data into a dict compatible with EIP-712 signing.
        """
        return {
            "types": deepcopy(self.types),
            "primaryType": self.primary_type,
            "domain": self.domain.to_dict(),
            "message": self.message.to_dict(),
        }
