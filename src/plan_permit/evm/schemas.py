"""
EVM Plan Permit Schema Models

Pydantic models for building and carrying plan permit signatures. All
classes inherit from the base schema hierarchy in ``schemas.bases``.

    - PermitOverrides: Optional values that bypass on-chain resolution.
    - PlanPermitSignature: The (v, r, s) ECDSA components of a permit.
    - SignedPlanPermit: Permit fields, signing domain and signature bundled
      together for submission or later verification.
"""

from typing import Optional, Literal, Tuple

from pydantic import ConfigDict, Field, field_validator

from ..schemas.bases import BaseSignature, BasePermit, CanonicalModel
from .constants import MAX_UINT256
from .standards import EIP712Domain, PlanPermitMessage, PlanPermitTypedData


def _is_address(value: str) -> bool:
    return isinstance(value, str) and value.startswith("0x") and len(value) == 42


class PermitOverrides(CanonicalModel):
    """
    Caller-supplied permit parameters that skip resolution.

    Any field left as ``None`` is resolved from its collaborator: ``nonce``
    from the plan record, ``name`` from the plan manager, ``version`` from
    the package default and ``chain_id`` from the signer.

    Example::

        PermitOverrides(nonce=3, chain_id=1)
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    nonce: Optional[int] = Field(None, ge=0, le=MAX_UINT256, description="Permit nonce")
    name: Optional[str] = Field(None, description="EIP-712 domain name")
    version: Optional[str] = Field(None, description="EIP-712 domain version")
    chain_id: Optional[int] = Field(None, ge=1, alias="chainId", description="EVM network ID")


class PlanPermitSignature(BaseSignature):
    """
    ECDSA signature (v, r, s) over a plan permit.

    Attributes:
        signature_type: Always ``"PlanPermit"``.
        v: ECDSA recovery ID (27 or 28).
        r: r component, 0x-prefixed 64-char hex (32 bytes).
        s: s component, 0x-prefixed 64-char hex (32 bytes).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    signature_type: Literal["PlanPermit"] = Field(default="PlanPermit", description="Signing standard")
    v: int = Field(..., ge=27, le=28, description="ECDSA recovery ID (27 or 28)")
    r: str = Field(..., description="Signature r component (32 bytes, 0x-prefixed hex)")
    s: str = Field(..., description="Signature s component (32 bytes, 0x-prefixed hex)")

    @classmethod
    def from_components(cls, v: int, r: int, s: int) -> "PlanPermitSignature":
        """Build from integer components, zero-padding r and s to 32 bytes."""
        return cls(
            v=v,
            r="0x" + r.to_bytes(32, "big").hex(),
            s="0x" + s.to_bytes(32, "big").hex(),
        )

    def validate_format(self) -> bool:
        """
        Validate v/r/s components.

        Returns:
            True when all components pass.

        Raises:
            ValueError: Descriptive message on the first failed check.
        """
        if self.v not in (27, 28):
            raise ValueError(f"Invalid recovery ID: {self.v}. Must be 27 or 28")

        for name, val in [("r", self.r), ("s", self.s)]:
            hex_str = val[2:] if val.lower().startswith("0x") else val
            if len(hex_str) != 64:
                raise ValueError(f"Invalid {name}: expected 64 hex chars, got {len(hex_str)}")
            try:
                int(hex_str, 16)
            except ValueError:
                raise ValueError(f"Invalid {name}: not valid hexadecimal")

        return True

    def r_bytes(self) -> bytes:
        return bytes.fromhex(self.r[2:] if self.r.lower().startswith("0x") else self.r)

    def s_bytes(self) -> bytes:
        return bytes.fromhex(self.s[2:] if self.s.lower().startswith("0x") else self.s)

    def as_permit_args(self) -> Tuple[int, bytes, bytes]:
        """
        Return ``(v, r, s)`` typed for a contract ``permit(..., v, r, s)`` call.
        """
        self.validate_format()
        return self.v, self.r_bytes(), self.s_bytes()

    def to_packed_hex(self) -> str:
        """
        Encode v/r/s into a packed 65-byte hex string (``r || s || v``).

        Returns:
            0x-prefixed 132-character hex string.
        """
        self.validate_format()
        return "0x" + self.r_bytes().hex() + self.s_bytes().hex() + format(self.v, "02x")


class SignedPlanPermit(BasePermit):
    """
    A signed plan permit with everything needed to submit or re-verify it.

    Attributes:
        permit_type: Always ``"PlanPermit"``.
        owner: Signer address; the plan owner granting the permit.
        spender: Address authorized to act on the plan.
        token_id: Plan token identifier.
        nonce: Plan nonce the permit was signed against.
        deadline: Unix timestamp after which the permit is invalid.
        name: EIP-712 domain name.
        version: EIP-712 domain version.
        chain_id: EVM network ID.
        verifying_contract: Plan manager contract address.
        signature: The permit signature.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    permit_type: Literal["PlanPermit"] = Field(default="PlanPermit", description="Permit standard identifier")
    owner: str = Field(..., description="Plan owner's wallet address (0x-prefixed)")
    spender: str = Field(..., description="Authorized spender address")
    token_id: int = Field(..., ge=0, le=MAX_UINT256, alias="tokenId", description="Plan token identifier")
    nonce: int = Field(..., ge=0, le=MAX_UINT256, description="Plan nonce for replay protection")
    deadline: int = Field(MAX_UINT256, ge=0, le=MAX_UINT256, description="Permit expiry timestamp")
    name: str = Field(..., description="EIP-712 domain name")
    version: str = Field(..., description="EIP-712 domain version")
    chain_id: int = Field(..., ge=1, alias="chainId", description="EVM network ID")
    verifying_contract: str = Field(..., alias="verifyingContract", description="Plan manager address")
    signature: PlanPermitSignature = Field(..., description="Permit ECDSA signature")

    @field_validator("owner", "spender", "verifying_contract")
    @classmethod
    def _check_address(cls, value: str) -> str:
        if not _is_address(value):
            raise ValueError(f"expected a 0x-prefixed 42-character address, got {value!r}")
        return value

    def to_typed_data(self) -> PlanPermitTypedData:
        """Rebuild the EIP-712 envelope this permit was signed over."""
        return PlanPermitTypedData(
            domain=EIP712Domain(
                name=self.name,
                version=self.version,
                chainId=self.chain_id,
                verifyingContract=self.verifying_contract,
            ),
            message=PlanPermitMessage(
                owner=self.owner,
                spender=self.spender,
                tokenId=self.token_id,
                nonce=self.nonce,
                deadline=self.deadline,
            ),
        )

    def validate_structure(self) -> bool:
        """
        Validate permit fields and the embedded signature.

        Raises:
            ValueError: With a descriptive message on the first failed check.
        """
        try:
            self.signature.validate_format()
        except ValueError as e:
            raise ValueError(f"Signature validation failed: {e}")
        return True
