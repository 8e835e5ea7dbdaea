"""
Plan Permit Signing

Builds and signs the EIP-712 ``Permit`` authorizing a spender to act on a
plan position. Parameters the caller does not supply are resolved from two
collaborators: the plan manager contract (nonce, name, address) and the
signer (owner address, chain identifier).

Exported helpers
----------------
sign_plan_permit
    Resolve missing parameters, sign, and return the ``PlanPermitSignature``
    (v, r, s) ready for a ``permit`` call.

create_signed_plan_permit
    Same as ``sign_plan_permit`` but returns a ``SignedPlanPermit`` that also
    carries every signed field and the domain, for submission or verification.

build_plan_permit_typed_data
    Low-level helper producing the ``PlanPermitTypedData`` envelope without
    signing. Useful when signing is handled externally (e.g. a hardware
    wallet or MPC service).

resolve_permit_domain
    The resolution step on its own: returns the nonce and signing domain.
"""

import asyncio
import logging
from typing import Optional, Tuple, TypeVar

from .constants import DEFAULT_PERMIT_VERSION, MAX_UINT256
from .plan_manager import PlanRecordSource, extract_plan_nonce
from .schemas import PermitOverrides, PlanPermitSignature, SignedPlanPermit
from .signers import PermitSigner
from .standards import EIP712Domain, PlanPermitMessage, PlanPermitTypedData
from ..engine.exceptions import ResolutionError, SigningError

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Parameter resolution
# ---------------------------------------------------------------------------

async def _fetch_nonce(plan_manager: PlanRecordSource, token_id: int) -> int:
    try:
        record = await plan_manager.get_plan(token_id)
        return extract_plan_nonce(record)
    except Exception as exc:
        raise ResolutionError("nonce", f"getPlan({token_id}) failed: {exc}") from exc


async def _fetch_name(plan_manager: PlanRecordSource) -> str:
    try:
        return await plan_manager.name()
    except Exception as exc:
        raise ResolutionError("name", f"name() failed: {exc}") from exc


async def _fetch_chain_id(signer: PermitSigner) -> int:
    try:
        return await signer.get_chain_id()
    except Exception as exc:
        raise ResolutionError("chainId", f"signer chain id unavailable: {exc}") from exc


async def _given(value: T) -> T:
    return value


async def resolve_permit_domain(
    signer: PermitSigner,
    plan_manager: PlanRecordSource,
    token_id: int,
    overrides: Optional[PermitOverrides] = None,
) -> Tuple[int, EIP712Domain]:
    """
    Resolve the permit nonce and EIP-712 domain for ``token_id``.

    Each of nonce, name, version and chain id is taken from ``overrides``
    when set, otherwise looked up. The lookups are independent and run
    concurrently; an overridden field causes no call to its collaborator.

    Args:
        signer:       Signing identity (provides the chain id).
        plan_manager: Plan manager contract (provides nonce, name, address).
        token_id:     Plan token identifier.
        overrides:    Optional values bypassing resolution.

    Returns:
        ``(nonce, domain)``.

    Raises:
        ResolutionError: If a lookup that was not overridden fails.
    """
    overrides = overrides or PermitOverrides()

    lookups = [asyncio.ensure_future(c) for c in (
        _given(overrides.nonce) if overrides.nonce is not None else _fetch_nonce(plan_manager, token_id),
        _given(overrides.name) if overrides.name is not None else _fetch_name(plan_manager),
        _given(overrides.version if overrides.version is not None else DEFAULT_PERMIT_VERSION),
        _given(overrides.chain_id) if overrides.chain_id is not None else _fetch_chain_id(signer),
    )]
    try:
        nonce, name, version, chain_id = await asyncio.gather(*lookups)
    except BaseException:
        # first failure wins; the remaining lookups are cancelled and drained
        for task in lookups:
            task.cancel()
        await asyncio.gather(*lookups, return_exceptions=True)
        raise

    domain = EIP712Domain(
        name=name,
        version=version,
        chainId=chain_id,
        verifyingContract=plan_manager.address,
    )
    logger.debug(
        "Resolved permit for token %s: nonce=%s name=%r version=%r chainId=%s",
        token_id, nonce, name, version, chain_id,
    )
    return nonce, domain


# ---------------------------------------------------------------------------
# Low-level typed-data builder
# ---------------------------------------------------------------------------

def build_plan_permit_typed_data(
    *,
    owner: str,
    spender: str,
    token_id: int,
    nonce: int,
    domain: EIP712Domain,
    deadline: Optional[int] = None,
) -> PlanPermitTypedData:
    """
    Wrap the permit fields in a ``PlanPermitTypedData`` envelope without signing.

    Args:
        owner:    Plan owner address (the signer).
        spender:  Address being authorized.
        token_id: Plan token identifier.
        nonce:    Current plan nonce.
        domain:   Resolved EIP-712 domain.
        deadline: Expiry timestamp; ``None`` means ``2**256 - 1`` (never expires).

    Returns:
        ``PlanPermitTypedData`` whose ``to_dict()`` is compatible with
        ``eth_account.Account.sign_typed_data`` and ``eth_signTypedData_v4``.

    Example::

        typed_data = build_plan_permit_typed_data(
            owner="0xOwner", spender="0xSpender", token_id=5, nonce=3,
            domain=EIP712Domain("Plans", "1", 1, "0xPlanManager"),
        )
        payload = typed_data.to_dict()   # hand off to external signer
    """
    message = PlanPermitMessage(
        owner=owner,
        spender=spender,
        tokenId=token_id,
        nonce=nonce,
        deadline=MAX_UINT256 if deadline is None else deadline,
    )
    return PlanPermitTypedData(domain=domain, message=message)


# ---------------------------------------------------------------------------
# Plan permit signer
# ---------------------------------------------------------------------------

async def _sign(signer: PermitSigner, typed_data: PlanPermitTypedData) -> PlanPermitSignature:
    try:
        v, r, s = await signer.sign_typed_data(typed_data.to_dict())
    except SigningError:
        raise
    except Exception as exc:
        raise SigningError(f"Signer failed to sign plan permit: {exc}") from exc

    # yParity-style recovery ids (0/1) are reported as 27/28
    if v < 27:
        v += 27
    try:
        return PlanPermitSignature.from_components(v, r, s)
    except (ValueError, TypeError, AttributeError, OverflowError) as exc:
        raise SigningError(f"Signer returned an invalid signature: {exc}") from exc


async def create_signed_plan_permit(
    signer: PermitSigner,
    plan_manager: PlanRecordSource,
    spender: str,
    token_id: int,
    deadline: Optional[int] = None,
    overrides: Optional[PermitOverrides] = None,
) -> SignedPlanPermit:
    """
    Sign a plan permit and return it bundled with the signed fields.

    See ``sign_plan_permit`` for parameter and error semantics.

    Returns:
        ``SignedPlanPermit`` with ``signature`` populated.
    """
    nonce, domain = await resolve_permit_domain(signer, plan_manager, token_id, overrides)
    typed_data = build_plan_permit_typed_data(
        owner=signer.address,
        spender=spender,
        token_id=token_id,
        nonce=nonce,
        domain=domain,
        deadline=deadline,
    )
    signature = await _sign(signer, typed_data)
    message = typed_data.message
    logger.info(
        "Signed plan permit: owner=%s spender=%s tokenId=%s nonce=%s",
        message.owner, message.spender, message.tokenId, message.nonce,
    )

    return SignedPlanPermit(
        owner=message.owner,
        spender=message.spender,
        token_id=message.tokenId,
        nonce=message.nonce,
        deadline=message.deadline,
        name=domain.name,
        version=domain.version,
        chain_id=domain.chainId,
        verifying_contract=domain.verifyingContract,
        signature=signature,
    )


async def sign_plan_permit(
    signer: PermitSigner,
    plan_manager: PlanRecordSource,
    spender: str,
    token_id: int,
    deadline: Optional[int] = None,
    overrides: Optional[PermitOverrides] = None,
) -> PlanPermitSignature:
    """
    Sign an EIP-712 ``Permit`` for plan ``token_id`` and return (v, r, s).

    The signed struct is ``Permit(address spender, uint256 tokenId,
    uint256 nonce, uint256 deadline)`` under the domain
    ``{name, version, chainId, verifyingContract=plan_manager.address}``;
    the owner is ``signer.address``.

    Args:
        signer:       Signing identity; also the plan owner.
        plan_manager: Plan manager contract acting as verifying contract.
        spender:      Address to authorize.
        token_id:     Plan token identifier.
        deadline:     Expiry timestamp; defaults to ``2**256 - 1``.
        overrides:    Optional nonce / name / version / chain id values
                      used verbatim instead of being looked up.

    Returns:
        ``PlanPermitSignature``; ``as_permit_args()`` yields the
        ``(v, r, s)`` arguments of the contract's ``permit`` call.

    Raises:
        ResolutionError: A required lookup failed (e.g. unknown ``token_id``
                         with no nonce override).
        SigningError:    The signer could not produce a signature.

    Example::

        sig = await sign_plan_permit(
            LocalAccountSigner("0xYOUR_PRIVATE_KEY", chain_id=1),
            AsyncPlanManager(w3, "0xPlanManager"),
            spender="0xSpender",
            token_id=5,
        )
        v, r, s = sig.as_permit_args()
    """
    permit = await create_signed_plan_permit(
        signer, plan_manager, spender, token_id, deadline=deadline, overrides=overrides,
    )
    return permit.signature
