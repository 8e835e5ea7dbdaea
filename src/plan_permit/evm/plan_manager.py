"""
Plan Manager Record Source

``PlanRecordSource`` is the narrow interface a plan permit needs from the
verifying contract: its address, its ERC-721 ``name()`` and the plan record
returned by ``getPlan(tokenId)``. ``AsyncPlanManager`` implements it on top
of an ``AsyncWeb3`` contract.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol, runtime_checkable

from web3 import AsyncWeb3

from .PLAN_MANAGER_ABI import get_plan_manager_abi

logger = logging.getLogger(__name__)


@runtime_checkable
class PlanRecordSource(Protocol):
    """Verifying contract that owns plan positions and their permit nonces."""

    @property
    def address(self) -> str:
        ...

    async def get_plan(self, token_id: int) -> Any:
        """Return the ``getPlan(tokenId)`` record; it exposes ``plan.nonce``."""
        ...

    async def name(self) -> str:
        ...


def _to_plain(value: Any) -> Any:
    """Convert decoded named tuples into nested dicts."""
    if hasattr(value, "_asdict"):
        return {k: _to_plain(v) for k, v in value._asdict().items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value


def extract_plan_nonce(record: Any) -> int:
    """
    Read the permit nonce from a ``getPlan`` record.

    Accepts both mapping records (``record["plan"]["nonce"]``) and attribute
    records (``record.plan.nonce``), so decoded contract output and plain
    test doubles are handled alike.

    Raises:
        KeyError: If the record carries no plan nonce.
    """
    plan = record["plan"] if isinstance(record, Mapping) else getattr(record, "plan", None)
    if plan is None:
        raise KeyError("plan record has no 'plan' entry")
    nonce = plan.get("nonce") if isinstance(plan, Mapping) else getattr(plan, "nonce", None)
    if nonce is None:
        raise KeyError("plan record has no 'plan.nonce' entry")
    return int(nonce)


class AsyncPlanManager:
    """
    Read-only view of a deployed plan manager contract.

    Args:
        w3:      AsyncWeb3 instance connected to the contract's chain.
        address: Plan manager contract address (any case; checksummed here).
        abi:     Contract ABI. Defaults to the minimal ``getPlan`` and
                 ``name`` fragments.

    Example::

        manager = AsyncPlanManager(w3, "0x1234...")
        record = await manager.get_plan(5)
        record["plan"]["nonce"]
    """

    def __init__(self, w3: AsyncWeb3, address: str, abi: Optional[List[Dict[str, Any]]] = None):
        self.w3 = w3
        self.abi = abi if abi is not None else get_plan_manager_abi()
        self._address = AsyncWeb3.to_checksum_address(address)
        self.contract = w3.eth.contract(address=self._address, abi=self.abi, decode_tuples=True)

    @property
    def address(self) -> str:
        return self._address

    def _get_plan_output_names(self) -> List[str]:
        for entry in self.abi:
            if entry.get("type") == "function" and entry.get("name") == "getPlan":
                return [o.get("name") or f"output{i}" for i, o in enumerate(entry.get("outputs", []))]
        return []

    async def get_plan(self, token_id: int) -> Dict[str, Any]:
        """
        Call ``getPlan(tokenId)`` and return the outputs keyed by ABI name.

        Struct outputs are returned as nested dicts, so the permit nonce is
        found at ``record["plan"]["nonce"]``.
        """
        result = await self.contract.functions.getPlan(token_id).call()
        names = self._get_plan_output_names()
        if len(names) == 1:
            result = [result]
        record = dict(zip(names, _to_plain(list(result))))
        logger.debug("getPlan(%s) on %s returned %s", token_id, self._address, record)
        return record

    async def name(self) -> str:
        return await self.contract.functions.name().call()
