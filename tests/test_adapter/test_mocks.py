"""
Plan Permit Test Mocks Module

Mock constants, deterministic collaborators and a reference EIP-712 digest
used across the plan permit test suite. Nothing here touches a network.

Key Components:
    - Mock addresses, private keys and domain values
    - MockSigner: a real local signer that counts collaborator calls
    - MockPlanManager: a plan record source backed by AsyncMock
    - reference_digest: EIP-712 digest assembled by hand with eth_abi

Usage:
    from test_mocks import MockSigner, MockPlanManager

    signer = MockSigner()
    manager = MockPlanManager(nonce=3)
"""

from typing import Any, Dict, Optional, Tuple
from unittest.mock import AsyncMock

from eth_abi import encode
from eth_account import Account
from eth_utils import keccak

from plan_permit.evm.signers import LocalAccountSigner


# ========================================================================
# Mock Constants
# ========================================================================

# Test private keys (do not use in production!)
MOCK_OWNER_PRIVATE_KEY = "0x1234567890123456789012345678901234567890123456789012345678901234"
MOCK_OTHER_PRIVATE_KEY = "0xabcdefabcdefabcdefabcdefabcdefabcdefabcdefabcdefabcdefabcdefabcd"

MOCK_OWNER_ADDRESS = Account.from_key(MOCK_OWNER_PRIVATE_KEY).address
MOCK_OTHER_ADDRESS = Account.from_key(MOCK_OTHER_PRIVATE_KEY).address

MOCK_SPENDER_ADDRESS = "0xabcdabcdabcdabcdabcdabcdabcdabcdabcdabcd"
MOCK_PLAN_MANAGER_ADDRESS = "0x1234123412341234123412341234123412341234"

MOCK_TOKEN_ID = 5
MOCK_NONCE = 3
MOCK_NAME = "Plans"
MOCK_VERSION = "1"
MOCK_CHAIN_ID = 1
MOCK_DEADLINE = 1_900_000_000


# ========================================================================
# Mock Collaborators
# ========================================================================

class MockSigner:
    """Local eth_account signer that records how often it is consulted."""

    def __init__(self, private_key: str = MOCK_OWNER_PRIVATE_KEY, chain_id: int = MOCK_CHAIN_ID):
        self._inner = LocalAccountSigner(private_key, chain_id)
        self.chain_id_calls = 0
        self.sign_calls = 0
        self.last_message: Optional[Dict[str, Any]] = None

    @property
    def address(self) -> str:
        return self._inner.address

    async def get_chain_id(self) -> int:
        self.chain_id_calls += 1
        return await self._inner.get_chain_id()

    async def sign_typed_data(self, full_message: Dict[str, Any]) -> Tuple[int, int, int]:
        self.sign_calls += 1
        self.last_message = full_message
        return await self._inner.sign_typed_data(full_message)


class MockPlanManager:
    """Plan record source whose reads are AsyncMocks."""

    def __init__(
        self,
        nonce: int = MOCK_NONCE,
        name: str = MOCK_NAME,
        address: str = MOCK_PLAN_MANAGER_ADDRESS,
    ):
        self._address = address
        self.get_plan = AsyncMock(return_value={"plan": {"nonce": nonce, "operator": MOCK_SPENDER_ADDRESS}})
        self.name = AsyncMock(return_value=name)

    @property
    def address(self) -> str:
        return self._address


# ========================================================================
# Reference EIP-712 digest
# ========================================================================

DOMAIN_TYPEHASH = keccak(
    text="EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)


def reference_digest(
    *,
    name: str,
    version: str,
    chain_id: int,
    verifying_contract: str,
    spender: str,
    token_id: int,
    nonce: int,
    deadline: int,
    permit_type: str = "Permit(address spender,uint256 tokenId,uint256 nonce,uint256 deadline)",
    field_order: Tuple[str, ...] = ("spender", "tokenId", "nonce", "deadline"),
) -> bytes:
    """Hash a plan permit the way the verifying contract does, field by field."""
    domain_separator = keccak(encode(
        ["bytes32", "bytes32", "bytes32", "uint256", "address"],
        [DOMAIN_TYPEHASH, keccak(text=name), keccak(text=version), chain_id, verifying_contract],
    ))
    values = {"spender": spender, "tokenId": token_id, "nonce": nonce, "deadline": deadline}
    types = {"spender": "address", "tokenId": "uint256", "nonce": "uint256", "deadline": "uint256"}
    struct_hash = keccak(encode(
        ["bytes32"] + [types[f] for f in field_order],
        [keccak(text=permit_type)] + [values[f] for f in field_order],
    ))
    return keccak(b"\x19\x01" + domain_separator + struct_hash)
