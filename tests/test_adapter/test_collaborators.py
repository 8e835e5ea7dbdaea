"""
Signer and plan manager adapter tests.

AsyncWeb3 is never connected: contract calls are replaced with AsyncMocks
and the provider chain id with a stub.
"""

from collections import namedtuple
from unittest.mock import AsyncMock, Mock

import pytest
from web3 import AsyncWeb3

from test_mocks import (
    MOCK_OWNER_PRIVATE_KEY,
    MOCK_OWNER_ADDRESS,
    MOCK_SPENDER_ADDRESS,
    MOCK_PLAN_MANAGER_ADDRESS,
    MOCK_NAME,
)

from plan_permit.evm.plan_manager import AsyncPlanManager, PlanRecordSource, extract_plan_nonce
from plan_permit.evm.signers import LocalAccountSigner, PermitSigner, Web3AccountSigner
from plan_permit.engine.exceptions import ConfigurationError, SigningError


Plan = namedtuple("Plan", ["nonce", "operator"])
Stats = namedtuple("Stats", ["ticks", "claimed"])


class _StubEth:
    """Stands in for ``w3.eth``; ``chain_id`` is awaitable like AsyncEth."""

    def __init__(self, chain_id):
        self._chain_id = chain_id

    @property
    def chain_id(self):
        async def _get():
            return self._chain_id
        return _get()


def _offline_w3():
    return AsyncWeb3(AsyncWeb3.AsyncHTTPProvider("http://127.0.0.1:8545"))


def _mock_get_plan(manager, result):
    call = AsyncMock(return_value=result)
    manager.contract = Mock()
    manager.contract.functions.getPlan.return_value.call = call
    return call


class TestLocalAccountSigner:

    @pytest.mark.asyncio
    async def test_reports_address_and_chain_id(self):
        signer = LocalAccountSigner(MOCK_OWNER_PRIVATE_KEY, chain_id=137)

        assert signer.address == MOCK_OWNER_ADDRESS
        assert await signer.get_chain_id() == 137
        assert isinstance(signer, PermitSigner)

    def test_invalid_key_raises_signing_error(self):
        with pytest.raises(SigningError):
            LocalAccountSigner("0x1234", chain_id=1)

    def test_empty_key_raises_signing_error(self):
        with pytest.raises(SigningError):
            LocalAccountSigner("", chain_id=1)

    @pytest.mark.asyncio
    async def test_malformed_payload_raises_signing_error(self):
        signer = LocalAccountSigner(MOCK_OWNER_PRIVATE_KEY, chain_id=1)

        with pytest.raises(SigningError):
            await signer.sign_typed_data({"types": {}, "domain": {}, "message": {}})

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("EVM_PRIVATE_KEY", MOCK_OWNER_PRIVATE_KEY)

        signer = LocalAccountSigner.from_env(chain_id=1)

        assert signer.address == MOCK_OWNER_ADDRESS

    def test_from_env_missing_key(self, monkeypatch):
        monkeypatch.delenv("EVM_PRIVATE_KEY", raising=False)

        with pytest.raises(ConfigurationError):
            LocalAccountSigner.from_env(chain_id=1)


class TestWeb3AccountSigner:

    @pytest.mark.asyncio
    async def test_chain_id_comes_from_provider(self):
        w3 = Mock()
        w3.eth = _StubEth(11155111)
        signer = Web3AccountSigner(w3, MOCK_OWNER_PRIVATE_KEY)

        assert await signer.get_chain_id() == 11155111
        assert signer.address == MOCK_OWNER_ADDRESS

    def test_from_env_requires_rpc_url(self, monkeypatch):
        monkeypatch.setenv("EVM_PRIVATE_KEY", MOCK_OWNER_PRIVATE_KEY)
        monkeypatch.delenv("EVM_RPC_URL", raising=False)

        with pytest.raises(ConfigurationError):
            Web3AccountSigner.from_env()

    def test_from_env_with_rpc_url(self, monkeypatch):
        monkeypatch.setenv("EVM_PRIVATE_KEY", MOCK_OWNER_PRIVATE_KEY)
        monkeypatch.setenv("EVM_RPC_URL", "http://127.0.0.1:8545")

        signer = Web3AccountSigner.from_env()

        assert isinstance(signer.w3, AsyncWeb3)
        assert signer.address == MOCK_OWNER_ADDRESS


class TestAsyncPlanManager:

    def test_address_is_checksummed(self):
        manager = AsyncPlanManager(_offline_w3(), MOCK_PLAN_MANAGER_ADDRESS)

        assert manager.address == AsyncWeb3.to_checksum_address(MOCK_PLAN_MANAGER_ADDRESS)
        assert isinstance(manager, PlanRecordSource)

    @pytest.mark.asyncio
    async def test_get_plan_single_struct_output(self):
        manager = AsyncPlanManager(_offline_w3(), MOCK_PLAN_MANAGER_ADDRESS)
        call = _mock_get_plan(manager, Plan(nonce=3, operator=MOCK_SPENDER_ADDRESS))

        record = await manager.get_plan(5)

        assert record == {"plan": {"nonce": 3, "operator": MOCK_SPENDER_ADDRESS}}
        assert extract_plan_nonce(record) == 3
        manager.contract.functions.getPlan.assert_called_once_with(5)
        call.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_plan_multiple_outputs(self):
        abi = [
            {
                "name": "getPlan",
                "type": "function",
                "stateMutability": "view",
                "inputs": [{"name": "tokenId", "type": "uint256"}],
                "outputs": [
                    {
                        "name": "plan",
                        "type": "tuple",
                        "components": [
                            {"name": "nonce", "type": "uint96"},
                            {"name": "operator", "type": "address"},
                        ],
                    },
                    {
                        "name": "stats",
                        "type": "tuple",
                        "components": [
                            {"name": "ticks", "type": "uint256"},
                            {"name": "claimed", "type": "uint256"},
                        ],
                    },
                ],
            }
        ]
        manager = AsyncPlanManager(_offline_w3(), MOCK_PLAN_MANAGER_ADDRESS, abi=abi)
        _mock_get_plan(manager, [Plan(nonce=4, operator=MOCK_SPENDER_ADDRESS), Stats(ticks=10, claimed=2)])

        record = await manager.get_plan(5)

        assert record["plan"]["nonce"] == 4
        assert record["stats"] == {"ticks": 10, "claimed": 2}

    @pytest.mark.asyncio
    async def test_name(self):
        manager = AsyncPlanManager(_offline_w3(), MOCK_PLAN_MANAGER_ADDRESS)
        manager.contract = Mock()
        manager.contract.functions.name.return_value.call = AsyncMock(return_value=MOCK_NAME)

        assert await manager.name() == MOCK_NAME


class TestExtractPlanNonce:

    def test_mapping_record(self):
        assert extract_plan_nonce({"plan": {"nonce": 2}}) == 2

    def test_attribute_record(self):
        Record = namedtuple("Record", ["plan"])
        assert extract_plan_nonce(Record(plan=Plan(nonce=6, operator=MOCK_SPENDER_ADDRESS))) == 6

    def test_missing_plan(self):
        with pytest.raises(KeyError):
            extract_plan_nonce({})

    def test_missing_nonce(self):
        with pytest.raises(KeyError):
            extract_plan_nonce({"plan": {"operator": MOCK_SPENDER_ADDRESS}})
