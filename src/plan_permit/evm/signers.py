"""
Permit Signing Capabilities

A plan permit is signed by whatever implements the narrow ``PermitSigner``
protocol: it reports its address and chain identifier and signs a full
EIP-712 typed-data payload. Two implementations are provided:

LocalAccountSigner
    In-process signing with ``eth_account``; the chain identifier is fixed
    at construction. No network access.

Web3AccountSigner
    In-process signing with ``eth_account``; the chain identifier is read
    from the connected ``AsyncWeb3`` provider.
"""

import logging
from typing import Any, Dict, Optional, Protocol, Tuple, runtime_checkable

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3

from .constants import get_private_key_from_env, get_rpc_url_from_env, PRIVATE_KEY_ENV, RPC_URL_ENV
from ..engine.exceptions import ConfigurationError, SigningError

logger = logging.getLogger(__name__)


@runtime_checkable
class PermitSigner(Protocol):
    """Signing identity used to authorize plan permits."""

    @property
    def address(self) -> str:
        ...

    async def get_chain_id(self) -> int:
        ...

    async def sign_typed_data(self, full_message: Dict[str, Any]) -> Tuple[int, int, int]:
        """Sign ``full_message`` and return the ``(v, r, s)`` components."""
        ...


def _load_account(private_key: str) -> LocalAccount:
    if not private_key:
        raise SigningError("Private key is required for signing.")
    try:
        return Account.from_key(private_key)
    except Exception as exc:
        raise SigningError(f"Invalid private key: {exc}") from exc


def _sign_with_account(account: LocalAccount, full_message: Dict[str, Any]) -> Tuple[int, int, int]:
    try:
        signed = Account.sign_typed_data(account.key, full_message=full_message)
    except Exception as exc:
        raise SigningError(f"Typed-data signing failed: {exc}") from exc
    return signed.v, signed.r, signed.s


class LocalAccountSigner:
    """
    Sign plan permits with a local private key on a fixed chain.

    Example::

        signer = LocalAccountSigner("0xYOUR_PRIVATE_KEY", chain_id=1)
        signer.address   # checksummed owner address
    """

    def __init__(self, private_key: str, chain_id: int):
        self._account = _load_account(private_key)
        self._chain_id = chain_id

    @classmethod
    def from_env(cls, chain_id: int) -> "LocalAccountSigner":
        """
        Build a signer from the ``EVM_PRIVATE_KEY`` environment variable.

        Raises:
            ConfigurationError: If the variable is not set.
        """
        private_key = get_private_key_from_env()
        if not private_key:
            raise ConfigurationError(f"'{PRIVATE_KEY_ENV}' environment variable is not set.")
        return cls(private_key, chain_id)

    @property
    def address(self) -> str:
        return self._account.address

    async def get_chain_id(self) -> int:
        return self._chain_id

    async def sign_typed_data(self, full_message: Dict[str, Any]) -> Tuple[int, int, int]:
        return _sign_with_account(self._account, full_message)


class Web3AccountSigner:
    """
    Sign plan permits with a local private key on the provider's chain.

    The chain identifier is queried from ``w3`` on every call; nothing is
    cached between permits.
    """

    def __init__(self, w3: AsyncWeb3, private_key: str):
        self.w3 = w3
        self._account = _load_account(private_key)

    @classmethod
    def from_env(cls, rpc_url: Optional[str] = None) -> "Web3AccountSigner":
        """
        Build a signer from ``EVM_PRIVATE_KEY`` and ``EVM_RPC_URL``.

        Args:
            rpc_url: Explicit RPC endpoint; takes precedence over the
                     ``EVM_RPC_URL`` environment variable.

        Raises:
            ConfigurationError: If the key or the RPC URL is missing.
        """
        private_key = get_private_key_from_env()
        if not private_key:
            raise ConfigurationError(f"'{PRIVATE_KEY_ENV}' environment variable is not set.")
        url = rpc_url or get_rpc_url_from_env()
        if not url:
            raise ConfigurationError(
                f"No RPC URL provided. Pass 'rpc_url' or set '{RPC_URL_ENV}' environment variable."
            )
        return cls(AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(url)), private_key)

    @property
    def address(self) -> str:
        return self._account.address

    async def get_chain_id(self) -> int:
        chain_id = await self.w3.eth.chain_id
        logger.debug("Provider reported chain id %s", chain_id)
        return chain_id

    async def sign_typed_data(self, full_message: Dict[str, Any]) -> Tuple[int, int, int]:
        return _sign_with_account(self._account, full_message)
