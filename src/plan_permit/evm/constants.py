"""
EVM Permit Constants and Environment Configuration

Holds the EIP-712 type definitions and default values used to build plan
permits, plus helpers that read signer/RPC settings from the environment.
A ``.env`` file in the working directory is loaded on import.
"""

import os
from typing import Dict, List, Optional

import dotenv

dotenv.load_dotenv()


#: Largest uint256 value; the default permit ``deadline`` ("never expires").
MAX_UINT256: int = 2**256 - 1

#: EIP-712 domain ``version`` used when no override is supplied.
DEFAULT_PERMIT_VERSION: str = "1"

#: Primary EIP-712 type signed for a plan permit.
PERMIT_PRIMARY_TYPE: str = "Permit"

EIP712_DOMAIN_FIELDS: List[Dict[str, str]] = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

# Field order is part of the type hash; the plan manager contract hashes
# exactly this sequence.
PERMIT_TYPE_FIELDS: List[Dict[str, str]] = [
    {"name": "spender", "type": "address"},
    {"name": "tokenId", "type": "uint256"},
    {"name": "nonce", "type": "uint256"},
    {"name": "deadline", "type": "uint256"},
]

#: Canonical type string hashed into the Permit type hash.
PERMIT_TYPE_STRING: str = (
    "Permit(address spender,uint256 tokenId,uint256 nonce,uint256 deadline)"
)

#: Environment variable holding the permit owner's private key.
PRIVATE_KEY_ENV: str = "EVM_PRIVATE_KEY"

#: Environment variable holding the JSON-RPC endpoint URL.
RPC_URL_ENV: str = "EVM_RPC_URL"


def get_private_key_from_env() -> Optional[str]:
    """
    Load the permit owner's private key from the environment.

    Returns:
        str: Private key from ``EVM_PRIVATE_KEY``, or None if not configured.

    Example:
        # In your .env file or environment setup:
        # EVM_PRIVATE_KEY=0x1234...abcd
        key = get_private_key_from_env()
    """
    return os.getenv(PRIVATE_KEY_ENV)


def get_rpc_url_from_env() -> Optional[str]:
    """
    Load the JSON-RPC endpoint URL from the environment.

    Returns:
        str: URL from ``EVM_RPC_URL``, or None if not configured.
    """
    return os.getenv(RPC_URL_ENV)
