"""
Plan Manager Smart Contract ABI Module

Simplified ABI fragments for the read calls a plan permit needs from the
plan manager contract: ``getPlan(tokenId)`` for the permit nonce and
``name()`` for the EIP-712 domain name.

The ``getPlan`` fragment only declares the leading ``nonce`` field of the
plan struct. Pass the ABI from the compiled contract artifact to
``AsyncPlanManager`` when the deployed struct has more fields.

Usage:
    from PLAN_MANAGER_ABI import get_plan_manager_abi

    contract = web3.eth.contract(address=plan_manager, abi=get_plan_manager_abi())
"""

from typing import Dict, Any, List


def get_plan_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for ``getPlan(uint256 tokenId)``.

    Returns:
        List[Dict[str, Any]]: ABI for getPlan function

    Example:
        abi = get_plan_abi()
        record = await contract.functions.getPlan(token_id).call()
    """
    return [
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
            ],
        }
    ]


def get_name_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for the ERC-721 ``name()`` view.

    Returns:
        List[Dict[str, Any]]: ABI for name function
    """
    return [
        {
            "name": "name",
            "type": "function",
            "stateMutability": "view",
            "inputs": [],
            "outputs": [{"name": "", "type": "string"}],
        }
    ]


def get_plan_manager_abi() -> List[Dict[str, Any]]:
    """
    Get the combined ABI used by ``AsyncPlanManager``.

    Returns:
        List[Dict[str, Any]]: getPlan and name entries
    """
    return get_plan_abi() + get_name_abi()
