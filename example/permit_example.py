from plan_permit import (
    AsyncPlanManager,
    Web3AccountSigner,
    create_signed_plan_permit,
    sign_plan_permit,
    verify_plan_permit,
)

plan_manager_address = "0x0000000000000000000000000000000000000000"  # Replace with deployed plan manager
spender = "0x0000000000000000000000000000000000000000"  # Replace with the address to authorize
token_id = 1


async def main():
    # Reads EVM_PRIVATE_KEY and EVM_RPC_URL from the environment / .env
    signer = Web3AccountSigner.from_env()
    manager = AsyncPlanManager(signer.w3, plan_manager_address)

    sig = await sign_plan_permit(signer, manager, spender, token_id)
    v, r, s = sig.as_permit_args()
    print("permit args:", v, r.hex(), s.hex())

    permit = await create_signed_plan_permit(signer, manager, spender, token_id)
    print("verifies:", verify_plan_permit(permit))
    return permit


if __name__ == "__main__":
    import asyncio
    permit = asyncio.run(main())
    print("Permit:", permit.to_canonical_json())
