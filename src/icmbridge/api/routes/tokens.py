"""Token configuration and balance endpoints."""

from fastapi import APIRouter, Depends

from icmbridge.api.deps import get_bridge
from icmbridge.api.helpers import ok, operation, require_address
from icmbridge.contract.bridge import BridgeContract

router = APIRouter(prefix="/token")


@router.get("/{address}/config")
async def get_token_config(address: str, bridge: BridgeContract = Depends(get_bridge)) -> dict:
    """Whitelist status and bridge limits of a token."""
    require_address(address, "Invalid token address")

    async with operation("fetching token config"):
        config = await bridge.get_token_config(address)

    return ok(
        {
            "tokenAddress": address,
            "isWhitelisted": bool(config["isWhitelisted"]),
            "isNative": bool(config["isNative"]),
            "counterpartToken": config["counterpartToken"],
            "minBridgeAmount": str(config["minBridgeAmount"]),
            "maxBridgeAmount": str(config["maxBridgeAmount"]),
        }
    )


@router.get("/{address}/balances")
async def get_token_balances(address: str, bridge: BridgeContract = Depends(get_bridge)) -> dict:
    """Locked and minted totals of a token held by the bridge."""
    require_address(address, "Invalid token address")

    async with operation("fetching token balances"):
        locked, minted = await bridge.get_token_balances(address)

    return ok(
        {
            "tokenAddress": address,
            "lockedBalance": str(locked),
            "mintedBalance": str(minted),
        }
    )
