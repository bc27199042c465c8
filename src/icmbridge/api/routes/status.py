"""Chain, transaction, message and user status lookups."""

from fastapi import APIRouter, Depends

from icmbridge.api.deps import get_bridge
from icmbridge.api.helpers import ok, operation, require_address, require_bytes32, require_chain_id
from icmbridge.contract.bridge import BridgeContract
from icmbridge.contract.codec import to_hex

router = APIRouter()


@router.get("/chain/{chain_id}/enabled")
async def is_chain_enabled(chain_id: str, bridge: BridgeContract = Depends(get_bridge)) -> dict:
    """Whether the bridge accepts transfers to or from a chain."""
    chain = require_chain_id(chain_id, "Invalid chain identifier")

    async with operation("checking chain status"):
        enabled = await bridge.is_chain_enabled(chain)

    return ok({"chainId": chain_id, "isEnabled": enabled})


@router.get("/transaction/{tx_id}")
async def get_pending_transaction(tx_id: str, bridge: BridgeContract = Depends(get_bridge)) -> dict:
    """Bridge transaction recorded by the contract under a bridge tx id."""
    tx_id_bytes = require_bytes32(tx_id, "Invalid transaction id")

    async with operation("fetching pending transaction"):
        pending = await bridge.get_pending_transaction(tx_id_bytes)

    return ok(
        {
            "txId": tx_id,
            "user": pending["user"],
            "amount": str(pending["amount"]),
            "destinationChain": to_hex(pending["destinationChain"]),
            "timestamp": str(pending["timestamp"]),
            "completed": bool(pending["completed"]),
            "token": pending["token"],
            "messageType": pending["messageType"],
        }
    )


@router.get("/message/{message_hash}/processed")
async def is_message_processed(message_hash: str, bridge: BridgeContract = Depends(get_bridge)) -> dict:
    """Whether an ICM message has already been consumed."""
    hash_bytes = require_bytes32(message_hash, "Invalid message hash")

    async with operation("checking message status"):
        processed = await bridge.is_message_processed(hash_bytes)

    return ok({"messageHash": message_hash, "isProcessed": processed})


@router.get("/user/{address}/nonce")
async def get_user_nonce(address: str, bridge: BridgeContract = Depends(get_bridge)) -> dict:
    """Bridge nonce of a user."""
    require_address(address, "Invalid user address")

    async with operation("fetching user nonce"):
        nonce = await bridge.get_user_nonce(address)

    return ok({"userAddress": address, "nonce": str(nonce)})
