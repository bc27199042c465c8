"""Bridge information and token transfer endpoints."""

import logging

from fastapi import APIRouter, Depends

from icmbridge.api.deps import get_bridge, require_signer
from icmbridge.api.helpers import (
    ok,
    operation,
    record_submission,
    require_address,
    require_amount,
    require_chain_id,
)
from icmbridge.api.schemas import BurnRequest, LockRequest
from icmbridge.contract.bridge import BridgeContract
from icmbridge.contract.codec import decode_chain_id, format_ether
from icmbridge.contract.errors import InvalidParameterError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bridge")


def _chain_name(chain_id_hex: str):
    try:
        return decode_chain_id(chain_id_hex)
    except (ValueError, UnicodeDecodeError):
        return None


@router.get("/info")
async def get_bridge_info(bridge: BridgeContract = Depends(get_bridge)) -> dict:
    """Fee, ownership and pause state of the bridge contract."""
    async with operation("fetching bridge info"):
        info = await bridge.get_bridge_info()

    return ok(
        {
            "bridgeFee": format_ether(info["bridge_fee"]),
            "totalFeesCollected": format_ether(info["total_fees_collected"]),
            "feeRecipient": info["fee_recipient"],
            "chainId": info["chain_id"],
            "chainName": _chain_name(info["chain_id"]),
            "owner": info["owner"],
            "paused": info["paused"],
            "contractAddress": bridge.address,
        }
    )


@router.post("/lock")
async def lock_tokens(
    request: LockRequest,
    bridge: BridgeContract = Depends(require_signer),
) -> dict:
    """Lock tokens and send them to a destination chain.

    The current bridge fee is attached as transaction value.
    """
    if not request.destination_chain or request.amount in (None, "", 0) or not request.token_address:
        raise InvalidParameterError()
    token = require_address(request.token_address, "Invalid parameters")
    amount_wei = require_amount(request.amount)
    chain = require_chain_id(request.destination_chain)

    async with operation("locking tokens"):
        tx_hash, fee = await bridge.lock_and_bridge(chain, amount_wei, token)

    await record_submission(
        bridge,
        "lockAndBridge",
        tx_hash,
        parameters={
            "destinationChain": request.destination_chain,
            "amount": str(amount_wei),
            "tokenAddress": token,
            "userAddress": request.user_address,
        },
        value_wei=fee,
    )

    return ok(
        {
            "transactionHash": tx_hash,
            "destinationChain": request.destination_chain,
            "amount": str(request.amount),
            "tokenAddress": token,
            "bridgeFee": format_ether(fee),
        }
    )


@router.post("/burn")
async def burn_tokens(
    request: BurnRequest,
    bridge: BridgeContract = Depends(require_signer),
) -> dict:
    """Burn wrapped tokens so they are released on their source chain."""
    if not request.source_chain or request.amount in (None, "", 0) or not request.token_address:
        raise InvalidParameterError()
    token = require_address(request.token_address, "Invalid parameters")
    amount_wei = require_amount(request.amount)
    chain = require_chain_id(request.source_chain)

    async with operation("burning tokens"):
        tx_hash, fee = await bridge.burn_and_bridge(chain, amount_wei, token)

    await record_submission(
        bridge,
        "burnAndBridge",
        tx_hash,
        parameters={
            "sourceChain": request.source_chain,
            "amount": str(amount_wei),
            "tokenAddress": token,
        },
        value_wei=fee,
    )

    return ok(
        {
            "transactionHash": tx_hash,
            "sourceChain": request.source_chain,
            "amount": str(request.amount),
            "tokenAddress": token,
            "bridgeFee": format_ether(fee),
        }
    )
