"""Admin API endpoints.

All routes send owner-only contract transactions from the configured
wallet. They require PRIVATE_KEY, and the X-Admin-Token header when
ADMIN_TOKEN is set.
"""

import logging

from fastapi import APIRouter, Depends

from icmbridge.api.deps import require_admin
from icmbridge.api.helpers import (
    ok,
    operation,
    record_submission,
    require_address,
    require_amount,
    require_chain_id,
    require_wei,
)
from icmbridge.api.schemas import (
    ChainRequest,
    EmergencyWithdrawRequest,
    EnableChainRequest,
    SetFeeRecipientRequest,
    SetFeeRequest,
    TokenRequest,
    WhitelistTokenRequest,
)
from icmbridge.contract.bridge import BridgeContract
from icmbridge.contract.codec import format_ether
from icmbridge.contract.errors import InvalidParameterError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/token/whitelist")
async def whitelist_token(
    request: WhitelistTokenRequest,
    bridge: BridgeContract = Depends(require_admin),
) -> dict:
    """Allow a token to be bridged and pair it with its counterpart."""
    if not request.token_address or not request.counterpart_token:
        raise InvalidParameterError("Invalid token addresses")
    token = require_address(request.token_address, "Invalid token addresses")
    counterpart = require_address(request.counterpart_token, "Invalid token addresses")
    min_amount = require_wei(request.min_amount, "Invalid amount limits")
    max_amount = require_wei(request.max_amount, "Invalid amount limits")

    async with operation("whitelisting token"):
        tx_hash = await bridge.whitelist_token(
            token, request.is_native, counterpart, min_amount, max_amount
        )

    await record_submission(
        bridge,
        "whitelistToken",
        tx_hash,
        parameters={
            "tokenAddress": token,
            "isNative": request.is_native,
            "counterpartToken": counterpart,
            "minAmount": str(min_amount),
            "maxAmount": str(max_amount),
        },
    )

    return ok(
        {
            "transactionHash": tx_hash,
            "tokenAddress": token,
            "isNative": request.is_native,
            "counterpartToken": counterpart,
        }
    )


@router.post("/token/blacklist")
async def blacklist_token(
    request: TokenRequest,
    bridge: BridgeContract = Depends(require_admin),
) -> dict:
    """Remove a token from the whitelist."""
    token = require_address(request.token_address, "Invalid token address")

    async with operation("blacklisting token"):
        tx_hash = await bridge.blacklist_token(token)

    await record_submission(bridge, "blacklistToken", tx_hash, parameters={"tokenAddress": token})

    return ok({"transactionHash": tx_hash, "tokenAddress": token})


@router.post("/chain/enable")
async def enable_chain(
    request: EnableChainRequest,
    bridge: BridgeContract = Depends(require_admin),
) -> dict:
    """Enable a remote chain and register its bridge contract."""
    if not request.chain_id:
        raise InvalidParameterError()
    bridge_address = require_address(request.bridge_address, "Invalid parameters")
    chain = require_chain_id(request.chain_id)

    async with operation("enabling chain"):
        tx_hash = await bridge.enable_chain(chain, bridge_address)

    await record_submission(
        bridge,
        "enableChain",
        tx_hash,
        parameters={"chainId": request.chain_id, "bridgeAddress": bridge_address},
    )

    return ok(
        {
            "transactionHash": tx_hash,
            "chainId": request.chain_id,
            "bridgeAddress": bridge_address,
        }
    )


@router.post("/chain/disable")
async def disable_chain(
    request: ChainRequest,
    bridge: BridgeContract = Depends(require_admin),
) -> dict:
    chain = require_chain_id(request.chain_id, "Chain ID required")

    async with operation("disabling chain"):
        tx_hash = await bridge.disable_chain(chain)

    await record_submission(bridge, "disableChain", tx_hash, parameters={"chainId": request.chain_id})

    return ok({"transactionHash": tx_hash, "chainId": request.chain_id})


@router.post("/fee/set")
async def set_bridge_fee(
    request: SetFeeRequest,
    bridge: BridgeContract = Depends(require_admin),
) -> dict:
    """Set the bridge fee (ether units). Zero disables the fee."""
    fee_wei = require_amount(request.fee, "Invalid fee amount", allow_zero=True)

    async with operation("setting bridge fee"):
        tx_hash = await bridge.set_bridge_fee(fee_wei)

    await record_submission(bridge, "setBridgeFee", tx_hash, parameters={"fee": str(fee_wei)})

    return ok({"transactionHash": tx_hash, "newFee": format_ether(fee_wei)})


@router.post("/fee/recipient")
async def set_fee_recipient(
    request: SetFeeRecipientRequest,
    bridge: BridgeContract = Depends(require_admin),
) -> dict:
    recipient = require_address(request.recipient, "Invalid recipient address")

    async with operation("setting fee recipient"):
        tx_hash = await bridge.set_fee_recipient(recipient)

    await record_submission(bridge, "setFeeRecipient", tx_hash, parameters={"recipient": recipient})

    return ok({"transactionHash": tx_hash, "feeRecipient": recipient})


@router.post("/fees/withdraw")
async def withdraw_fees(bridge: BridgeContract = Depends(require_admin)) -> dict:
    """Send collected fees to the fee recipient."""
    async with operation("withdrawing fees"):
        tx_hash = await bridge.withdraw_fees()

    await record_submission(bridge, "withdrawFees", tx_hash)

    return ok({"transactionHash": tx_hash})


@router.post("/pause")
async def pause_contract(bridge: BridgeContract = Depends(require_admin)) -> dict:
    async with operation("pausing contract"):
        tx_hash = await bridge.pause()

    await record_submission(bridge, "pause", tx_hash)

    return ok({"transactionHash": tx_hash})


@router.post("/unpause")
async def unpause_contract(bridge: BridgeContract = Depends(require_admin)) -> dict:
    async with operation("unpausing contract"):
        tx_hash = await bridge.unpause()

    await record_submission(bridge, "unpause", tx_hash)

    return ok({"transactionHash": tx_hash})


@router.post("/emergency/withdraw")
async def emergency_withdraw(
    request: EmergencyWithdrawRequest,
    bridge: BridgeContract = Depends(require_admin),
) -> dict:
    """Pull a token balance out of the bridge (amount in wei)."""
    token = require_address(request.token_address, "Invalid token address")
    amount = require_wei(request.amount, "Invalid amount")
    if amount == 0:
        raise InvalidParameterError("Invalid amount")

    logger.warning(f"Emergency withdrawal of {amount} wei of token {token} requested")

    async with operation("emergency withdrawal"):
        tx_hash = await bridge.emergency_withdraw(token, amount)

    await record_submission(
        bridge,
        "emergencyWithdraw",
        tx_hash,
        parameters={"tokenAddress": token, "amount": str(amount)},
    )

    return ok({"transactionHash": tx_hash, "tokenAddress": token, "amount": str(amount)})


@router.post("/emergency/withdraw-native")
async def emergency_withdraw_native(bridge: BridgeContract = Depends(require_admin)) -> dict:
    """Pull the contract's native balance out of the bridge."""
    logger.warning("Emergency withdrawal of native balance requested")

    async with operation("emergency native withdrawal"):
        tx_hash = await bridge.emergency_withdraw_native()

    await record_submission(bridge, "emergencyWithdrawETH", tx_hash)

    return ok({"transactionHash": tx_hash})
