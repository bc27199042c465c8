"""Shared route helpers: input validation, error context, ledger writes."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Optional

from sqlalchemy.exc import SQLAlchemyError

from icmbridge.contract.bridge import BridgeContract
from icmbridge.contract.codec import (
    encode_chain_id,
    is_valid_address,
    parse_amount,
    parse_bytes32,
)
from icmbridge.contract.errors import BridgeError, InvalidParameterError, classify_error
from icmbridge.ledger.database import get_db
from icmbridge.ledger.repository import BridgeRepository

logger = logging.getLogger(__name__)


def ok(data: dict) -> dict:
    """Wrap a payload in the success envelope."""
    return {"success": True, "data": data}


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def require_address(value: Any, message: str) -> str:
    if not is_valid_address(value):
        raise InvalidParameterError(message)
    return value.strip()


def require_amount(value: Any, message: str = "Invalid amount", allow_zero: bool = False) -> int:
    wei = parse_amount(value, allow_zero=allow_zero)
    if wei is None:
        raise InvalidParameterError(message)
    return wei


def require_wei(value: Any, message: str) -> int:
    """Parse a non-negative integer amount given in wei."""
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise InvalidParameterError(message)
    try:
        wei = int(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(message)
    if wei < 0:
        raise InvalidParameterError(message)
    return wei


def require_chain_id(value: Any, message: str = "Invalid parameters") -> bytes:
    if not value:
        raise InvalidParameterError(message)
    try:
        return encode_chain_id(value)
    except ValueError as e:
        raise InvalidParameterError("Invalid chain identifier", details=str(e))


def require_bytes32(value: Any, message: str) -> bytes:
    try:
        return parse_bytes32(value)
    except ValueError as e:
        raise InvalidParameterError(message, details=str(e))


@asynccontextmanager
async def operation(name: str) -> AsyncGenerator[None, None]:
    """Log failures of a contract operation and normalize them to BridgeError."""
    try:
        yield
    except BridgeError as e:
        log = logger.warning if e.status_code < 500 else logger.error
        log(f"Error during {name}: {e.message} ({e.details})")
        raise
    except Exception as e:
        error = classify_error(e)
        logger.error(f"Error during {name}: {e}", exc_info=True)
        raise error from e


async def record_submission(
    bridge: BridgeContract,
    operation_name: str,
    tx_hash: str,
    parameters: Optional[dict] = None,
    value_wei: int = 0,
) -> None:
    """Store a broadcast transaction in the ledger.

    The transaction is already on its way, so a ledger failure is logged
    rather than turned into an error response.
    """
    try:
        async with get_db() as session:
            await BridgeRepository(session).record_submission(
                operation=operation_name,
                transaction_hash=tx_hash,
                sender=bridge.signer.address if bridge.signer else None,
                parameters=parameters,
                value_wei=value_wei,
            )
    except SQLAlchemyError as e:
        logger.error(f"Failed to record {operation_name} submission {tx_hash}: {e}")
