"""Errors raised while talking to the bridge contract.

Every error carries the HTTP status and the public message the API
reports for it; ``details`` holds the underlying cause.
"""

import logging
from typing import Optional

from web3.exceptions import ContractLogicError, Web3Exception

logger = logging.getLogger(__name__)


class BridgeError(Exception):
    """Base class for bridge API errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"success": False, "error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidParameterError(BridgeError):
    """Request input failed validation."""

    status_code = 400
    default_message = "Invalid parameters"


class ContractCallError(BridgeError):
    """The contract reverted the call."""

    status_code = 400
    default_message = "Contract call failed"


class InsufficientFundsError(BridgeError):
    """The sending wallet cannot cover value plus gas."""

    status_code = 400
    default_message = "Insufficient funds for transaction"


class GasEstimationError(BridgeError):
    """Gas estimation failed for a reason other than a revert."""

    status_code = 400
    default_message = "Transaction would fail - check parameters"


class SignerNotConfiguredError(BridgeError):
    """A transaction was requested but no private key is configured."""

    status_code = 400
    default_message = "Admin wallet not configured"


class AdminAccessError(BridgeError):
    """Admin endpoint called without a signer or with a bad token."""

    status_code = 401
    default_message = "Admin access not configured"


def _is_insufficient_funds(exc: BaseException) -> bool:
    return "insufficient funds" in str(exc).lower()


def classify_error(exc: BaseException, during_estimate: bool = False) -> BridgeError:
    """Map a web3/RPC exception to a BridgeError.

    Args:
        exc: The exception raised by web3 or the RPC node
        during_estimate: True when the failure happened in eth_estimateGas

    Returns:
        BridgeError subclass instance describing the failure
    """
    if isinstance(exc, BridgeError):
        return exc

    details = str(exc)

    if isinstance(exc, ContractLogicError):
        reason = exc.message or details
        return ContractCallError(f"Contract call failed: {reason}", details=details)

    if _is_insufficient_funds(exc):
        return InsufficientFundsError(details=details)

    if during_estimate and isinstance(exc, (Web3Exception, ValueError)):
        return GasEstimationError(details=details)

    return BridgeError(details=details)
