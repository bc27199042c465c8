"""ICM bridge contract access: ABI, argument codecs and the async client."""

from icmbridge.contract.abi import BRIDGE_ABI, BRIDGE_EVENTS, DEFAULT_CONTRACT_ADDRESS
from icmbridge.contract.bridge import BridgeContract
from icmbridge.contract.errors import (
    AdminAccessError,
    BridgeError,
    ContractCallError,
    GasEstimationError,
    InsufficientFundsError,
    InvalidParameterError,
    SignerNotConfiguredError,
)

__all__ = [
    "BRIDGE_ABI",
    "BRIDGE_EVENTS",
    "DEFAULT_CONTRACT_ADDRESS",
    "BridgeContract",
    # Errors
    "AdminAccessError",
    "BridgeError",
    "ContractCallError",
    "GasEstimationError",
    "InsufficientFundsError",
    "InvalidParameterError",
    "SignerNotConfiguredError",
]
