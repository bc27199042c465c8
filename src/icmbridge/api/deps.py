"""FastAPI dependencies."""

from typing import Optional

from fastapi import Depends, Header, Request

from icmbridge.config import get_settings
from icmbridge.contract.bridge import BridgeContract
from icmbridge.contract.errors import (
    AdminAccessError,
    BridgeError,
    SignerNotConfiguredError,
)


class BridgeUnavailableError(BridgeError):
    """Raised when the contract client has not been initialized."""

    status_code = 503
    default_message = "Blockchain connection not initialized"


def get_bridge(request: Request) -> BridgeContract:
    """Return the application's contract client."""
    bridge = getattr(request.app.state, "bridge", None)
    if bridge is None:
        raise BridgeUnavailableError()
    return bridge


def require_signer(bridge: BridgeContract = Depends(get_bridge)) -> BridgeContract:
    """Require a configured signing wallet for bridge transactions."""
    if not bridge.can_transact:
        raise SignerNotConfiguredError()
    return bridge


def require_admin(
    bridge: BridgeContract = Depends(get_bridge),
    x_admin_token: Optional[str] = Header(None),
) -> BridgeContract:
    """Require a signer, and the admin token when ADMIN_TOKEN is set.

    Without ADMIN_TOKEN, access is allowed (dev mode).
    """
    if not bridge.can_transact:
        raise AdminAccessError()

    settings = get_settings()
    if settings.admin_token and x_admin_token != settings.admin_token:
        raise AdminAccessError("Invalid admin token")

    return bridge
