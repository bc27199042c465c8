"""Health check endpoints."""

from fastapi import APIRouter, Request

from icmbridge import __version__
from icmbridge.api.helpers import utc_now_iso
from icmbridge.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    settings = get_settings()
    return {
        "success": True,
        "message": "ICM Bridge API is running",
        "contractAddress": settings.contract_address,
        "timestamp": utc_now_iso(),
    }


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Detailed health check with configuration info."""
    settings = get_settings()
    bridge = getattr(request.app.state, "bridge", None)
    return {
        "success": True,
        "message": "ICM Bridge API is running",
        "version": __version__,
        "contractAddress": settings.contract_address,
        "connected": bridge is not None,
        "signer": bridge.signer.address if bridge is not None and bridge.signer else None,
        "timestamp": utc_now_iso(),
        "config": settings.get_safe_dict(),
    }
