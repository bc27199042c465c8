"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from icmbridge import __version__
from icmbridge.config import get_settings
from icmbridge.contract.bridge import BridgeContract
from icmbridge.contract.errors import BridgeError
from icmbridge.ledger.database import close_db, init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    await init_db()
    if app.state.bridge is None:
        bridge = BridgeContract.from_settings(get_settings())
        try:
            await bridge.verify_connection()
        except BridgeError as e:
            logger.error(f"Failed to initialize blockchain connection: {e.details or e.message}")
            raise
        app.state.bridge = bridge
    yield
    # Shutdown
    await close_db()


async def bridge_error_handler(request: Request, exc: BridgeError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug(f"Rejected request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Invalid parameters", "details": str(exc.errors())},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error", "details": str(exc)},
    )


def create_app(bridge: Optional[BridgeContract] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        bridge: Contract client to use; built from settings on startup if None
    """
    settings = get_settings()

    app = FastAPI(
        title="ICM Bridge API",
        description="HTTP proxy for the Avalanche ICM token bridge contract",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.bridge = bridge

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BridgeError, bridge_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    @app.middleware("http")
    async def catch_unhandled_errors(request: Request, call_next):
        # Any other failure still gets the JSON error envelope
        try:
            return await call_next(request)
        except Exception as e:
            return await unhandled_error_handler(request, e)

    # Register routes
    from icmbridge.api.routers import admin
    from icmbridge.api.routes import bridge as bridge_routes
    from icmbridge.api.routes import health, history, status, tokens

    app.include_router(health.router, tags=["Health"])
    app.include_router(bridge_routes.router, tags=["Bridge"])
    app.include_router(tokens.router, tags=["Tokens"])
    app.include_router(status.router, tags=["Status"])
    app.include_router(history.router, tags=["History"])
    app.include_router(admin.router, tags=["Admin"])

    return app
