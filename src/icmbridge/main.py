"""Main entry point - runs the API server and the event listener."""

import asyncio
import logging
import signal
from typing import Optional

import uvicorn

from icmbridge.api.app import create_app
from icmbridge.config import get_settings
from icmbridge.contract.bridge import BridgeContract
from icmbridge.events.listener import BridgeEventListener
from icmbridge.ledger.database import close_db, init_db

logger = logging.getLogger(__name__)


class Application:
    """Main application that runs the API and the event listener."""

    def __init__(self):
        self.settings = get_settings()
        self.bridge: Optional[BridgeContract] = None
        self.listener: Optional[BridgeEventListener] = None
        self._shutdown_event = asyncio.Event()

    async def start(self):
        """Start all services."""
        # Configure logging
        log_level = logging.DEBUG if self.settings.debug else logging.INFO
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

        logger.info("Starting ICM Bridge API...")
        logger.info(f"Environment: {self.settings.environment}")

        await init_db()
        logger.info("Database initialized")

        self.bridge = BridgeContract.from_settings(self.settings)
        await self.bridge.verify_connection()
        if not self.bridge.can_transact:
            logger.warning("PRIVATE_KEY not set - bridge and admin transactions disabled")

        tasks = []

        if self.settings.event_listener_enabled:
            self.listener = BridgeEventListener(
                self.bridge,
                poll_interval=self.settings.event_poll_interval,
                lookback_blocks=self.settings.event_lookback_blocks,
                max_block_range=self.settings.event_max_block_range,
            )
            await self.listener.resume_from_ledger()
            tasks.append(asyncio.create_task(self._run_listener()))
            logger.info("Event listener task created")
        else:
            logger.warning("EVENT_LISTENER_ENABLED is false - event listener disabled")

        tasks.append(asyncio.create_task(self._run_api()))
        logger.info("API task created")

        # Wait for shutdown signal
        await self._shutdown_event.wait()

        if self.listener:
            self.listener.stop()

        for task in tasks:
            task.cancel()

        await asyncio.gather(*tasks, return_exceptions=True)

        await self._cleanup()

    async def _run_listener(self):
        """Run the event polling loop."""
        try:
            await self.listener.run()
        except asyncio.CancelledError:
            logger.info("Event listener cancelled")

    async def _run_api(self):
        """Run the FastAPI server."""
        try:
            app = create_app(bridge=self.bridge)
            config = uvicorn.Config(
                app,
                host=self.settings.api_host,
                port=self.settings.api_port,
                log_level="debug" if self.settings.debug else "info",
            )
            server = uvicorn.Server(config)
            logger.info(f"ICM Bridge API server running on port {self.settings.api_port}")
            logger.info(f"Health check: http://localhost:{self.settings.api_port}/health")
            await server.serve()
        except asyncio.CancelledError:
            logger.info("API server cancelled")
        except Exception as e:
            logger.error(f"API error: {e}")
            raise
        finally:
            # uvicorn exiting on its own (e.g. port in use) ends the application
            self._shutdown_event.set()

    async def _cleanup(self):
        """Cleanup resources."""
        logger.info("Shutting down gracefully...")
        await close_db()
        logger.info("Cleanup complete")

    def shutdown(self):
        """Signal shutdown."""
        logger.info("Shutdown requested")
        self._shutdown_event.set()


def main():
    """Main entry point."""
    app = Application()

    # Setup signal handlers
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, app.shutdown)

    try:
        loop.run_until_complete(app.start())
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
    finally:
        loop.close()


if __name__ == "__main__":
    main()
