"""Bridge event listener runner.

Runs the event listener without the HTTP API.

Usage:
    python -m icmbridge.events.runner --interval 15
    python -m icmbridge.events.runner --once --from-block 1200000

Environment variables:
    RPC_URL: JSON-RPC endpoint
    CONTRACT_ADDRESS: Bridge contract address
    EVENT_POLL_INTERVAL: Seconds between scans (default: 15)
    EVENT_LOOKBACK_BLOCKS: Blocks behind the tip for the first scan (default: 2000)
"""

import argparse
import asyncio
import logging

from icmbridge.config import get_settings
from icmbridge.contract.bridge import BridgeContract
from icmbridge.events.listener import BridgeEventListener
from icmbridge.ledger.database import close_db, init_db

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Watch ICM bridge contract events")
    parser.add_argument(
        "--interval",
        type=float,
        default=settings.event_poll_interval,
        help=f"Seconds between scans (default: {settings.event_poll_interval})",
    )
    parser.add_argument(
        "--lookback",
        type=int,
        default=settings.event_lookback_blocks,
        help=f"Blocks behind the tip to start from (default: {settings.event_lookback_blocks})",
    )
    parser.add_argument(
        "--from-block",
        type=int,
        default=None,
        help="Explicit first block (overrides --lookback)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run one scan and exit",
    )
    return parser


async def main(argv=None) -> int:
    """Main entry point."""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    args = build_parser().parse_args(argv)

    bridge = BridgeContract.from_settings(settings)
    await bridge.verify_connection()
    await init_db()

    listener = BridgeEventListener(
        bridge,
        poll_interval=args.interval,
        lookback_blocks=args.lookback,
        max_block_range=settings.event_max_block_range,
        start_block=args.from_block,
    )

    try:
        await listener.resume_from_ledger()
        if args.once:
            recorded = await listener.scan_once()
            print(f"Recorded {recorded} events")
        else:
            await listener.run()
    finally:
        await close_db()

    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
