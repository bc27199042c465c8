"""Polling listener for bridge contract events.

Scans new blocks for token and ICM message events, logs each one and
stores it in the ledger. Recording is idempotent on
(transaction hash, log index); a rescanned block records nothing new.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from icmbridge.contract.abi import BRIDGE_EVENTS
from icmbridge.contract.codec import to_hex
from icmbridge.ledger.database import get_db
from icmbridge.ledger.repository import BridgeRepository

logger = logging.getLogger(__name__)

EVENT_LABELS = {
    "TokensLocked": "Tokens Locked",
    "TokensMinted": "Tokens Minted",
    "TokensBurned": "Tokens Burned",
    "TokensUnlocked": "Tokens Unlocked",
    "ICMMessageSent": "ICM Message Sent",
    "ICMMessageReceived": "ICM Message Received",
}


@dataclass
class ObservedEvent:
    """A decoded bridge event."""

    event_name: str
    block_number: int
    transaction_hash: str
    log_index: int
    user: Optional[str] = None
    amount: Optional[int] = None
    token: Optional[str] = None
    chain: Optional[str] = None
    tx_id: Optional[str] = None
    message_id: Optional[str] = None
    message_type: Optional[str] = None

    @classmethod
    def from_log(cls, log: Any) -> "ObservedEvent":
        """Build from a web3 decoded log (AttributeDict or plain dict)."""
        args = log["args"]
        chain = args.get("destinationChain", args.get("sourceChain"))
        amount = args.get("amount")
        return cls(
            event_name=log["event"],
            block_number=int(log["blockNumber"]),
            transaction_hash=to_hex(log["transactionHash"]),
            log_index=int(log["logIndex"]),
            user=args.get("user"),
            amount=int(amount) if amount is not None else None,
            token=args.get("token"),
            chain=to_hex(chain) if chain is not None else None,
            tx_id=to_hex(args["txId"]) if args.get("txId") is not None else None,
            message_id=to_hex(args["messageId"]) if args.get("messageId") is not None else None,
            message_type=args.get("messageType"),
        )

    def to_record(self) -> dict:
        """Keyword arguments for BridgeRepository.record_event."""
        return {
            "event_name": self.event_name,
            "block_number": self.block_number,
            "transaction_hash": self.transaction_hash,
            "log_index": self.log_index,
            "user": self.user,
            "amount": str(self.amount) if self.amount is not None else None,
            "token": self.token,
            "chain": self.chain,
            "bridge_tx_id": self.tx_id,
            "message_id": self.message_id,
            "message_type": self.message_type,
        }


class BridgeEventListener:
    """Polls the bridge contract for new events."""

    def __init__(
        self,
        bridge,
        poll_interval: float = 15.0,
        lookback_blocks: int = 2000,
        max_block_range: int = 2048,
        start_block: Optional[int] = None,
        event_names: tuple[str, ...] = BRIDGE_EVENTS,
    ):
        """Initialize listener.

        Args:
            bridge: BridgeContract (or anything with get_block_number/get_event_logs)
            poll_interval: Seconds between scans
            lookback_blocks: How far behind the tip the first scan starts
            max_block_range: Largest range passed to a single log query
            start_block: Explicit first block, overrides lookback_blocks
            event_names: Events to watch
        """
        self.bridge = bridge
        self.poll_interval = poll_interval
        self.lookback_blocks = max(0, lookback_blocks)
        self.max_block_range = max(1, max_block_range)
        self.event_names = event_names
        self._next_block: Optional[int] = start_block
        self._running = False
        self._on_event_callback: Optional[Callable[[ObservedEvent], Awaitable[None]]] = None

    @property
    def next_block(self) -> Optional[int]:
        return self._next_block

    def set_event_callback(self, callback: Callable[[ObservedEvent], Awaitable[None]]) -> None:
        """Set callback for newly recorded events.

        Callback signature: async def callback(event: ObservedEvent) -> None
        """
        self._on_event_callback = callback

    async def resume_from_ledger(self) -> Optional[int]:
        """Continue after the newest recorded event when no start block is set."""
        if self._next_block is not None:
            return self._next_block

        async with get_db() as session:
            last_block = await BridgeRepository(session).get_last_event_block()

        if last_block is not None:
            # Re-scan the last block; recording is idempotent
            self._next_block = last_block
            logger.info(f"Resuming event scan from block {last_block}")
        return self._next_block

    def _block_ranges(self, start: int, end: int) -> list[tuple[int, int]]:
        ranges = []
        while start <= end:
            stop = min(start + self.max_block_range - 1, end)
            ranges.append((start, stop))
            start = stop + 1
        return ranges

    async def fetch_events(self, from_block: int, to_block: int) -> list[ObservedEvent]:
        """Fetch all watched events in an inclusive block range, in chain order."""
        events: list[ObservedEvent] = []
        for start, stop in self._block_ranges(from_block, to_block):
            for name in self.event_names:
                logs = await self.bridge.get_event_logs(name, start, stop)
                events.extend(ObservedEvent.from_log(log) for log in logs)

        events.sort(key=lambda e: (e.block_number, e.log_index))
        return events

    async def handle_event(self, event: ObservedEvent) -> bool:
        """Log and store an event.

        Returns:
            True if the event was new
        """
        async with get_db() as session:
            repo = BridgeRepository(session)
            row = await repo.record_event(**event.to_record())

        if row is None:
            logger.debug(f"Skipping already recorded event {event.transaction_hash}:{event.log_index}")
            return False

        label = EVENT_LABELS.get(event.event_name, event.event_name)
        if event.amount is not None:
            logger.info(
                f"{label}: user={event.user} amount={event.amount} chain={event.chain} "
                f"txId={event.tx_id} token={event.token} block={event.block_number} "
                f"tx={event.transaction_hash}"
            )
        else:
            logger.info(
                f"{label}: chain={event.chain} messageId={event.message_id} "
                f"type={event.message_type} block={event.block_number} "
                f"tx={event.transaction_hash}"
            )

        if self._on_event_callback:
            try:
                await self._on_event_callback(event)
            except Exception as e:
                logger.error(f"Event callback error for {event.transaction_hash}: {e}")

        return True

    async def scan_once(self) -> int:
        """Scan from the last scanned block up to the current tip.

        Returns:
            Number of new events recorded
        """
        latest = await self.bridge.get_block_number()

        if self._next_block is None:
            self._next_block = max(0, latest - self.lookback_blocks)

        from_block = self._next_block
        if from_block > latest:
            logger.debug(f"No new blocks (next={from_block}, tip={latest})")
            return 0

        events = await self.fetch_events(from_block, latest)

        recorded = 0
        for event in events:
            if await self.handle_event(event):
                recorded += 1

        self._next_block = latest + 1
        logger.debug(f"Scanned blocks [{from_block}, {latest}]: {recorded} new events")
        return recorded

    async def run(self) -> None:
        """Run the polling loop until stop() is called."""
        self._running = True
        logger.info(
            f"Event listeners started for {', '.join(self.event_names)} "
            f"(interval: {self.poll_interval}s)"
        )

        while self._running:
            try:
                recorded = await self.scan_once()
                if recorded:
                    logger.info(f"Recorded {recorded} new bridge events")
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Event listener error: {e}")

            await asyncio.sleep(self.poll_interval)

    def stop(self) -> None:
        """Stop the polling loop."""
        self._running = False
        logger.info("Stopping bridge event listener")
