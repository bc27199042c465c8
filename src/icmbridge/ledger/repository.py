"""Repository for bridge ledger operations."""

import json
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from icmbridge.ledger.models import BridgeEvent, SubmittedTransaction


class BridgeRepository:
    """Repository for observed events and submitted transactions."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # Event operations
    async def get_event(self, transaction_hash: str, log_index: int) -> Optional[BridgeEvent]:
        """Get an event by its on-chain position."""
        stmt = select(BridgeEvent).where(
            BridgeEvent.transaction_hash == transaction_hash,
            BridgeEvent.log_index == log_index,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def record_event(
        self,
        event_name: str,
        block_number: int,
        transaction_hash: str,
        log_index: int,
        **fields: Any,
    ) -> Optional[BridgeEvent]:
        """Store an observed event.

        Returns:
            The new row, or None if the event was already recorded
        """
        existing = await self.get_event(transaction_hash, log_index)
        if existing is not None:
            return None

        event = BridgeEvent(
            event_name=event_name,
            block_number=block_number,
            transaction_hash=transaction_hash,
            log_index=log_index,
            **fields,
        )
        self.session.add(event)
        await self.session.flush()
        return event

    async def list_events(
        self,
        event_name: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[BridgeEvent]:
        """List events, newest block first."""
        stmt = select(BridgeEvent)
        if event_name:
            stmt = stmt.where(BridgeEvent.event_name == event_name)
        stmt = (
            stmt.order_by(BridgeEvent.block_number.desc(), BridgeEvent.log_index.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_events(self, event_name: Optional[str] = None) -> int:
        stmt = select(func.count(BridgeEvent.id))
        if event_name:
            stmt = stmt.where(BridgeEvent.event_name == event_name)
        return await self.session.scalar(stmt) or 0

    async def get_last_event_block(self) -> Optional[int]:
        """Highest block number with a recorded event."""
        return await self.session.scalar(select(func.max(BridgeEvent.block_number)))

    # Submission operations
    async def record_submission(
        self,
        operation: str,
        transaction_hash: Optional[str],
        sender: Optional[str] = None,
        parameters: Optional[dict] = None,
        value_wei: int = 0,
    ) -> SubmittedTransaction:
        """Store a transaction this server broadcast."""
        submission = SubmittedTransaction(
            operation=operation,
            transaction_hash=transaction_hash,
            sender=sender,
            parameters=json.dumps(parameters, sort_keys=True) if parameters is not None else None,
            value_wei=str(value_wei),
        )
        self.session.add(submission)
        await self.session.flush()
        return submission

    async def get_submission_by_hash(self, transaction_hash: str) -> Optional[SubmittedTransaction]:
        stmt = select(SubmittedTransaction).where(
            SubmittedTransaction.transaction_hash == transaction_hash
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_submissions(
        self,
        operation: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[SubmittedTransaction]:
        """List submissions, newest first."""
        stmt = select(SubmittedTransaction)
        if operation:
            stmt = stmt.where(SubmittedTransaction.operation == operation)
        stmt = stmt.order_by(SubmittedTransaction.id.desc()).limit(limit).offset(offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_submissions(self, operation: Optional[str] = None) -> int:
        stmt = select(func.count(SubmittedTransaction.id))
        if operation:
            stmt = stmt.where(SubmittedTransaction.operation == operation)
        return await self.session.scalar(stmt) or 0
