"""SQLAlchemy models for the bridge ledger."""

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Index, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class BridgeEvent(Base):
    """A contract event observed on chain.

    Token events fill user/amount/token/tx_id; message events fill
    message_id and message_type. ``chain`` is the destination or source
    chain id depending on the event.
    """

    __tablename__ = "bridge_events"
    __table_args__ = (
        Index("ix_bridge_events_tx_log", "transaction_hash", "log_index", unique=True),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    event_name: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    block_number: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    transaction_hash: Mapped[str] = mapped_column(String(66), nullable=False)
    log_index: Mapped[int] = mapped_column(nullable=False)

    user: Mapped[Optional[str]] = mapped_column(String(42), nullable=True, index=True)
    amount: Mapped[Optional[str]] = mapped_column(String(78), nullable=True)  # uint256 as text
    token: Mapped[Optional[str]] = mapped_column(String(42), nullable=True)
    chain: Mapped[Optional[str]] = mapped_column(String(66), nullable=True)
    bridge_tx_id: Mapped[Optional[str]] = mapped_column(String(66), nullable=True, index=True)
    message_id: Mapped[Optional[str]] = mapped_column(String(66), nullable=True)
    message_type: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    observed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "event": self.event_name,
            "blockNumber": self.block_number,
            "transactionHash": self.transaction_hash,
            "logIndex": self.log_index,
            "user": self.user,
            "amount": self.amount,
            "token": self.token,
            "chain": self.chain,
            "txId": self.bridge_tx_id,
            "messageId": self.message_id,
            "messageType": self.message_type,
            "observedAt": self.observed_at.isoformat() if self.observed_at else None,
        }


class SubmittedTransaction(Base):
    """A contract transaction broadcast by this server."""

    __tablename__ = "submitted_transactions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    operation: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    transaction_hash: Mapped[Optional[str]] = mapped_column(
        String(66), nullable=True, unique=True
    )
    sender: Mapped[Optional[str]] = mapped_column(String(42), nullable=True)
    parameters: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # JSON
    value_wei: Mapped[str] = mapped_column(String(78), default="0")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "operation": self.operation,
            "transactionHash": self.transaction_hash,
            "sender": self.sender,
            "parameters": self.parameters,
            "value": self.value_wei,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
