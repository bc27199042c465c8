"""Ledger module for observed bridge events and submitted transactions."""

from icmbridge.ledger.database import close_db, get_db, init_db
from icmbridge.ledger.models import (
    BridgeEvent,
    SubmittedTransaction,
)
from icmbridge.ledger.repository import BridgeRepository

__all__ = [
    # Models
    "BridgeEvent",
    "SubmittedTransaction",
    # Database
    "get_db",
    "init_db",
    "close_db",
    "BridgeRepository",
]
