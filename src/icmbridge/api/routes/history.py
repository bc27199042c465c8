"""Ledger history: observed events and transactions sent by this server."""

from typing import Optional

from fastapi import APIRouter, Query

from icmbridge.api.helpers import ok
from icmbridge.contract.abi import BRIDGE_EVENTS
from icmbridge.contract.errors import BridgeError, InvalidParameterError
from icmbridge.ledger.database import get_db
from icmbridge.ledger.repository import BridgeRepository

router = APIRouter()


class SubmissionNotFoundError(BridgeError):
    status_code = 404
    default_message = "Submission not found"


@router.get("/events")
async def list_events(
    event: Optional[str] = None,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> dict:
    """List recorded bridge events, newest first."""
    if event and event not in BRIDGE_EVENTS:
        raise InvalidParameterError(f"Unknown event: {event}")

    async with get_db() as session:
        repo = BridgeRepository(session)
        events = await repo.list_events(event_name=event, limit=limit, offset=offset)
        total = await repo.count_events(event_name=event)

    return ok(
        {
            "events": [e.to_dict() for e in events],
            "total": total,
            "limit": limit,
            "offset": offset,
        }
    )


@router.get("/submissions")
async def list_submissions(
    operation: Optional[str] = None,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> dict:
    """List contract transactions broadcast by this server, newest first."""
    async with get_db() as session:
        repo = BridgeRepository(session)
        submissions = await repo.list_submissions(operation=operation, limit=limit, offset=offset)
        total = await repo.count_submissions(operation=operation)

    return ok(
        {
            "submissions": [s.to_dict() for s in submissions],
            "total": total,
            "limit": limit,
            "offset": offset,
        }
    )


@router.get("/submissions/{tx_hash}")
async def get_submission(tx_hash: str) -> dict:
    """Look up a broadcast transaction by hash."""
    async with get_db() as session:
        submission = await BridgeRepository(session).get_submission_by_hash(tx_hash)

    if submission is None:
        raise SubmissionNotFoundError()

    return ok(submission.to_dict())
