"""Bridge contract event monitoring."""

from icmbridge.events.listener import BridgeEventListener, ObservedEvent

__all__ = [
    "BridgeEventListener",
    "ObservedEvent",
]
