"""Local transaction signing.

Uses an in-memory private key loaded from PRIVATE_KEY.

WARNING: The key gives full control of the bridge admin wallet. Keep it
out of logs and use a dedicated low-balance wallet.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount

logger = logging.getLogger(__name__)


class LocalSigner:
    """Signs transactions with a local key and hands out nonces.

    Nonces come from the node's pending count, but a local counter keeps
    concurrent submissions from reusing one before the node has seen the
    previous transaction.
    """

    def __init__(self, private_key: str):
        key = private_key.strip()
        if not key.startswith("0x"):
            key = f"0x{key}"
        self._account: LocalAccount = Account.from_key(key)
        self._next_nonce: Optional[int] = None
        self._lock = asyncio.Lock()
        logger.info(f"Loaded signer {self.address}")

    @classmethod
    def from_settings(cls, private_key: Optional[str]) -> Optional["LocalSigner"]:
        """Create a signer if a key is configured."""
        if not private_key or not private_key.strip():
            return None
        return cls(private_key)

    @property
    def address(self) -> str:
        return self._account.address

    @property
    def lock(self) -> asyncio.Lock:
        """Lock held from nonce allocation until broadcast."""
        return self._lock

    async def allocate_nonce(self, fetch_pending: Callable[[str], Awaitable[int]]) -> int:
        """Return the next nonce to use. Caller must hold ``lock``.

        Args:
            fetch_pending: Coroutine returning the node's pending transaction count
        """
        chain_nonce = await fetch_pending(self.address)
        nonce = max(chain_nonce, self._next_nonce or 0)
        self._next_nonce = nonce + 1
        return nonce

    def release_nonce(self, nonce: int) -> None:
        """Give back a nonce whose transaction was never broadcast."""
        if self._next_nonce == nonce + 1:
            self._next_nonce = nonce

    def reset(self) -> None:
        """Forget the local nonce counter."""
        self._next_nonce = None

    def sign_transaction(self, tx: dict) -> bytes:
        """Sign a transaction dict and return the raw encoded bytes."""
        signed = self._account.sign_transaction(tx)
        return bytes(signed.raw_transaction)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(address={self.address})"
