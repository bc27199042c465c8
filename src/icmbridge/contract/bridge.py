"""Async wrapper around the deployed ICM bridge contract.

View calls go straight to the node. State-changing calls are gas-estimated,
signed locally and broadcast; the returned hash is not waited on.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Optional

from aiohttp import ClientTimeout
from web3 import AsyncWeb3

from icmbridge.contract.abi import (
    BRIDGE_ABI,
    PENDING_TRANSACTION_COMPONENTS,
    TOKEN_CONFIG_COMPONENTS,
)
from icmbridge.contract.codec import checksum, to_hex
from icmbridge.contract.errors import SignerNotConfiguredError, classify_error
from icmbridge.signing import LocalSigner

if TYPE_CHECKING:
    from icmbridge.config import Settings

logger = logging.getLogger(__name__)


def _as_record(value: Any, components: list[dict]) -> dict:
    """Turn a decoded struct (tuple or mapping) into a field dict."""
    names = [c["name"] for c in components]
    if hasattr(value, "keys"):
        return {name: value[name] for name in names}
    return dict(zip(names, value))


class BridgeContract:
    """Typed access to the bridge contract's functions and events."""

    def __init__(
        self,
        w3: AsyncWeb3,
        address: str,
        signer: Optional[LocalSigner] = None,
        gas_buffer_percent: int = 120,
        contract: Any = None,
    ):
        self.w3 = w3
        self.address = checksum(address)
        self.signer = signer
        self.gas_buffer_percent = gas_buffer_percent
        self.contract = contract or w3.eth.contract(address=self.address, abi=BRIDGE_ABI)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "BridgeContract":
        """Build a contract client from application settings."""
        provider = AsyncWeb3.AsyncHTTPProvider(
            settings.rpc_url,
            request_kwargs={"timeout": ClientTimeout(total=settings.rpc_timeout)},
        )
        return cls(
            w3=AsyncWeb3(provider),
            address=settings.contract_address,
            signer=LocalSigner.from_settings(settings.private_key),
            gas_buffer_percent=settings.gas_buffer_percent,
        )

    @property
    def can_transact(self) -> bool:
        return self.signer is not None

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------

    async def verify_connection(self) -> str:
        """Read CHAIN_ID to prove the node and contract are reachable.

        Returns:
            The contract's chain id as 0x-prefixed hex
        """
        chain_id = to_hex(await self._call("CHAIN_ID"))
        logger.info("Blockchain connection initialized")
        logger.info(f"Contract address: {self.address}")
        logger.info(f"Chain ID: {chain_id}")
        return chain_id

    async def get_block_number(self) -> int:
        return await self.w3.eth.block_number

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    async def _call(self, name: str, *args: Any) -> Any:
        try:
            return await getattr(self.contract.functions, name)(*args).call()
        except Exception as e:
            raise classify_error(e) from e

    async def get_bridge_info(self) -> dict:
        """Fetch fee, ownership and pause state in one round of calls."""
        fee, total_fees, recipient, chain_id, owner, paused = await asyncio.gather(
            self._call("bridgeFee"),
            self._call("totalFeesCollected"),
            self._call("feeRecipient"),
            self._call("CHAIN_ID"),
            self._call("owner"),
            self._call("paused"),
        )
        return {
            "bridge_fee": int(fee),
            "total_fees_collected": int(total_fees),
            "fee_recipient": recipient,
            "chain_id": to_hex(chain_id),
            "owner": owner,
            "paused": bool(paused),
        }

    async def get_bridge_fee(self) -> int:
        return int(await self._call("bridgeFee"))

    async def get_token_config(self, token: str) -> dict:
        raw = await self._call("getTokenConfig", checksum(token))
        return _as_record(raw, TOKEN_CONFIG_COMPONENTS)

    async def get_token_balances(self, token: str) -> tuple[int, int]:
        """Return (locked, minted) balances of a token."""
        address = checksum(token)
        locked, minted = await asyncio.gather(
            self._call("getLockedBalance", address),
            self._call("getMintedBalance", address),
        )
        return int(locked), int(minted)

    async def is_chain_enabled(self, chain_id: bytes) -> bool:
        return bool(await self._call("isChainEnabled", chain_id))

    async def get_pending_transaction(self, tx_id: bytes) -> dict:
        raw = await self._call("getPendingTransaction", tx_id)
        return _as_record(raw, PENDING_TRANSACTION_COMPONENTS)

    async def is_message_processed(self, message_hash: bytes) -> bool:
        return bool(await self._call("isMessageProcessed", message_hash))

    async def get_user_nonce(self, user: str) -> int:
        return int(await self._call("userNonces", checksum(user)))

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def _require_signer(self) -> LocalSigner:
        if self.signer is None:
            raise SignerNotConfiguredError()
        return self.signer

    async def _pending_nonce(self, address: str) -> int:
        return await self.w3.eth.get_transaction_count(address, "pending")

    async def _transact(
        self,
        name: str,
        *args: Any,
        value: int = 0,
        buffer_gas: bool = False,
    ) -> str:
        """Estimate, sign and broadcast a contract call.

        Returns:
            Transaction hash as 0x-prefixed hex
        """
        signer = self._require_signer()
        fn = getattr(self.contract.functions, name)(*args)

        tx_params: dict[str, Any] = {"from": signer.address}
        if value:
            tx_params["value"] = value

        async with signer.lock:
            try:
                gas = await fn.estimate_gas(tx_params)
            except Exception as e:
                raise classify_error(e, during_estimate=True) from e

            if buffer_gas:
                gas = gas * self.gas_buffer_percent // 100

            nonce = await signer.allocate_nonce(self._pending_nonce)
            try:
                tx = await fn.build_transaction({**tx_params, "gas": gas, "nonce": nonce})
                raw = signer.sign_transaction(tx)
                tx_hash = await self.w3.eth.send_raw_transaction(raw)
            except Exception as e:
                signer.release_nonce(nonce)
                raise classify_error(e) from e

        tx_hash_hex = to_hex(tx_hash)
        logger.info(f"Submitted {name} (nonce={nonce}, gas={gas}): {tx_hash_hex}")
        return tx_hash_hex

    async def lock_and_bridge(self, destination_chain: bytes, amount: int, token: str) -> tuple[str, int]:
        """Lock tokens for bridging, paying the current bridge fee.

        Returns:
            (transaction hash, fee paid in wei)
        """
        self._require_signer()
        fee = await self.get_bridge_fee()
        tx_hash = await self._transact(
            "lockAndBridge", destination_chain, amount, checksum(token), value=fee, buffer_gas=True
        )
        return tx_hash, fee

    async def burn_and_bridge(self, source_chain: bytes, amount: int, token: str) -> tuple[str, int]:
        """Burn wrapped tokens to release them on the source chain.

        Returns:
            (transaction hash, fee paid in wei)
        """
        self._require_signer()
        fee = await self.get_bridge_fee()
        tx_hash = await self._transact(
            "burnAndBridge", source_chain, amount, checksum(token), value=fee, buffer_gas=True
        )
        return tx_hash, fee

    async def whitelist_token(
        self,
        token: str,
        is_native: bool,
        counterpart_token: str,
        min_amount: int,
        max_amount: int,
    ) -> str:
        return await self._transact(
            "whitelistToken",
            checksum(token),
            is_native,
            checksum(counterpart_token),
            min_amount,
            max_amount,
        )

    async def blacklist_token(self, token: str) -> str:
        return await self._transact("blacklistToken", checksum(token))

    async def enable_chain(self, chain_id: bytes, bridge_address: str) -> str:
        return await self._transact("enableChain", chain_id, checksum(bridge_address))

    async def disable_chain(self, chain_id: bytes) -> str:
        return await self._transact("disableChain", chain_id)

    async def set_bridge_fee(self, fee: int) -> str:
        return await self._transact("setBridgeFee", fee)

    async def set_fee_recipient(self, recipient: str) -> str:
        return await self._transact("setFeeRecipient", checksum(recipient))

    async def pause(self) -> str:
        return await self._transact("pause")

    async def unpause(self) -> str:
        return await self._transact("unpause")

    async def withdraw_fees(self) -> str:
        return await self._transact("withdrawFees")

    async def emergency_withdraw(self, token: str, amount: int) -> str:
        return await self._transact("emergencyWithdraw", checksum(token), amount)

    async def emergency_withdraw_native(self) -> str:
        return await self._transact("emergencyWithdrawETH")

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def get_event_logs(self, event_name: str, from_block: int, to_block: int) -> list:
        """Fetch decoded logs of one event type over an inclusive block range."""
        event = getattr(self.contract.events, event_name)
        try:
            return list(await event.get_logs(from_block=from_block, to_block=to_block))
        except Exception as e:
            raise classify_error(e) from e
