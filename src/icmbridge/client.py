"""Async HTTP client for the ICM Bridge API.

Example:
    async with BridgeAPIClient("http://localhost:3000") as api:
        info = await api.get_bridge_info()
        result = await api.lock_tokens("fuji-c", "1.5", token_address)
"""

import logging
from typing import Any, Optional, Union

import httpx

logger = logging.getLogger(__name__)

Amount = Union[str, int, float]


class BridgeAPIError(Exception):
    """Raised for non-2xx responses from the bridge API."""

    def __init__(self, status_code: int, message: str, details: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.details = details
        super().__init__(f"HTTP error {status_code}: {message}")


class BridgeAPIClient:
    """Client for the bridge proxy endpoints.

    Methods return the ``data`` object of the success envelope.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        admin_token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"Accept": "application/json"}
        if admin_token:
            headers["X-Admin-Token"] = admin_token
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "BridgeAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, endpoint: str, **kwargs: Any) -> dict:
        response = await self._client.request(method, endpoint, **kwargs)

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400:
            raise BridgeAPIError(
                response.status_code,
                body.get("error") or response.reason_phrase,
                body.get("details"),
            )
        return body

    async def _data(self, method: str, endpoint: str, **kwargs: Any) -> dict:
        body = await self._request(method, endpoint, **kwargs)
        return body.get("data", {})

    # Health
    async def get_health(self) -> dict:
        return await self._request("GET", "/health")

    async def get_detailed_health(self) -> dict:
        return await self._request("GET", "/health/detailed")

    async def test_connection(self) -> bool:
        """Check that the API is reachable."""
        try:
            await self.get_health()
            return True
        except (httpx.HTTPError, BridgeAPIError) as e:
            logger.error(f"Bridge server connection failed: {e}")
            return False

    # Views
    async def get_bridge_info(self) -> dict:
        return await self._data("GET", "/bridge/info")

    async def get_token_config(self, token_address: str) -> dict:
        return await self._data("GET", f"/token/{token_address}/config")

    async def get_token_balances(self, token_address: str) -> dict:
        return await self._data("GET", f"/token/{token_address}/balances")

    async def is_chain_enabled(self, chain_id: str) -> bool:
        data = await self._data("GET", f"/chain/{chain_id}/enabled")
        return bool(data.get("isEnabled"))

    async def get_transaction(self, tx_id: str) -> dict:
        return await self._data("GET", f"/transaction/{tx_id}")

    async def is_message_processed(self, message_hash: str) -> bool:
        data = await self._data("GET", f"/message/{message_hash}/processed")
        return bool(data.get("isProcessed"))

    async def get_user_nonce(self, user_address: str) -> int:
        data = await self._data("GET", f"/user/{user_address}/nonce")
        return int(data["nonce"])

    async def list_events(self, event: Optional[str] = None, limit: int = 50, offset: int = 0) -> dict:
        params: dict[str, Any] = {"limit": limit, "offset": offset}
        if event:
            params["event"] = event
        return await self._data("GET", "/events", params=params)

    async def list_submissions(
        self, operation: Optional[str] = None, limit: int = 50, offset: int = 0
    ) -> dict:
        params: dict[str, Any] = {"limit": limit, "offset": offset}
        if operation:
            params["operation"] = operation
        return await self._data("GET", "/submissions", params=params)

    async def get_submission(self, tx_hash: str) -> dict:
        return await self._data("GET", f"/submissions/{tx_hash}")

    # Bridge operations
    async def lock_tokens(
        self,
        destination_chain: str,
        amount: Amount,
        token_address: str,
        user_address: Optional[str] = None,
    ) -> dict:
        payload = {
            "destinationChain": destination_chain,
            "amount": amount,
            "tokenAddress": token_address,
        }
        if user_address:
            payload["userAddress"] = user_address
        return await self._data("POST", "/bridge/lock", json=payload)

    async def burn_tokens(self, source_chain: str, amount: Amount, token_address: str) -> dict:
        return await self._data(
            "POST",
            "/bridge/burn",
            json={"sourceChain": source_chain, "amount": amount, "tokenAddress": token_address},
        )

    # Admin operations
    async def whitelist_token(
        self,
        token_address: str,
        counterpart_token: str,
        is_native: bool = False,
        min_amount: int = 0,
        max_amount: int = 0,
    ) -> dict:
        return await self._data(
            "POST",
            "/admin/token/whitelist",
            json={
                "tokenAddress": token_address,
                "isNative": is_native,
                "counterpartToken": counterpart_token,
                "minAmount": str(min_amount),
                "maxAmount": str(max_amount),
            },
        )

    async def blacklist_token(self, token_address: str) -> dict:
        return await self._data("POST", "/admin/token/blacklist", json={"tokenAddress": token_address})

    async def enable_chain(self, chain_id: str, bridge_address: str) -> dict:
        return await self._data(
            "POST",
            "/admin/chain/enable",
            json={"chainId": chain_id, "bridgeAddress": bridge_address},
        )

    async def disable_chain(self, chain_id: str) -> dict:
        return await self._data("POST", "/admin/chain/disable", json={"chainId": chain_id})

    async def set_bridge_fee(self, fee: Amount) -> dict:
        return await self._data("POST", "/admin/fee/set", json={"fee": fee})

    async def set_fee_recipient(self, recipient: str) -> dict:
        return await self._data("POST", "/admin/fee/recipient", json={"recipient": recipient})

    async def withdraw_fees(self) -> dict:
        return await self._data("POST", "/admin/fees/withdraw")

    async def pause(self) -> dict:
        return await self._data("POST", "/admin/pause")

    async def unpause(self) -> dict:
        return await self._data("POST", "/admin/unpause")

    async def emergency_withdraw(self, token_address: str, amount: int) -> dict:
        return await self._data(
            "POST",
            "/admin/emergency/withdraw",
            json={"tokenAddress": token_address, "amount": str(amount)},
        )

    async def emergency_withdraw_native(self) -> dict:
        return await self._data("POST", "/admin/emergency/withdraw-native")
