"""Tests for the bridge contract client."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from eth_account import Account
from web3.exceptions import ContractLogicError, Web3Exception

from conftest import (
    COUNTERPART,
    FEE_RECIPIENT,
    FEE_WEI,
    OWNER,
    TEST_PRIVATE_KEY,
    TEST_SIGNER_ADDRESS,
    TOKEN,
    TX_HASH,
    USER,
)
from icmbridge.config import Settings
from icmbridge.contract.abi import BRIDGE_EVENTS, DEFAULT_CONTRACT_ADDRESS
from icmbridge.contract.bridge import BridgeContract
from icmbridge.contract.codec import checksum, encode_chain_id
from icmbridge.contract.errors import (
    BridgeError,
    ContractCallError,
    GasEstimationError,
    InsufficientFundsError,
    SignerNotConfiguredError,
)


class TestViews:
    @pytest.mark.asyncio
    async def test_verify_connection_returns_chain_id_hex(self, bridge):
        chain_id = await bridge.verify_connection()
        assert chain_id == "0x" + encode_chain_id("fuji-c").hex()

    @pytest.mark.asyncio
    async def test_bridge_info(self, bridge):
        info = await bridge.get_bridge_info()

        assert info == {
            "bridge_fee": FEE_WEI,
            "total_fees_collected": 5 * 10**17,
            "fee_recipient": FEE_RECIPIENT,
            "chain_id": "0x" + encode_chain_id("fuji-c").hex(),
            "owner": OWNER,
            "paused": False,
        }

    @pytest.mark.asyncio
    async def test_token_config_from_tuple(self, bridge, mock_contract):
        config = await bridge.get_token_config(TOKEN)

        assert config == {
            "isWhitelisted": True,
            "isNative": False,
            "counterpartToken": COUNTERPART,
            "minBridgeAmount": 10**15,
            "maxBridgeAmount": 10**21,
        }
        mock_contract.functions.getTokenConfig.assert_called_with(checksum(TOKEN))

    @pytest.mark.asyncio
    async def test_token_balances(self, bridge):
        assert await bridge.get_token_balances(TOKEN) == (3 * 10**18, 0)

    @pytest.mark.asyncio
    async def test_pending_transaction(self, bridge):
        pending = await bridge.get_pending_transaction(b"\x01" * 32)

        assert pending["user"] == USER
        assert pending["amount"] == 10**18
        assert pending["messageType"] == "LOCK"
        assert pending["completed"] is False

    @pytest.mark.asyncio
    async def test_user_nonce(self, bridge, mock_contract):
        assert await bridge.get_user_nonce(USER) == 4
        mock_contract.functions.userNonces.assert_called_with(checksum(USER))

    @pytest.mark.asyncio
    async def test_revert_on_view(self, bridge, mock_contract):
        mock_contract.functions.isChainEnabled.return_value.call = AsyncMock(
            side_effect=ContractLogicError("execution reverted")
        )

        with pytest.raises(ContractCallError):
            await bridge.is_chain_enabled(encode_chain_id("fuji-c"))

    @pytest.mark.asyncio
    async def test_block_number(self, bridge, mock_w3):
        future = asyncio.get_running_loop().create_future()
        future.set_result(1234)
        mock_w3.eth.block_number = future

        assert await bridge.get_block_number() == 1234


class TestTransactions:
    @pytest.mark.asyncio
    async def test_lock_pays_fee_with_gas_buffer(self, bridge, mock_contract, mock_w3):
        chain = encode_chain_id("dispatch")

        tx_hash, fee = await bridge.lock_and_bridge(chain, 10**18, TOKEN)

        assert tx_hash == TX_HASH
        assert fee == FEE_WEI
        mock_contract.functions.lockAndBridge.assert_called_with(chain, 10**18, checksum(TOKEN))

        fn = mock_contract.functions.lockAndBridge.return_value
        fn.estimate_gas.assert_awaited_once_with({"from": TEST_SIGNER_ADDRESS, "value": FEE_WEI})
        params = fn.build_transaction.await_args.args[0]
        assert params["gas"] == 120_000
        assert params["value"] == FEE_WEI
        assert params["nonce"] == 7
        mock_w3.eth.send_raw_transaction.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_lock_without_fee_sends_no_value(self, bridge, mock_contract):
        mock_contract.functions.bridgeFee.return_value.call = AsyncMock(return_value=0)

        tx_hash, fee = await bridge.lock_and_bridge(encode_chain_id("dispatch"), 10**18, TOKEN)

        assert tx_hash == TX_HASH
        assert fee == 0
        fn = mock_contract.functions.lockAndBridge.return_value
        fn.estimate_gas.assert_awaited_once_with({"from": TEST_SIGNER_ADDRESS})
        params = fn.build_transaction.await_args.args[0]
        assert "value" not in params
        assert params["gas"] == 120_000

    @pytest.mark.asyncio
    async def test_broadcast_is_signed_by_wallet(self, bridge, mock_w3):
        await bridge.pause()

        raw = mock_w3.eth.send_raw_transaction.await_args.args[0]
        assert Account.recover_transaction(raw) == TEST_SIGNER_ADDRESS

    @pytest.mark.asyncio
    async def test_burn(self, bridge, mock_contract):
        tx_hash, fee = await bridge.burn_and_bridge(encode_chain_id("fuji-c"), 5, TOKEN)

        assert tx_hash == TX_HASH
        assert fee == FEE_WEI
        assert mock_contract.functions.burnAndBridge.return_value.build_transaction.await_count == 1

    @pytest.mark.asyncio
    async def test_admin_call_without_buffer_or_value(self, bridge, mock_contract):
        await bridge.pause()

        params = mock_contract.functions.pause.return_value.build_transaction.await_args.args[0]
        assert params["gas"] == 100_000
        assert "value" not in params

    @pytest.mark.asyncio
    async def test_consecutive_transactions_use_new_nonces(self, bridge, mock_contract):
        await bridge.pause()
        await bridge.unpause()

        pause_params = mock_contract.functions.pause.return_value.build_transaction.await_args.args[0]
        unpause_params = mock_contract.functions.unpause.return_value.build_transaction.await_args.args[0]
        assert (pause_params["nonce"], unpause_params["nonce"]) == (7, 8)

    @pytest.mark.asyncio
    async def test_concurrent_transactions_use_distinct_nonces(self, bridge, mock_w3):
        await asyncio.gather(bridge.withdraw_fees(), bridge.withdraw_fees(), bridge.pause())

        raw_txs = [c.args[0] for c in mock_w3.eth.send_raw_transaction.await_args_list]
        assert len(set(raw_txs)) == 3

    @pytest.mark.asyncio
    async def test_whitelist_arguments(self, bridge, mock_contract):
        await bridge.whitelist_token(TOKEN, True, COUNTERPART, 1, 2)

        mock_contract.functions.whitelistToken.assert_called_with(
            checksum(TOKEN), True, checksum(COUNTERPART), 1, 2
        )

    @pytest.mark.asyncio
    async def test_requires_signer(self, readonly_bridge, mock_w3):
        with pytest.raises(SignerNotConfiguredError):
            await readonly_bridge.lock_and_bridge(encode_chain_id("x"), 1, TOKEN)

        with pytest.raises(SignerNotConfiguredError):
            await readonly_bridge.set_bridge_fee(0)

        mock_w3.eth.send_raw_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_revert_during_estimate(self, bridge, mock_contract, mock_w3):
        fn = mock_contract.functions.setBridgeFee.return_value
        fn.estimate_gas = AsyncMock(side_effect=ContractLogicError("execution reverted: Ownable"))

        with pytest.raises(ContractCallError) as exc_info:
            await bridge.set_bridge_fee(1)

        assert "Ownable" in exc_info.value.message
        mock_w3.eth.get_transaction_count.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_estimate_failure(self, bridge, mock_contract):
        fn = mock_contract.functions.withdrawFees.return_value
        fn.estimate_gas = AsyncMock(side_effect=Web3Exception("out of gas"))

        with pytest.raises(GasEstimationError):
            await bridge.withdraw_fees()

    @pytest.mark.asyncio
    async def test_broadcast_failure_releases_nonce(self, bridge, mock_contract, mock_w3):
        mock_w3.eth.send_raw_transaction = AsyncMock(
            side_effect=[ValueError("insufficient funds for gas * price + value"), bytes(32)]
        )

        with pytest.raises(InsufficientFundsError):
            await bridge.pause()

        await bridge.pause()
        params = mock_contract.functions.pause.return_value.build_transaction.await_args.args[0]
        assert params["nonce"] == 7

    @pytest.mark.asyncio
    async def test_unknown_broadcast_failure(self, bridge, mock_w3):
        mock_w3.eth.send_raw_transaction = AsyncMock(side_effect=RuntimeError("connection reset"))

        with pytest.raises(BridgeError) as exc_info:
            await bridge.unpause()

        assert exc_info.value.status_code == 500


class TestEventsAndSetup:
    @pytest.mark.asyncio
    async def test_get_event_logs(self, bridge, mock_contract):
        logs = [{"event": "TokensLocked"}]
        mock_contract.events.TokensLocked.get_logs = AsyncMock(return_value=logs)

        result = await bridge.get_event_logs("TokensLocked", 10, 20)

        assert result == logs
        mock_contract.events.TokensLocked.get_logs.assert_awaited_once_with(from_block=10, to_block=20)

    def test_from_settings(self):
        settings = Settings(
            rpc_url="http://rpc.test:8545",
            private_key=TEST_PRIVATE_KEY,
            gas_buffer_percent=150,
        )

        bridge = BridgeContract.from_settings(settings)

        assert bridge.address == checksum(DEFAULT_CONTRACT_ADDRESS)
        assert bridge.can_transact
        assert bridge.signer.address == TEST_SIGNER_ADDRESS
        assert bridge.gas_buffer_percent == 150
        for name in BRIDGE_EVENTS:
            assert hasattr(bridge.contract.events, name)

    def test_from_settings_without_key(self):
        bridge = BridgeContract.from_settings(Settings(private_key=""))
        assert not bridge.can_transact
