"""Pytest configuration and fixtures."""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from web3 import Web3

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DEBUG"] = "true"
os.environ["PRIVATE_KEY"] = ""
os.environ["ADMIN_TOKEN"] = ""
os.environ["EVENT_LISTENER_ENABLED"] = "false"

from icmbridge.api.app import create_app
from icmbridge.config import get_settings
from icmbridge.contract.abi import DEFAULT_CONTRACT_ADDRESS
from icmbridge.contract.bridge import BridgeContract
from icmbridge.contract.codec import encode_chain_id
from icmbridge.ledger.database import close_db, init_db
from icmbridge.ledger.models import Base
from icmbridge.ledger.repository import BridgeRepository
from icmbridge.signing import LocalSigner

# Well-known development key (hardhat/anvil account #0)
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_SIGNER_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

TOKEN = "0x" + "11" * 20
COUNTERPART = "0x" + "22" * 20
USER = "0x" + "33" * 20
OWNER = "0x" + "44" * 20
FEE_RECIPIENT = "0x" + "55" * 20

TX_HASH_BYTES = bytes.fromhex("ab" * 32)
TX_HASH = "0x" + "ab" * 32
FEE_WEI = 10**16

VIEW_DEFAULTS = {
    "bridgeFee": FEE_WEI,
    "totalFeesCollected": 5 * 10**17,
    "feeRecipient": FEE_RECIPIENT,
    "CHAIN_ID": encode_chain_id("fuji-c"),
    "owner": OWNER,
    "paused": False,
    "getTokenConfig": (True, False, COUNTERPART, 10**15, 10**21),
    "getLockedBalance": 3 * 10**18,
    "getMintedBalance": 0,
    "isChainEnabled": True,
    "getPendingTransaction": (USER, 10**18, encode_chain_id("dispatch"), 1700000000, False, TOKEN, "LOCK"),
    "isMessageProcessed": False,
    "userNonces": 4,
}

TRANSACTIONS = (
    "lockAndBridge",
    "burnAndBridge",
    "whitelistToken",
    "blacklistToken",
    "enableChain",
    "disableChain",
    "setBridgeFee",
    "setFeeRecipient",
    "pause",
    "unpause",
    "withdrawFees",
    "emergencyWithdraw",
    "emergencyWithdrawETH",
)


def stub_view(contract: MagicMock, name: str, value) -> AsyncMock:
    """Make contract.functions.<name>(...).call() return value."""
    call = AsyncMock(return_value=value)
    getattr(contract.functions, name).return_value.call = call
    return call


def stub_transaction(contract: MagicMock, name: str, gas: int = 100_000) -> MagicMock:
    """Make contract.functions.<name>(...) estimate and build a signable legacy tx."""
    fn = getattr(contract.functions, name).return_value

    async def build_transaction(params: dict) -> dict:
        return {
            "to": Web3.to_checksum_address(DEFAULT_CONTRACT_ADDRESS),
            "data": "0x",
            "value": params.get("value", 0),
            "gas": params["gas"],
            "gasPrice": 25 * 10**9,
            "nonce": params["nonce"],
            "chainId": 43113,
        }

    fn.estimate_gas = AsyncMock(return_value=gas)
    fn.build_transaction = AsyncMock(side_effect=build_transaction)
    return fn


@pytest.fixture
def mock_contract() -> MagicMock:
    """Contract object with every view and transaction stubbed."""
    contract = MagicMock()
    for name, value in VIEW_DEFAULTS.items():
        stub_view(contract, name, value)
    for name in TRANSACTIONS:
        stub_transaction(contract, name)
    return contract


@pytest.fixture
def mock_w3() -> MagicMock:
    """AsyncWeb3 stand-in for nonce lookup and broadcast."""
    w3 = MagicMock()
    w3.eth.get_transaction_count = AsyncMock(return_value=7)
    w3.eth.send_raw_transaction = AsyncMock(return_value=TX_HASH_BYTES)
    return w3


@pytest.fixture
def signer() -> LocalSigner:
    return LocalSigner(TEST_PRIVATE_KEY)


@pytest.fixture
def bridge(mock_w3, mock_contract, signer) -> BridgeContract:
    """Bridge client with a signer, backed by mocks."""
    return BridgeContract(mock_w3, DEFAULT_CONTRACT_ADDRESS, signer=signer, contract=mock_contract)


@pytest.fixture
def readonly_bridge(mock_w3, mock_contract) -> BridgeContract:
    """Bridge client without a signer."""
    return BridgeContract(mock_w3, DEFAULT_CONTRACT_ADDRESS, contract=mock_contract)


@pytest.fixture(autouse=True)
def reset_settings():
    """Drop cached settings so tests can change the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def app_db():
    """Fresh in-memory database behind get_db()."""
    await init_db()
    yield
    await close_db()


@pytest_asyncio.fixture
async def db_engine():
    """Create in-memory database engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for testing."""
    session_factory = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def repo(db_session: AsyncSession) -> BridgeRepository:
    """Create ledger repository for testing."""
    return BridgeRepository(db_session)


@pytest_asyncio.fixture
async def client(bridge, app_db) -> AsyncGenerator[AsyncClient, None]:
    """API client for an app whose wallet is configured."""
    transport = ASGITransport(app=create_app(bridge=bridge))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def readonly_client(readonly_bridge, app_db) -> AsyncGenerator[AsyncClient, None]:
    """API client for an app without a wallet."""
    transport = ASGITransport(app=create_app(bridge=readonly_bridge))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
