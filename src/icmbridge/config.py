"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from icmbridge.contract.abi import DEFAULT_CONTRACT_ADDRESS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Chain / Contract
    # ======================
    rpc_url: str = Field(default="http://localhost:8545", description="JSON-RPC endpoint")
    rpc_timeout: float = Field(default=30.0, description="RPC request timeout in seconds")
    contract_address: str = Field(
        default=DEFAULT_CONTRACT_ADDRESS, description="ICM bridge contract address"
    )
    private_key: Optional[str] = Field(
        default=None, description="Hex private key of the wallet that sends transactions"
    )
    gas_buffer_percent: int = Field(
        default=120, description="Gas limit as a percentage of the gas estimate"
    )

    # ======================
    # Database
    # ======================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/icmbridge.db",
        description="Database connection URL",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=3000, description="API server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug mode")

    # ======================
    # Admin
    # ======================
    admin_token: str = Field(default="", description="Admin API token for protected endpoints")

    # ======================
    # Event listener
    # ======================
    event_listener_enabled: bool = Field(default=True, description="Poll contract events")
    event_poll_interval: float = Field(default=15.0, description="Seconds between event scans")
    event_lookback_blocks: int = Field(
        default=2000, description="Blocks behind the tip to start the first scan"
    )
    event_max_block_range: int = Field(
        default=2048, description="Largest block range per eth_getLogs request"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def has_signer(self) -> bool:
        """Check if a transaction signing key is configured."""
        return bool(self.private_key and self.private_key.strip())

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "database_url": self._redact_url(self.database_url),
            "rpc_url": self._redact_url(self.rpc_url),
            "contract_address": self.contract_address,
            "signer_configured": self.has_signer,
            "admin_token": "***" if self.admin_token else "(not set)",
            "gas_buffer_percent": self.gas_buffer_percent,
            "events": {
                "enabled": self.event_listener_enabled,
                "poll_interval": self.event_poll_interval,
                "lookback_blocks": self.event_lookback_blocks,
                "max_block_range": self.event_max_block_range,
            },
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact credentials embedded in a URL."""
        if "://" in url and "@" in url:
            proto, rest = url.split("://", 1)
            if "@" in rest:
                creds, host = rest.rsplit("@", 1)
                if ":" in creds:
                    user, _ = creds.split(":", 1)
                    return f"{proto}://{user}:***@{host}"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
