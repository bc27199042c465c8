"""ICM Bridge - HTTP proxy for the Avalanche ICM token bridge contract."""

__version__ = "0.1.0"
