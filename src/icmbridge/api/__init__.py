"""HTTP API for the bridge contract."""
