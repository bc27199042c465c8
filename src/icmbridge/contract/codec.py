"""Conversions between API values and contract argument types."""

import re
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any, Optional, Union

from web3 import Web3

WEI_PER_ETHER = 10**18
ETHER_DECIMALS = 18

_BYTES32_HEX = re.compile(r"^0x[0-9a-fA-F]{64}$")


def is_valid_address(value: Any) -> bool:
    """Check that value is an EVM address (checksum enforced for mixed case)."""
    if not isinstance(value, str):
        return False
    address = value.strip()
    if not Web3.is_address(address):
        return False

    digits = address[2:] if address[:2].lower() == "0x" else address
    if digits != digits.lower() and digits != digits.upper():
        return Web3.is_checksum_address(address)
    return True


def checksum(value: str) -> str:
    """Convert a valid address to its checksum form."""
    return Web3.to_checksum_address(value.strip())


def parse_amount(value: Any, allow_zero: bool = False) -> Optional[int]:
    """Parse a decimal ether amount into wei.

    Accepts strings and numbers. Returns None for anything that is not a
    non-negative number with at most 18 decimals, and for zero unless
    allow_zero is set.
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None

    if not amount.is_finite() or amount < 0:
        return None

    with localcontext() as ctx:
        ctx.prec = 100
        wei = amount * WEI_PER_ETHER
    if wei != wei.to_integral_value():
        return None

    wei_int = int(wei)
    if wei_int == 0 and not allow_zero:
        return None
    return wei_int


def format_ether(wei: int) -> str:
    """Format a wei amount as a decimal ether string ("1.0", "0.01")."""
    sign = "-" if wei < 0 else ""
    whole, frac = divmod(abs(int(wei)), WEI_PER_ETHER)
    frac_str = f"{frac:0{ETHER_DECIMALS}d}".rstrip("0") or "0"
    return f"{sign}{whole}.{frac_str}"


def encode_chain_id(text: str) -> bytes:
    """Encode a chain identifier as a NUL-padded bytes32 string.

    Raises:
        ValueError: If the text is empty or does not fit in 31 bytes
    """
    if not isinstance(text, str) or not text:
        raise ValueError("chain identifier must be a non-empty string")

    encoded = text.encode("utf-8")
    if len(encoded) > 31:
        raise ValueError("bytes32 string must be less than 32 bytes")
    return encoded.ljust(32, b"\x00")


def decode_chain_id(value: Union[bytes, str]) -> str:
    """Decode a bytes32 string produced by encode_chain_id.

    Raises:
        ValueError: If the value is not 32 bytes or not NUL-terminated UTF-8
    """
    raw = parse_bytes32(value) if isinstance(value, str) else bytes(value)
    if len(raw) != 32:
        raise ValueError("invalid bytes32 - not 32 bytes long")

    end = raw.find(b"\x00")
    if end == -1:
        raise ValueError("invalid bytes32 string - no null terminator")
    if raw[end:].strip(b"\x00"):
        raise ValueError("invalid bytes32 string - data after null terminator")
    return raw[:end].decode("utf-8")


def parse_bytes32(value: Any) -> bytes:
    """Parse a 0x-prefixed 32-byte hex string.

    Raises:
        ValueError: If the value is not 0x followed by 64 hex digits
    """
    if not isinstance(value, str) or not _BYTES32_HEX.match(value.strip()):
        raise ValueError(f"Invalid bytes32 value: {value!r}")
    return bytes.fromhex(value.strip()[2:])


def to_hex(value: Union[bytes, str]) -> str:
    """Render bytes (or an already-hex string) as 0x-prefixed hex."""
    if isinstance(value, str):
        return value if value.startswith("0x") else f"0x{value}"
    return Web3.to_hex(value)
