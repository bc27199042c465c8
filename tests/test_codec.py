"""Tests for contract argument conversions."""

import pytest

from icmbridge.contract.codec import (
    checksum,
    decode_chain_id,
    encode_chain_id,
    format_ether,
    is_valid_address,
    parse_amount,
    parse_bytes32,
    to_hex,
)


class TestParseAmount:
    """Ether amounts to wei."""

    def test_decimal_string(self):
        assert parse_amount("1.5") == 1_500_000_000_000_000_000

    def test_number(self):
        assert parse_amount(2) == 2 * 10**18
        assert parse_amount(0.25) == 25 * 10**16

    def test_smallest_unit(self):
        assert parse_amount("0.000000000000000001") == 1

    def test_large_amount_keeps_precision(self):
        assert parse_amount("123456789012345678901234.123456789012345678") == (
            123456789012345678901234123456789012345678
        )

    def test_too_many_decimals(self):
        assert parse_amount("0.0000000000000000001") is None

    @pytest.mark.parametrize("value", ["abc", "", "-1", "1e", None, True, "NaN", "Infinity"])
    def test_rejects_invalid(self, value):
        assert parse_amount(value) is None

    def test_zero(self):
        assert parse_amount("0") is None
        assert parse_amount("0", allow_zero=True) == 0


class TestFormatEther:
    def test_whole(self):
        assert format_ether(10**18) == "1.0"

    def test_fraction(self):
        assert format_ether(10**16) == "0.01"
        assert format_ether(1_500_000_000_000_000_000) == "1.5"

    def test_zero(self):
        assert format_ether(0) == "0.0"

    def test_one_wei(self):
        assert format_ether(1) == "0.000000000000000001"


class TestChainId:
    """bytes32 string encoding of chain identifiers."""

    def test_encode_pads_to_32_bytes(self):
        encoded = encode_chain_id("fuji-c")
        assert len(encoded) == 32
        assert encoded.startswith(b"fuji-c\x00")

    def test_decode_round_trip_from_hex(self):
        assert decode_chain_id(to_hex(encode_chain_id("dispatch"))) == "dispatch"

    def test_encode_rejects_long_identifier(self):
        with pytest.raises(ValueError):
            encode_chain_id("x" * 32)

    def test_encode_accepts_31_bytes(self):
        assert len(encode_chain_id("x" * 31)) == 32

    def test_encode_rejects_empty(self):
        with pytest.raises(ValueError):
            encode_chain_id("")

    def test_decode_rejects_missing_terminator(self):
        with pytest.raises(ValueError):
            decode_chain_id(b"x" * 32)

    def test_decode_rejects_data_after_terminator(self):
        with pytest.raises(ValueError):
            decode_chain_id(b"ab\x00c" + b"\x00" * 28)


class TestBytes32AndAddresses:
    def test_parse_bytes32(self):
        assert parse_bytes32("0x" + "00" * 31 + "01") == b"\x00" * 31 + b"\x01"

    @pytest.mark.parametrize("value", ["0x1234", "ab" * 32, "0x" + "zz" * 32, 42, None])
    def test_parse_bytes32_rejects(self, value):
        with pytest.raises(ValueError):
            parse_bytes32(value)

    def test_to_hex(self):
        assert to_hex(b"\x01\x02") == "0x0102"
        assert to_hex("0xabc") == "0xabc"
        assert to_hex("abc") == "0xabc"

    def test_valid_addresses(self):
        assert is_valid_address("0x" + "11" * 20)
        assert is_valid_address("0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266")

    @pytest.mark.parametrize(
        "value",
        [
            "0x1234",
            "not-an-address",
            "",
            None,
            12345,
            # Mixed case with a broken checksum
            "0xF39fd6e51aad88F6F4ce6aB8827279cffFb92266",
        ],
    )
    def test_invalid_addresses(self, value):
        assert not is_valid_address(value)

    def test_checksum(self):
        assert checksum("0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266") == (
            "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
        )
