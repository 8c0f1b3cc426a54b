"""
Hashing Unit Tests
Tests for core/crypto/hashing.py

Tests:
- keccak256 known value (Keccak, not NIST SHA3)
- to_hex/from_hex round trip and malformed input
- Packed entitlement encoding layout
- Leaf hashing sensitivity to address and amount
"""
import hashlib

import pytest
from eth_utils import keccak

from core.crypto.hashing import (
    AMOUNT_BYTES,
    HASH_LENGTH,
    UINT256_MAX,
    encode_amount,
    encode_entitlement,
    from_hex,
    hash_entitlement_leaf,
    keccak256,
    to_hex,
)
from core.schemas.errors import InvalidAddressException, InvalidAmountException

from fixtures import ADDR_A, ADDR_B, lower


KECCAK_EMPTY = "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"


class TestKeccak256:
    """Tests for keccak256() function."""

    def test_keccak256_empty_known_value(self):
        """keccak256(b"") matches the well-known Ethereum value."""
        assert keccak256(b"").hex() == KECCAK_EMPTY

    def test_keccak256_is_not_sha3(self):
        """Original Keccak padding differs from NIST SHA3-256."""
        assert keccak256(b"") != hashlib.sha3_256(b"").digest()

    def test_keccak256_length(self):
        assert len(keccak256(b"hello")) == HASH_LENGTH

    def test_keccak256_deterministic(self):
        data = b"entitlement"
        assert keccak256(data) == keccak256(data)

    def test_keccak256_input_sensitive(self):
        assert keccak256(b"a") != keccak256(b"b")


class TestHexConversion:
    """Tests for to_hex() and from_hex() functions."""

    def test_to_hex_prefix(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_to_hex_empty(self):
        assert to_hex(b"") == "0x"

    def test_round_trip(self):
        data = keccak256(b"round trip")
        assert from_hex(to_hex(data)) == data

    def test_from_hex_requires_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_from_hex_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_characters(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")


class TestEncodeAmount:
    """Tests for the 32-byte big-endian amount encoding."""

    def test_encode_small_amount(self):
        encoded = encode_amount(1000)
        assert len(encoded) == AMOUNT_BYTES
        assert encoded == (1000).to_bytes(32, "big")
        assert encoded[-2:] == bytes.fromhex("03e8")

    def test_encode_zero(self):
        assert encode_amount(0) == b"\x00" * 32

    def test_encode_max(self):
        assert encode_amount(UINT256_MAX) == b"\xff" * 32

    def test_encode_overflow_raises(self):
        with pytest.raises(InvalidAmountException):
            encode_amount(UINT256_MAX + 1)

    def test_encode_negative_raises(self):
        with pytest.raises(InvalidAmountException):
            encode_amount(-1)

    def test_encode_bool_raises(self):
        with pytest.raises(InvalidAmountException):
            encode_amount(True)

    def test_encode_string_raises(self):
        with pytest.raises(InvalidAmountException):
            encode_amount("1000")


class TestEntitlementEncoding:
    """Tests for the packed (address, uint256) leaf layout."""

    def test_encoding_layout(self):
        """52 bytes: 20 address bytes then 32 amount bytes."""
        encoded = encode_entitlement(ADDR_A, 1000)

        assert len(encoded) == 52
        assert encoded[:20] == bytes.fromhex(lower(ADDR_A)[2:])
        assert encoded[20:] == (1000).to_bytes(32, "big")

    def test_leaf_matches_manual_packing(self):
        """Leaf equals keccak over the manually packed bytes."""
        packed = bytes.fromhex(lower(ADDR_A)[2:]) + (1000).to_bytes(32, "big")
        assert hash_entitlement_leaf(ADDR_A, 1000) == keccak(packed)

    def test_leaf_case_insensitive_address(self):
        """Checksummed and lowercase spellings produce the same leaf."""
        assert hash_entitlement_leaf(ADDR_A, 5) == hash_entitlement_leaf(lower(ADDR_A), 5)

    def test_leaf_changes_with_amount(self):
        assert hash_entitlement_leaf(ADDR_A, 1000) != hash_entitlement_leaf(ADDR_A, 1001)

    def test_leaf_changes_with_address(self):
        assert hash_entitlement_leaf(ADDR_A, 1000) != hash_entitlement_leaf(ADDR_B, 1000)

    def test_leaf_invalid_address_raises(self):
        with pytest.raises(InvalidAddressException):
            hash_entitlement_leaf("0x1234", 1000)
