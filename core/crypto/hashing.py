"""
Crypto - Hashing Utilities
Keccak-256 hashing, hex helpers and the entitlement leaf encoding.

This module provides:
- Keccak-256 hashing for raw bytes (the EVM hash, not NIST SHA3-256)
- Hex encoding/decoding with 0x prefix
- The packed (address, uint256) encoding shared with on-chain verifiers

Binary Contract (must match an independent on-chain verifier bit-for-bit):
    leaf = keccak256(address_20_bytes ++ amount_32_bytes_big_endian)
This is the byte layout of Solidity abi.encodePacked(address, uint256).
"""
from __future__ import annotations

from eth_utils import keccak

from core.crypto.addresses import address_to_bytes
from core.schemas.errors import InvalidAmountException


HASH_LENGTH = 32
AMOUNT_BYTES = 32
UINT256_MAX = 2**256 - 1


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def encode_amount(amount: int) -> bytes:
    """
    Encode an amount as a 32-byte big-endian unsigned integer.

    Raises:
        InvalidAmountException: If amount is not an int in [0, 2**256 - 1]
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountException(
            f"Amount must be an integer, got {type(amount).__name__}",
            amount=amount,
        )
    if amount < 0 or amount > UINT256_MAX:
        raise InvalidAmountException(
            f"Amount {amount} does not fit in uint256",
            amount=amount,
        )
    return amount.to_bytes(AMOUNT_BYTES, byteorder="big")


def encode_entitlement(address: str, amount: int) -> bytes:
    """
    Pack an (address, amount) pair into 52 bytes.

    Equivalent to Solidity abi.encodePacked(address, uint256).
    """
    return address_to_bytes(address) + encode_amount(amount)


def hash_entitlement_leaf(address: str, amount: int) -> bytes:
    """
    Compute the Merkle leaf for an entitlement record.

    leaf = keccak256(encode_entitlement(address, amount))
    """
    return keccak256(encode_entitlement(address, amount))


__all__ = [
    "HASH_LENGTH",
    "AMOUNT_BYTES",
    "UINT256_MAX",
    "keccak256",
    "to_hex",
    "from_hex",
    "encode_amount",
    "encode_entitlement",
    "hash_entitlement_leaf",
]
