"""
Crypto - Account Addresses
Validation and canonicalization of 20-byte account identifiers.

This module provides:
- is_valid_address: Syntactic validity check (never raises)
- normalize_address: Canonical lowercase 0x-prefixed form used as map key
- address_to_bytes: The 20 raw bytes used in leaf encoding

Validity follows the usual EVM rules: 40 hex digits, optionally 0x-prefixed.
All-lowercase and all-uppercase spellings are accepted as-is; a mixed-case
spelling must carry a valid EIP-55 checksum.
"""
from __future__ import annotations

from typing import Any

from eth_utils import (
    is_address,
    is_checksum_address,
    is_checksum_formatted_address,
    to_canonical_address,
    to_normalized_address,
)

from core.schemas.errors import InvalidAddressException


ADDRESS_LENGTH = 20


def is_valid_address(address: Any) -> bool:
    """
    Check whether a value is a syntactically valid account address.

    Non-string input returns False rather than raising.
    """
    if not isinstance(address, str):
        return False
    text = address.strip()
    if not is_address(text):
        return False
    # Recent eth-utils releases only check hex shape in is_address
    if is_checksum_formatted_address(text):
        body = text[2:] if text[:2].lower() == "0x" else text
        return is_checksum_address("0x" + body)
    return True


def normalize_address(address: Any) -> str:
    """
    Canonicalize an address to lowercase 0x-prefixed hex.

    Two spellings of the same account (checksummed, lowercase,
    with or without 0x) normalize to the same string.

    Raises:
        InvalidAddressException: If the address is malformed
    """
    if not is_valid_address(address):
        raise InvalidAddressException(
            f"Invalid address format: {address!r}",
            address=address,
        )
    return to_normalized_address(address.strip())


def address_to_bytes(address: Any) -> bytes:
    """
    Convert an address to its 20-byte binary form.

    Raises:
        InvalidAddressException: If the address is malformed
    """
    return to_canonical_address(normalize_address(address))


__all__ = [
    "ADDRESS_LENGTH",
    "is_valid_address",
    "normalize_address",
    "address_to_bytes",
]
