"""
Core cryptographic utilities.

Keccak-256 hashing, hex helpers, address canonicalization and the
entitlement leaf encoding.
"""
from .addresses import (
    ADDRESS_LENGTH,
    is_valid_address,
    normalize_address,
    address_to_bytes,
)
from .hashing import (
    HASH_LENGTH,
    AMOUNT_BYTES,
    UINT256_MAX,
    keccak256,
    to_hex,
    from_hex,
    encode_amount,
    encode_entitlement,
    hash_entitlement_leaf,
)

__all__ = [
    "ADDRESS_LENGTH",
    "is_valid_address",
    "normalize_address",
    "address_to_bytes",
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
