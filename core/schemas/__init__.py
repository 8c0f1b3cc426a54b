"""
Schemas & Canonicalization
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    ensure_utc,
    format_datetime_canonical,
    loads_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ErrorCodes,
    InternalInconsistencyException,
    InvalidAddressException,
    InvalidAmountException,
    InvalidSnapshotException,
    LedgerError,
    LedgerException,
    NotWhitelistedException,
)

# Entitlement records and results
from .entitlement import (
    SNAPSHOT_VERSION,
    BatchAddResult,
    EntitlementAddResult,
    EntitlementProof,
    EntitlementRecord,
    EntitlementRemoveResult,
    ImportResult,
    RejectedRecord,
    WhitelistSnapshot,
    WhitelistStats,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "ensure_utc",
    "format_datetime_canonical",
    "loads_canonical",
    # Errors
    "CanonicalizationException",
    "ErrorCodes",
    "InternalInconsistencyException",
    "InvalidAddressException",
    "InvalidAmountException",
    "InvalidSnapshotException",
    "LedgerError",
    "LedgerException",
    "NotWhitelistedException",
    # Entitlements
    "SNAPSHOT_VERSION",
    "BatchAddResult",
    "EntitlementAddResult",
    "EntitlementProof",
    "EntitlementRecord",
    "EntitlementRemoveResult",
    "ImportResult",
    "RejectedRecord",
    "WhitelistSnapshot",
    "WhitelistStats",
]
