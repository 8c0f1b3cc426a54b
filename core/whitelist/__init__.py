"""
Whitelist / Entitlement Commitment Manager

Keeps the address -> withdrawable amount mapping, commits to it with a
Merkle root and issues inclusion proofs.

Usage:
    from core.whitelist import EntitlementManager

    manager = EntitlementManager()
    manager.add_entitlement("0x70997970C51812dc3A010C7d01b50e0d17dc79C8", 10**18)
    proof = manager.get_proof("0x70997970c51812dc3a010c7d01b50e0d17dc79c8")
"""
from .amounts import format_ether, is_valid_amount, parse_amount
from .manager import EntitlementManager
from .snapshot_io import (
    SnapshotIOError,
    SnapshotNotFoundError,
    load_into_manager,
    load_snapshot,
    save_manager,
    save_snapshot,
)

__all__ = [
    "EntitlementManager",
    "format_ether",
    "is_valid_amount",
    "parse_amount",
    "SnapshotIOError",
    "SnapshotNotFoundError",
    "load_into_manager",
    "load_snapshot",
    "save_manager",
    "save_snapshot",
]
