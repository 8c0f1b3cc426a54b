"""
Common test fixtures shared by all modules.

Provides sample account addresses and factory functions for the core
ledger structures:
- EntitlementManager (empty or pre-populated)
- WhitelistSnapshot
- Raw entitlement leaves

Addresses are the well-known Hardhat development accounts, so their
EIP-55 checksums are known to be valid.
"""

from typing import Iterable, Optional

from core.crypto.hashing import hash_entitlement_leaf, keccak256
from core.schemas.entitlement import WhitelistSnapshot
from core.whitelist.manager import EntitlementManager


# =============================================================================
# Sample Addresses
# =============================================================================

ADDR_A = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
ADDR_B = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
ADDR_C = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"
ADDR_D = "0x90F79bf6EB2c4f870365E785982E1f101E93b906"
ADDR_E = "0x15d34AAf54267DB7D7c367839AAf71A00a2C6A65"

SAMPLE_ADDRESSES = [ADDR_A, ADDR_B, ADDR_C, ADDR_D, ADDR_E]

# Same account as ADDR_A with one letter's case flipped: bad checksum
BAD_CHECKSUM_A = "0xF39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

ONE_ETHER = 10**18


def lower(address: str) -> str:
    return address.lower()


# =============================================================================
# Manager Factories
# =============================================================================

def make_records(count: int = 3, base_amount: int = 1000) -> list[tuple[str, int]]:
    """
    Create (address, amount) records from the sample addresses.

    Amounts are base_amount, 2*base_amount, ... so every record hashes
    to a distinct leaf.
    """
    if count > len(SAMPLE_ADDRESSES):
        raise ValueError(f"At most {len(SAMPLE_ADDRESSES)} sample records available")
    return [
        (SAMPLE_ADDRESSES[i], base_amount * (i + 1))
        for i in range(count)
    ]


def make_manager(records: Optional[Iterable[tuple[str, int]]] = None) -> EntitlementManager:
    """Create an EntitlementManager, populated with one add per record."""
    manager = EntitlementManager()
    for address, amount in records or []:
        manager.add_entitlement(address, amount)
    return manager


def make_leaves(count: int) -> list[bytes]:
    """Create distinct 32-byte leaves unrelated to any address."""
    return [keccak256(f"leaf-{i}".encode()) for i in range(count)]


def make_entitlement_leaves(records: Iterable[tuple[str, int]]) -> list[bytes]:
    return [hash_entitlement_leaf(address, amount) for address, amount in records]


# =============================================================================
# Snapshot Factory
# =============================================================================

def make_snapshot(
    records: Optional[Iterable[tuple[str, int]]] = None,
    root: Optional[str] = None,
) -> WhitelistSnapshot:
    """
    Create a WhitelistSnapshot.

    When root is not given it is taken from a manager built over records,
    so the snapshot is self-consistent.
    """
    records = list(records if records is not None else make_records())
    if root is None:
        root = make_manager(records).get_root()
    return WhitelistSnapshot(
        records={address.lower(): str(amount) for address, amount in records},
        root=root,
    )
