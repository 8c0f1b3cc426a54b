"""
Test fixtures package for entitlement ledger tests.

This package provides sample addresses and factory functions for
creating test objects.

Usage:
    from fixtures import make_manager, make_records, ADDR_A

    def test_something():
        manager = make_manager(make_records(3))
        proof = manager.get_proof(ADDR_A)
"""

from .common import (
    ADDR_A,
    ADDR_B,
    ADDR_C,
    ADDR_D,
    ADDR_E,
    BAD_CHECKSUM_A,
    ONE_ETHER,
    SAMPLE_ADDRESSES,
    lower,
    make_entitlement_leaves,
    make_leaves,
    make_manager,
    make_records,
    make_snapshot,
)

__all__ = [
    "ADDR_A",
    "ADDR_B",
    "ADDR_C",
    "ADDR_D",
    "ADDR_E",
    "BAD_CHECKSUM_A",
    "ONE_ETHER",
    "SAMPLE_ADDRESSES",
    "lower",
    "make_entitlement_leaves",
    "make_leaves",
    "make_manager",
    "make_records",
    "make_snapshot",
]
