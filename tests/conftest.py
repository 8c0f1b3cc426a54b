"""
Pytest configuration and shared fixtures for entitlement ledger tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_records = _common.make_records
make_manager = _common.make_manager
make_snapshot = _common.make_snapshot


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def manager():
    """Provide an empty EntitlementManager."""
    return make_manager()


@pytest.fixture
def sample_records():
    """Provide three (address, amount) records."""
    return make_records(3)


@pytest.fixture
def populated_manager(sample_records):
    """Provide a manager holding the three sample records."""
    return make_manager(sample_records)


@pytest.fixture
def snapshot(sample_records):
    """Provide a self-consistent WhitelistSnapshot of the sample records."""
    return make_snapshot(sample_records)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every LEDGER_* variable so config tests start from defaults."""
    import os

    for key in list(os.environ):
        if key.startswith("LEDGER_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


# =============================================================================
# Test Helpers (available to all tests via fixtures)
# =============================================================================

@pytest.fixture
def assert_proof_verifies():
    """Helper to assert an EntitlementProof verifies independently against a root."""
    from core.merkle.merkle_proofs import MerkleVerifier

    def _assert(proof, root: str | None = None):
        target = root if root is not None else proof.root
        assert MerkleVerifier.verify_entitlement(proof.address, proof.amount, proof.proof, target), (
            f"Proof for {proof.address} does not verify against {target}"
        )
    return _assert
