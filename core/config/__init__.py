"""
Runtime Configuration Module

Provides configuration loading and management for the entitlement ledger.
"""

from .runtime import (
    DEFAULT_SNAPSHOT_PATH,
    ENV_PREFIX,
    RuntimeConfig,
    WhitelistConfig,
)

__all__ = [
    "DEFAULT_SNAPSHOT_PATH",
    "ENV_PREFIX",
    "RuntimeConfig",
    "WhitelistConfig",
]
