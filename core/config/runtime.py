"""
Runtime Configuration

Central configuration for the entitlement ledger host: where snapshots
live, whether they are saved/loaded automatically, and logging.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "LEDGER_"

DEFAULT_SNAPSHOT_PATH = "whitelist_snapshot.json"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class WhitelistConfig:
    """Configuration for whitelist persistence."""
    snapshot_path: str = DEFAULT_SNAPSHOT_PATH
    autosave: bool = True
    load_on_startup: bool = True


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the entitlement ledger.

    Can be loaded from:
    - Environment variables
    - JSON file
    - Programmatic construction
    """
    whitelist: WhitelistConfig = field(default_factory=WhitelistConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - LEDGER_SNAPSHOT_PATH: Snapshot file location
        - LEDGER_AUTOSAVE: Save snapshot after every mutation (true/false)
        - LEDGER_LOAD_ON_STARTUP: Import snapshot at startup (true/false)
        - LEDGER_LOG_LEVEL: Log level
        - LEDGER_LOG_FILE: Optional log file
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}SNAPSHOT_PATH"):
            overrides.setdefault("whitelist", {})["snapshot_path"] = os.getenv(
                f"{ENV_PREFIX}SNAPSHOT_PATH"
            )
        if os.getenv(f"{ENV_PREFIX}AUTOSAVE"):
            overrides.setdefault("whitelist", {})["autosave"] = _env_bool(
                f"{ENV_PREFIX}AUTOSAVE", True
            )
        if os.getenv(f"{ENV_PREFIX}LOAD_ON_STARTUP"):
            overrides.setdefault("whitelist", {})["load_on_startup"] = _env_bool(
                f"{ENV_PREFIX}LOAD_ON_STARTUP", True
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        whitelist_data = data.get("whitelist", {})
        whitelist = WhitelistConfig(**whitelist_data) if whitelist_data else WhitelistConfig()

        return cls(
            whitelist=whitelist,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("whitelist", {}).items():
            setattr(new_config.whitelist, key, value)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "whitelist": {
                "snapshot_path": self.whitelist.snapshot_path,
                "autosave": self.whitelist.autosave,
                "load_on_startup": self.whitelist.load_on_startup,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }

