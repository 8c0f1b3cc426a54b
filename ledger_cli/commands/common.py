"""
CLI Shared Helpers

Exit codes, output formatting and the snapshot-backed manager session
used by every command.
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from core.config.runtime import RuntimeConfig
from core.whitelist import EntitlementManager, SnapshotIOError, load_into_manager, save_manager


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def get_config(args: Namespace) -> RuntimeConfig:
    return getattr(args, "ledger_config", None) or RuntimeConfig()


def snapshot_path(args: Namespace) -> Path:
    """Snapshot location: --snapshot flag, else configuration."""
    override = getattr(args, "snapshot", None)
    if override:
        return Path(override)
    return Path(get_config(args).whitelist.snapshot_path)


def open_manager(args: Namespace) -> EntitlementManager:
    """
    Create a manager and load the snapshot when configured to.

    An existing snapshot that is deliberately not loaded is remembered on
    args, so persist() never overwrites state it has not seen.
    """
    manager = EntitlementManager()
    path = snapshot_path(args)
    args.unloaded_snapshot = None

    if not path.exists():
        logger.debug(f"Starting with an empty whitelist (no snapshot at {path})")
    elif get_config(args).whitelist.load_on_startup:
        load_into_manager(manager, path)
    else:
        args.unloaded_snapshot = path
        logger.warning(f"Snapshot {path} exists but load_on_startup is disabled; starting empty")

    return manager


def persist(args: Namespace, manager: EntitlementManager, replaces_state: bool = False) -> Path | None:
    """
    Save the manager's snapshot when autosave is enabled.

    Raises:
        SnapshotIOError: If the target snapshot exists but was not loaded
    """
    if not get_config(args).whitelist.autosave:
        logger.info("Autosave disabled; snapshot not written")
        return None

    path = snapshot_path(args)
    if not replaces_state and getattr(args, "unloaded_snapshot", None) is not None:
        raise SnapshotIOError(
            f"Refusing to overwrite {path}: it was not loaded (load_on_startup is disabled)",
            path=path,
        )
    return save_manager(manager, path)


def emit(args: Namespace, payload: BaseModel | dict[str, Any] | list[Any], lines: list[str]) -> None:
    """Print either JSON or human-readable lines."""
    if getattr(args, "json", False):
        if isinstance(payload, BaseModel):
            data: Any = payload.model_dump(mode="json")
        elif isinstance(payload, list):
            data = [p.model_dump(mode="json") if isinstance(p, BaseModel) else p for p in payload]
        else:
            data = payload
        print(json.dumps(data, indent=2))
    else:
        for line in lines:
            print(line)
