"""
Whitelist - Snapshot IO

Save and load whitelist snapshots to/from disk as canonical JSON.
Writes go through a temporary file and os.replace so a crash never
leaves a truncated snapshot behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.schemas.canonical import dumps_canonical
from core.schemas.entitlement import ImportResult, WhitelistSnapshot
from core.schemas.errors import InvalidSnapshotException
from core.whitelist.manager import EntitlementManager


logger = logging.getLogger(__name__)


class SnapshotIOError(InvalidSnapshotException):
    """Error during snapshot IO operations."""

    def __init__(self, message: str, path: str | Path | None = None):
        details = {"path": str(path)} if path is not None else None
        super().__init__(message, details=details)


class SnapshotNotFoundError(SnapshotIOError):
    """Snapshot file does not exist."""

    def __init__(self, path: str | Path):
        super().__init__(f"Snapshot file not found: {path}", path=path)


def _upgrade_legacy(data: dict[str, Any]) -> dict[str, Any]:
    """Map the legacy {users, merkleRoot, timestamp} layout onto the current one."""
    if "records" in data or "users" not in data:
        return data
    upgraded = {
        "records": data["users"],
        "root": data.get("merkleRoot", data.get("root")),
    }
    if data.get("timestamp") is not None:
        upgraded["timestamp"] = data["timestamp"]
    return upgraded


def save_snapshot(snapshot: WhitelistSnapshot, path: str | Path) -> Path:
    """
    Write a snapshot to a JSON file atomically.

    Returns:
        Path to the written file
    """
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    content = dumps_canonical(snapshot) + "\n"

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{out_path.name}.", suffix=".tmp", dir=str(out_path.parent)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, out_path)
    except OSError as e:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise SnapshotIOError(f"Failed to write snapshot: {e}", path=out_path) from e

    logger.info(f"Saved whitelist snapshot ({len(snapshot.records)} records) to {out_path}")
    return out_path


def load_snapshot(path: str | Path) -> WhitelistSnapshot:
    """
    Read a snapshot from a JSON file.

    Raises:
        SnapshotNotFoundError: If the file does not exist
        SnapshotIOError: If the file is not valid snapshot JSON
    """
    in_path = Path(path)
    if not in_path.exists():
        raise SnapshotNotFoundError(in_path)

    try:
        data = json.loads(in_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SnapshotIOError(f"Failed to read snapshot: {e}", path=in_path) from e

    if not isinstance(data, dict):
        raise SnapshotIOError("Snapshot must be a JSON object", path=in_path)

    try:
        return WhitelistSnapshot.model_validate(_upgrade_legacy(data))
    except ValidationError as e:
        raise SnapshotIOError(f"Invalid snapshot schema: {e.error_count()} error(s)", path=in_path) from e


def save_manager(manager: EntitlementManager, path: str | Path) -> Path:
    """Export a manager's whitelist and write it to disk."""
    return save_snapshot(manager.export_snapshot(), path)


def load_into_manager(manager: EntitlementManager, path: str | Path) -> ImportResult:
    """Load a snapshot file and import it into a manager, replacing its whitelist."""
    snapshot = load_snapshot(path)
    result = manager.import_snapshot(snapshot)
    logger.info(f"Loaded whitelist snapshot from {path}: {result.imported} records, root {result.root}")
    return result


__all__ = [
    "SnapshotIOError",
    "SnapshotNotFoundError",
    "save_snapshot",
    "load_snapshot",
    "save_manager",
    "load_into_manager",
]
