"""
CLI Whitelist Commands

Administrative commands that mutate or dump the whitelist:
    ledger add <address> <amount>
    ledger remove <address>
    ledger batch <file.json|file.csv>
    ledger import <snapshot.json>
    ledger export [--out FILE]
    ledger list
"""

from __future__ import annotations

import csv
import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from core.schemas.canonical import dumps_canonical
from core.whitelist import save_snapshot

from ledger_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    emit,
    open_manager,
    persist,
)


logger = logging.getLogger(__name__)


def read_batch_file(path: Path) -> list[Any]:
    """
    Read batch records from JSON or CSV.

    JSON may be a list of {"address", "amount"} objects or an
    {address: amount} mapping. CSV rows are `address,amount` with an
    optional header row.
    """
    if path.suffix.lower() == ".json":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("records", data)
        if isinstance(data, dict):
            return list(data.items())
        if isinstance(data, list):
            return data
        raise ValueError(f"Unsupported batch JSON layout in {path}")

    records: list[Any] = []
    with open(path, "r", encoding="utf-8", newline="") as f:
        for row in csv.reader(f):
            if not row or not any(cell.strip() for cell in row):
                continue
            if row[0].strip().lower() == "address":
                continue
            if len(row) < 2:
                records.append((row[0].strip(), None))
                continue
            records.append((row[0].strip(), row[1].strip()))
    return records


def add_cmd(args: Namespace) -> int:
    manager = open_manager(args)
    result = manager.add_entitlement(args.address, args.amount)
    persist(args, manager)
    emit(args, result, [
        f"added: {result.address}",
        f"amount: {result.amount}",
        f"root: {result.root}",
    ])
    return EXIT_SUCCESS


def remove_cmd(args: Namespace) -> int:
    manager = open_manager(args)
    result = manager.remove_entitlement(args.address)
    if result.removed:
        persist(args, manager)
    emit(args, result, [
        f"address: {result.address}",
        f"removed: {str(result.removed).lower()}",
        f"root: {result.root}",
    ])
    return EXIT_SUCCESS


def batch_cmd(args: Namespace) -> int:
    path = Path(args.file)
    if not path.exists():
        print(f"Error: Batch file not found: {path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    records = read_batch_file(path)
    manager = open_manager(args)
    result = manager.batch_add_entitlements(records)
    if result.added_count:
        persist(args, manager)

    lines = [
        f"added: {result.added_count}",
        f"skipped: {result.skipped_count}",
        f"total: {result.total}",
        f"root: {result.root}",
    ]
    for rejected in result.rejected[:10]:
        lines.append(f"  ✗ {rejected.address}: {rejected.reason}")
    emit(args, result, lines)
    return EXIT_SUCCESS


def import_cmd(args: Namespace) -> int:
    path = Path(args.file)
    if not path.exists():
        print(f"Error: Snapshot file not found: {path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    manager = open_manager(args)
    result = manager.import_snapshot(data)
    persist(args, manager, replaces_state=True)

    lines = [
        f"imported: {result.imported}",
        f"skipped: {result.skipped}",
        f"root: {result.root}",
    ]
    if result.root_matches is not None:
        lines.append(f"root_matches: {str(result.root_matches).lower()}")
    emit(args, result, lines)
    return EXIT_SUCCESS


def export_cmd(args: Namespace) -> int:
    manager = open_manager(args)
    snapshot = manager.export_snapshot()

    if args.out:
        out_path = save_snapshot(snapshot, args.out)
        emit(args, {"path": str(out_path), "root": snapshot.root, "records": len(snapshot.records)}, [
            f"exported: {len(snapshot.records)} records",
            f"path: {out_path}",
            f"root: {snapshot.root}",
        ])
    else:
        print(dumps_canonical(snapshot))
    return EXIT_SUCCESS


def list_cmd(args: Namespace) -> int:
    manager = open_manager(args)
    records = manager.list_entitlements()
    lines = [f"{r.address}  {r.amount}  ({r.amount_eth} ETH)" for r in records]
    if not lines:
        lines = ["No whitelisted addresses"]
    emit(args, records, lines)
    return EXIT_SUCCESS
