"""
CLI Proof Commands

Read-only commands over the committed whitelist:
    ledger proof <address>
    ledger verify <address> <amount> --proof H [H ...] [--root R]
    ledger root
    ledger stats

`verify` reconstructs the leaf from (address, amount) and folds the proof
exactly as an on-chain verifier would; it does not consult the tree.
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from core.merkle import MerkleVerifier
from core.schemas.errors import NotWhitelistedException
from core.whitelist import parse_amount

from ledger_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    emit,
    open_manager,
)


logger = logging.getLogger(__name__)


def proof_cmd(args: Namespace) -> int:
    manager = open_manager(args)
    try:
        proof = manager.get_proof(args.address)
    except NotWhitelistedException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_VERIFICATION_FAILED

    lines = [
        f"address: {proof.address}",
        f"amount: {proof.amount}",
        f"leaf: {proof.leaf}",
        f"root: {proof.root}",
        f"valid: {str(proof.is_valid).lower()}",
        f"proof ({len(proof.proof)}):",
    ]
    lines.extend(f"  {h}" for h in proof.proof)
    emit(args, proof, lines)
    return EXIT_SUCCESS


def verify_cmd(args: Namespace) -> int:
    amount = parse_amount(args.amount)
    root = args.root
    if root is None:
        root = open_manager(args).get_root()

    try:
        ok = MerkleVerifier.verify_entitlement(args.address, amount, args.proof or [], root)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    emit(args, {"address": args.address, "amount": str(amount), "root": root, "valid": ok}, [
        f"root: {root}",
        f"valid: {str(ok).lower()}",
    ])
    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED


def root_cmd(args: Namespace) -> int:
    root = open_manager(args).get_root()
    emit(args, {"root": root}, [root])
    return EXIT_SUCCESS


def stats_cmd(args: Namespace) -> int:
    stats = open_manager(args).get_stats()
    emit(args, stats, [
        f"total_entries: {stats.total_entries}",
        f"total_amount: {stats.total_amount}",
        f"has_tree: {str(stats.has_tree).lower()}",
        f"root: {stats.root}",
    ])
    return EXIT_SUCCESS
