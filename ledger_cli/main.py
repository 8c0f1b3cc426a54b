"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    ledger add <address> <amount> [--json]
    ledger remove <address> [--json]
    ledger batch <file.json|file.csv> [--json]
    ledger import <snapshot.json> [--json]
    ledger export [--out FILE] [--json]
    ledger list [--json]
    ledger proof <address> [--json]
    ledger verify <address> <amount> --proof H [H ...] [--root R] [--json]
    ledger root [--json]
    ledger stats [--json]
    ledger config --init|--show

Environment Variables:
    LEDGER_SNAPSHOT_PATH        Snapshot file (default: whitelist_snapshot.json)
    LEDGER_AUTOSAVE             Save snapshot after mutations (default: true)
    LEDGER_LOAD_ON_STARTUP      Load snapshot at startup (default: true)
    LEDGER_LOG_LEVEL            Log level (default: INFO)
    LEDGER_LOG_FILE             Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.schemas.errors import LedgerException, NotWhitelistedException
from ledger_cli.commands import proof, whitelist
from ledger_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
)
from ledger_cli.config import CONFIG_FILENAME, get_default_config_template, load_config


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_output_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="ledger",
        description="Entitlement Ledger CLI - Manage the withdrawal whitelist and its Merkle proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help=f"Path to configuration file (default: ./{CONFIG_FILENAME} or ~/.config/ledger/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--snapshot", "-s",
        type=str,
        default=None,
        help="Snapshot file holding the whitelist (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- add ---
    add_parser = subparsers.add_parser("add", help="Add or overwrite an entitlement")
    add_parser.add_argument("address", type=str, help="Account address")
    add_parser.add_argument("amount", type=str, help="Withdrawable amount in wei")
    _add_output_flags(add_parser)
    add_parser.set_defaults(func=whitelist.add_cmd)

    # --- remove ---
    remove_parser = subparsers.add_parser("remove", help="Remove an address from the whitelist")
    remove_parser.add_argument("address", type=str, help="Account address")
    _add_output_flags(remove_parser)
    remove_parser.set_defaults(func=whitelist.remove_cmd)

    # --- batch ---
    batch_parser = subparsers.add_parser(
        "batch",
        help="Add many entitlements from a JSON or CSV file",
        description="Invalid rows are skipped and reported; the tree is rebuilt once.",
    )
    batch_parser.add_argument("file", type=str, help="JSON list/mapping or CSV address,amount")
    _add_output_flags(batch_parser)
    batch_parser.set_defaults(func=whitelist.batch_cmd)

    # --- import ---
    import_parser = subparsers.add_parser(
        "import",
        help="Replace the whitelist with a snapshot file",
    )
    import_parser.add_argument("file", type=str, help="Snapshot JSON file")
    _add_output_flags(import_parser)
    import_parser.set_defaults(func=whitelist.import_cmd)

    # --- export ---
    export_parser = subparsers.add_parser("export", help="Export the whitelist snapshot")
    export_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write snapshot to this file (default: print to stdout)",
    )
    _add_output_flags(export_parser)
    export_parser.set_defaults(func=whitelist.export_cmd)

    # --- list ---
    list_parser = subparsers.add_parser("list", help="List whitelisted addresses")
    _add_output_flags(list_parser)
    list_parser.set_defaults(func=whitelist.list_cmd)

    # --- proof ---
    proof_parser = subparsers.add_parser("proof", help="Get the Merkle proof for an address")
    proof_parser.add_argument("address", type=str, help="Account address")
    _add_output_flags(proof_parser)
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof independently of the stored tree",
    )
    verify_parser.add_argument("address", type=str, help="Account address")
    verify_parser.add_argument("amount", type=str, help="Claimed amount in wei")
    verify_parser.add_argument(
        "--proof", "-p",
        nargs="*",
        default=[],
        help="Sibling hashes (0x-prefixed), leaf to root",
    )
    verify_parser.add_argument(
        "--root", "-r",
        type=str,
        default=None,
        help="Root to verify against (default: current root)",
    )
    _add_output_flags(verify_parser)
    verify_parser.set_defaults(func=proof.verify_cmd)

    # --- root ---
    root_parser = subparsers.add_parser("root", help="Print the current Merkle root")
    _add_output_flags(root_parser)
    root_parser.set_defaults(func=proof.root_cmd)

    # --- stats ---
    stats_parser = subparsers.add_parser("stats", help="Show whitelist statistics")
    _add_output_flags(stats_parser)
    stats_parser.set_defaults(func=proof.stats_cmd)

    # --- config ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default=CONFIG_FILENAME,
        help=f"Path for config file (default: {CONFIG_FILENAME})",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (LEDGER_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.ledger_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: ledger config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0=success, 1=error, 2=not whitelisted / verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.ledger_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except NotWhitelistedException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_VERIFICATION_FAILED
    except LedgerException as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
