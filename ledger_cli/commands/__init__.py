"""
CLI command modules.
"""

from ledger_cli.commands import proof, whitelist

__all__ = ["proof", "whitelist"]
