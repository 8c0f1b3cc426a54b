"""
Entitlement Ledger CLI

Command-line host for the Entitlement Commitment Manager. State lives in a
snapshot file that is loaded at startup and saved after every mutation.

Usage:
    python -m ledger_cli add 0x70997970C51812dc3A010C7d01b50e0d17dc79C8 1000000000000000000
    python -m ledger_cli proof 0x70997970C51812dc3A010C7d01b50e0d17dc79C8
    python -m ledger_cli root
"""

__version__ = "0.1.0"
