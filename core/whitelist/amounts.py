"""
Whitelist - Amount Parsing

Entitlement amounts are positive integers in wei, up to 2**256 - 1.
Accepted inputs: int (not bool), a decimal digit string, or a 0x hex string.
"""
from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

from eth_utils import from_wei

from core.crypto.hashing import UINT256_MAX
from core.schemas.errors import InvalidAmountException


_DECIMAL_RE = re.compile(r"^[0-9]+$")
_HEX_RE = re.compile(r"^0[xX][0-9a-fA-F]+$")


def parse_amount(value: Any) -> int:
    """
    Parse and validate an entitlement amount.

    Raises:
        InvalidAmountException: For zero, negative, oversized,
            non-integer or unparseable input
    """
    if isinstance(value, bool):
        raise InvalidAmountException("Amount must be an integer, got bool", amount=value)

    if isinstance(value, int):
        amount = value
    elif isinstance(value, str):
        text = value.strip()
        if _DECIMAL_RE.match(text):
            amount = int(text)
        elif _HEX_RE.match(text):
            amount = int(text, 16)
        else:
            raise InvalidAmountException(f"Invalid amount: {value!r}", amount=value)
    else:
        raise InvalidAmountException(
            f"Amount must be an integer or integer string, got {type(value).__name__}",
            amount=value,
        )

    if amount <= 0:
        raise InvalidAmountException(f"Amount must be positive, got {amount}", amount=amount)
    if amount > UINT256_MAX:
        raise InvalidAmountException("Amount exceeds uint256 range", amount=amount)

    return amount


def is_valid_amount(value: Any) -> bool:
    try:
        parse_amount(value)
    except InvalidAmountException:
        return False
    return True


def format_ether(amount: int) -> str:
    """
    Format a wei amount as an ether string without exponent notation.

    Example:
        >>> format_ether(1500000000000000000)
        '1.5'
    """
    value = Decimal(from_wei(amount, "ether"))
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


__all__ = [
    "parse_amount",
    "is_valid_amount",
    "format_ether",
]
