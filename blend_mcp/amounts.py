"""Pure conversion between human decimal strings and scaled integers.

Amounts travel through the tool surface as base-10 strings ("100.5") and
reach the pool as integers scaled by the token's decimals (100500000 for a
6-decimal token). Conversion is exact: a value that cannot be represented
at the requested precision is rejected, never rounded.
"""
from __future__ import annotations

import re

from .errors import InvalidAmount

MAX_UINT256 = 2**256 - 1
_MAX_UINT256_DIGITS = len(str(MAX_UINT256))

_AMOUNT_RE = re.compile(r"^(?:\d+(?:\.\d*)?|\.\d+)$")


def _split(amount: str) -> tuple[str, str]:
    """Validate an amount string and return its (integer, fraction) digits.

    Trailing zeros of the fraction are dropped since they do not change the
    value.
    """
    if not isinstance(amount, str):
        raise InvalidAmount(f"Amount must be a decimal string, got {type(amount).__name__}")

    text = amount.strip()
    if text.startswith("-"):
        raise InvalidAmount(f"Amount must not be negative: {amount!r}")
    if not _AMOUNT_RE.match(text):
        raise InvalidAmount(f"Amount is not a decimal number: {amount!r}")

    integer, _, fraction = text.partition(".")
    return integer.lstrip("0") or "0", fraction.rstrip("0")


def encode(amount: str, decimals: int) -> int:
    """Scale a decimal string by ``10**decimals``.

    Examples:
        encode("100.5", 6) → 100500000
        encode("1", 18)    → 1000000000000000000
    """
    if decimals < 0:
        raise InvalidAmount(f"Token decimals must be non-negative, got {decimals}")

    integer, fraction = _split(amount)
    if len(fraction) > decimals:
        raise InvalidAmount(
            f"Amount {amount!r} has more than {decimals} fractional digits"
        )
    if len(integer) > _MAX_UINT256_DIGITS:
        raise InvalidAmount(f"Amount {amount[:20]!r}... does not fit in uint256")

    scaled = int(integer) * 10**decimals + int(fraction.ljust(decimals, "0") or "0")
    if scaled > MAX_UINT256:
        raise InvalidAmount(f"Amount {amount!r} does not fit in uint256")
    return scaled


def decode(value: int, decimals: int) -> str:
    """Render a scaled integer as a normalized decimal string."""
    if value < 0:
        raise InvalidAmount(f"Scaled amount must be non-negative, got {value}")
    if decimals == 0:
        return str(value)

    whole, frac = divmod(value, 10**decimals)
    if frac == 0:
        return str(whole)
    return f"{whole}.{str(frac).rjust(decimals, '0').rstrip('0')}"


def normalize(amount: str) -> str:
    """Canonical form of a valid amount string ("007.50" → "7.5")."""
    integer, fraction = _split(amount)
    return f"{integer}.{fraction}" if fraction else integer
