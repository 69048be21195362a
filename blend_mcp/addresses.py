"""Account address validation shared by the tool surface, executor and CLI."""
from __future__ import annotations

import re
from typing import Any

from .errors import InvalidRequest

ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"

_ADDRESS_RE = re.compile(ADDRESS_PATTERN)


def check_address(value: Any, field: str, required: bool = False) -> str | None:
    """Return ``value`` if it is a 0x-prefixed 20-byte hex address.

    Empty values give None unless ``required``. Anything else raises
    InvalidRequest naming ``field``.
    """
    if value is None or value == "":
        if required:
            raise InvalidRequest(f"'{field}' is required")
        return None
    if not isinstance(value, str):
        raise InvalidRequest(f"'{field}' must be a string, got {type(value).__name__}")
    if not _ADDRESS_RE.match(value):
        raise InvalidRequest(f"'{field}' is not a valid address: {value!r}")
    return value
