"""ERC-20 token client protocol — allowance read and approval."""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .chain import PendingTransaction


class TokenClient(Protocol):
    async def allowance(self, owner: str, spender: str) -> int: ...

    async def approve(self, spender: str, amount: int) -> PendingTransaction: ...
