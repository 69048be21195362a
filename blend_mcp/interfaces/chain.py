"""Chain connection protocol — signing identity plus bound contract handles."""
from typing import Protocol

from ..models import TransactionReceipt
from .pool import PoolClient
from .token import TokenClient


class PendingTransaction(Protocol):
    """A broadcast transaction that has not been confirmed yet."""

    @property
    def transaction_hash(self) -> str: ...

    async def wait(self) -> TransactionReceipt: ...


class ChainConnection(Protocol):
    """Live connection shared by every operation for the process lifetime."""

    @property
    def address(self) -> str: ...

    @property
    def pool(self) -> PoolClient: ...

    def token(self, address: str) -> TokenClient: ...
