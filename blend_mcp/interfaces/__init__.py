"""Protocol interfaces for the lending pool server."""
from .chain import ChainConnection, PendingTransaction
from .pool import PoolClient
from .token import TokenClient

__all__ = ["ChainConnection", "PendingTransaction", "PoolClient", "TokenClient"]
