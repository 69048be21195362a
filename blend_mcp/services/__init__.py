"""Service modules"""
from .account import AccountHealthReader
from .allowance import AllowanceGuard
from .context import LendingContext
from .executor import PoolOperationExecutor

__all__ = [
    "AccountHealthReader",
    "AllowanceGuard",
    "LendingContext",
    "PoolOperationExecutor",
]
