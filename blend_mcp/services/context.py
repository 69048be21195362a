"""Immutable per-process context handed to every operation."""
from __future__ import annotations

from dataclasses import dataclass

from ..config import AppConfig
from ..errors import UninitializedConnection
from ..interfaces.chain import ChainConnection
from ..registry import TokenRegistry


@dataclass(frozen=True)
class LendingContext:
    """Token registry plus the chain connection, if bootstrap succeeded."""

    registry: TokenRegistry
    connection: ChainConnection | None = None
    base_currency_decimals: int = 18
    init_error: str = ""

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        connection: ChainConnection | None = None,
        init_error: str = "",
    ) -> LendingContext:
        return cls(
            registry=TokenRegistry(config.tokens),
            connection=connection,
            base_currency_decimals=config.pool.base_currency_decimals,
            init_error=init_error,
        )

    def require_connection(self) -> ChainConnection:
        if self.connection is None:
            detail = f": {self.init_error}" if self.init_error else ""
            raise UninitializedConnection(f"Chain connection is not initialized{detail}")
        return self.connection
