"""Static symbol → token configuration lookup."""
from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from .errors import UnknownToken
from .models import TokenConfig, TokenSymbol


class TokenRegistry:
    """Read-only table of the tokens the pool operations may touch."""

    def __init__(self, tokens: Mapping[TokenSymbol, TokenConfig]) -> None:
        for symbol, token in tokens.items():
            if token.symbol is not symbol:
                raise ValueError(
                    f"Token entry {symbol.value} is registered as {token.symbol.value}"
                )
        self._tokens = MappingProxyType(dict(tokens))

    def lookup(self, symbol: str | TokenSymbol) -> TokenConfig:
        """Resolve a symbol, failing with UnknownToken when it is not registered."""
        try:
            key = TokenSymbol(symbol)
        except ValueError:
            raise UnknownToken(f"Unsupported token: {symbol}") from None

        token = self._tokens.get(key)
        if token is None:
            raise UnknownToken(f"Token {key.value} is not configured")
        return token

    def symbols(self) -> tuple[TokenSymbol, ...]:
        return tuple(self._tokens)

    def __contains__(self, symbol: object) -> bool:
        try:
            return TokenSymbol(symbol) in self._tokens
        except ValueError:
            return False

    def __len__(self) -> int:
        return len(self._tokens)
