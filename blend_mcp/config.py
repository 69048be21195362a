"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .models import TokenConfig, TokenSymbol

logger = logging.getLogger(__name__)

TRANSPORTS = ("stdio", "sse")
MAX_TOKEN_DECIMALS = 77

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChainConfig:
    rpc_endpoints: tuple[str, ...] = ()
    rpc_timeout: int = 30
    chain_id: int | None = None
    private_key: str = field(default="", repr=False)
    receipt_timeout: int = 120


@dataclass(frozen=True)
class PoolConfig:
    address: str = ""
    base_currency_decimals: int = 18


@dataclass(frozen=True)
class ServerConfig:
    name: str = "BlendMCP"
    transport: str = "stdio"


@dataclass(frozen=True)
class AppConfig:
    chain: ChainConfig = field(default_factory=ChainConfig)
    pool: PoolConfig = field(default_factory=PoolConfig)
    tokens: dict[TokenSymbol, TokenConfig] = field(default_factory=dict)
    server: ServerConfig = field(default_factory=ServerConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_chain(raw: dict[str, Any]) -> ChainConfig:
    chain_id = raw.get("chain_id")
    return ChainConfig(
        rpc_endpoints=tuple(e for e in raw.get("rpc_endpoints", []) if e),
        rpc_timeout=int(raw.get("rpc_timeout", 30)),
        chain_id=int(chain_id) if chain_id not in (None, "") else None,
        private_key=raw.get("private_key", "") or "",
        receipt_timeout=int(raw.get("receipt_timeout", 120)),
    )


def _build_pool(raw: dict[str, Any]) -> PoolConfig:
    return PoolConfig(
        address=raw.get("address", "") or "",
        base_currency_decimals=int(raw.get("base_currency_decimals", 18)),
    )


def _build_tokens(raw: dict[str, Any]) -> dict[TokenSymbol, TokenConfig]:
    tokens: dict[TokenSymbol, TokenConfig] = {}
    for name, cfg in raw.items():
        try:
            symbol = TokenSymbol(name)
        except ValueError:
            raise ValueError(f"Unsupported token symbol '{name}'") from None
        tokens[symbol] = TokenConfig(
            symbol=symbol,
            address=cfg.get("address", "") or "",
            decimals=int(cfg.get("decimals", 18)),
        )
    return tokens


def _build_server(raw: dict[str, Any]) -> ServerConfig:
    return ServerConfig(
        name=raw.get("name", "BlendMCP"),
        transport=raw.get("transport", "stdio"),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        chain=_build_chain(raw.get("chain", {})),
        pool=_build_pool(raw.get("pool", {})),
        tokens=_build_tokens(raw.get("tokens", {})),
        server=_build_server(raw.get("server", {})),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.chain.rpc_endpoints:
        raise ValueError("At least one RPC endpoint must be configured")
    if not cfg.pool.address:
        raise ValueError("Pool address is not configured")
    if not cfg.tokens:
        raise ValueError("At least one token must be configured")

    for symbol, token in cfg.tokens.items():
        if not token.address:
            raise ValueError(f"Token '{symbol.value}' has no address")
        if not 0 <= token.decimals <= MAX_TOKEN_DECIMALS:
            raise ValueError(
                f"Token '{symbol.value}' has invalid decimals {token.decimals}"
            )

    if cfg.server.transport not in TRANSPORTS:
        raise ValueError(f"Unknown transport '{cfg.server.transport}'")
