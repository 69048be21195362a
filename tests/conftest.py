"""Shared test fixtures and sample data."""
from __future__ import annotations

import asyncio
import textwrap
from pathlib import Path
from typing import Any

import pytest

from blend_mcp.config import AppConfig, ChainConfig, PoolConfig, ServerConfig
from blend_mcp.models import TokenConfig, TokenSymbol, TransactionReceipt
from blend_mcp.registry import TokenRegistry
from blend_mcp.services import LendingContext

CALLER = "0x1111111111111111111111111111111111111111"
OTHER = "0x2222222222222222222222222222222222222222"
BORROWER = "0xabcabcabcabcabcabcabcabcabcabcabcabcabcd"
POOL = "0x87870Bca3F3fD6335C3F4ce8392D69350B4fA4E2"

TOKENS = {
    TokenSymbol.WETH: TokenConfig(TokenSymbol.WETH, "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18),
    TokenSymbol.USDC: TokenConfig(TokenSymbol.USDC, "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", 6),
    TokenSymbol.USDT: TokenConfig(TokenSymbol.USDT, "0xdAC17F958D2ee523a2206206994597C13D831ec7", 6),
    TokenSymbol.DAI: TokenConfig(TokenSymbol.DAI, "0x6B175474E89094C44Da98b954EedeAC495271d0F", 18),
    TokenSymbol.WBTC: TokenConfig(TokenSymbol.WBTC, "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599", 8),
}


# ---------------------------------------------------------------------------
# In-memory chain
# ---------------------------------------------------------------------------


class FakePending:
    def __init__(self, chain: FakeChain, label: str, tx_hash: str, status: int) -> None:
        self._chain = chain
        self._label = label
        self._hash = tx_hash
        self._status = status

    @property
    def transaction_hash(self) -> str:
        return self._hash

    async def wait(self) -> TransactionReceipt:
        await asyncio.sleep(0)
        self._chain.events.append(("confirmed", self._label))
        return TransactionReceipt(self._hash, block_number=100, status=self._status)


class FakeToken:
    def __init__(self, chain: FakeChain, address: str) -> None:
        self._chain = chain
        self.address = address

    async def allowance(self, owner: str, spender: str) -> int:
        self._chain.events.append(("allowance", self.address, owner, spender))
        if self._chain.allowance_error is not None:
            raise self._chain.allowance_error
        return self._chain.allowances.get(self.address, 0)

    async def approve(self, spender: str, amount: int) -> FakePending:
        self._chain.events.append(("approve", self.address, spender, amount))
        if self._chain.approve_error is not None:
            raise self._chain.approve_error
        return self._chain.pending("approve", self._chain.approve_status)


class FakePool:
    address = POOL

    def __init__(self, chain: FakeChain) -> None:
        self._chain = chain
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    async def _submit(self, name: str, *args: Any) -> FakePending:
        await asyncio.sleep(0)
        self.calls.append((name, args))
        self._chain.events.append(("submit", name))
        if self._chain.submit_error is not None:
            raise self._chain.submit_error
        return self._chain.pending(name, self._chain.main_status)

    async def supply(self, asset, amount, on_behalf_of, referral_code):
        return await self._submit("supply", asset, amount, on_behalf_of, referral_code)

    async def withdraw(self, asset, amount, to):
        return await self._submit("withdraw", asset, amount, to)

    async def borrow(self, asset, amount, interest_rate_mode, referral_code, on_behalf_of):
        return await self._submit(
            "borrow", asset, amount, interest_rate_mode, referral_code, on_behalf_of
        )

    async def repay(self, asset, amount, rate_mode, on_behalf_of):
        return await self._submit("repay", asset, amount, rate_mode, on_behalf_of)

    async def liquidation_call(self, collateral_asset, debt_asset, user, debt_to_cover, receive_a_token):
        return await self._submit(
            "liquidationCall", collateral_asset, debt_asset, user, debt_to_cover, receive_a_token
        )

    async def get_user_account_data(self, user):
        self._chain.events.append(("getUserAccountData", user))
        if self._chain.allowance_error is not None:
            raise self._chain.allowance_error
        return self._chain.account_data


class FakeChain:
    """ChainConnection double that records every interaction in order."""

    address = CALLER

    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []
        self.allowances: dict[str, int] = {}
        self.approve_status = 1
        self.main_status = 1
        self.allowance_error: Exception | None = None
        self.approve_error: Exception | None = None
        self.submit_error: Exception | None = None
        self.account_data: tuple[int, ...] = (0, 0, 0, 0, 0, 2**256 - 1)
        self.pool = FakePool(self)
        self._tx_counter = 0

    def token(self, address: str) -> FakeToken:
        return FakeToken(self, address)

    def pending(self, label: str, status: int) -> FakePending:
        self._tx_counter += 1
        return FakePending(self, label, f"0x{self._tx_counter:064x}", status)

    def approvals(self) -> list[tuple[Any, ...]]:
        return [e for e in self.events if e[0] == "approve"]

    def allowance_checks(self) -> list[tuple[Any, ...]]:
        return [e for e in self.events if e[0] == "allowance"]


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_app_config() -> AppConfig:
    return AppConfig(
        chain=ChainConfig(
            rpc_endpoints=("https://rpc1.example.com", "https://rpc2.example.com"),
            rpc_timeout=10,
            chain_id=1,
            private_key="0x" + "11" * 32,
        ),
        pool=PoolConfig(address=POOL, base_currency_decimals=18),
        tokens=dict(TOKENS),
        server=ServerConfig(name="BlendMCP", transport="stdio"),
    )


@pytest.fixture()
def registry() -> TokenRegistry:
    return TokenRegistry(TOKENS)


@pytest.fixture()
def fake_chain() -> FakeChain:
    return FakeChain()


@pytest.fixture()
def context(registry: TokenRegistry, fake_chain: FakeChain) -> LendingContext:
    return LendingContext(registry=registry, connection=fake_chain)


@pytest.fixture()
def offline_context(registry: TokenRegistry) -> LendingContext:
    return LendingContext(registry=registry, connection=None, init_error="connection refused")


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    chain:
      rpc_endpoints: ["${TEST_RPC_URL}", "https://rpc.example.com"]
      rpc_timeout: 10
      chain_id: 1
      private_key: "${TEST_PRIVATE_KEY}"
    pool:
      address: "0x87870Bca3F3fD6335C3F4ce8392D69350B4fA4E2"
    tokens:
      USDC: {address: "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", decimals: 6}
      WETH: {address: "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", decimals: 18}
    server:
      name: TestPool
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
