"""Frozen data models."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Union

from .errors import ErrorKind


class TokenSymbol(str, Enum):
    """Assets the server knows how to route to the pool."""

    WETH = "WETH"
    USDC = "USDC"
    USDT = "USDT"
    DAI = "DAI"
    WBTC = "WBTC"


class InterestRateMode(IntEnum):
    STABLE = 1
    VARIABLE = 2

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class TokenConfig:
    """On-chain identity of a supported asset."""

    symbol: TokenSymbol
    address: str
    decimals: int


# ---------------------------------------------------------------------------
# Operation requests
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SupplyRequest:
    token: str
    amount: str
    on_behalf_of: str | None = None


@dataclass(frozen=True)
class BorrowRequest:
    token: str
    amount: str
    rate_mode: InterestRateMode
    on_behalf_of: str | None = None


@dataclass(frozen=True)
class RepayRequest:
    token: str
    amount: str
    rate_mode: InterestRateMode
    on_behalf_of: str | None = None


@dataclass(frozen=True)
class WithdrawRequest:
    token: str
    amount: str
    to: str | None = None


@dataclass(frozen=True)
class LiquidateRequest:
    collateral_token: str
    debt_token: str
    user: str
    debt_to_cover: str
    receive_a_token: bool


OperationRequest = Union[
    SupplyRequest, BorrowRequest, RepayRequest, WithdrawRequest, LiquidateRequest
]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TransactionReceipt:
    """Minimal view of a mined transaction."""

    transaction_hash: str
    block_number: int = 0
    status: int = 1

    @property
    def succeeded(self) -> bool:
        return self.status == 1


@dataclass(frozen=True)
class TransactionResult:
    """Outcome of a write operation, success or failure."""

    success: bool
    human_message: str
    transaction_hash: str | None = None
    error_kind: ErrorKind | None = None


@dataclass(frozen=True)
class AccountHealthSnapshot:
    """Rendered view of the pool's getUserAccountData output."""

    address: str
    total_collateral: str
    total_debt: str
    available_borrows: str
    liquidation_threshold: str
    loan_to_value: str
    health_factor: str


@dataclass(frozen=True)
class AccountDataResult:
    success: bool
    human_message: str
    snapshot: AccountHealthSnapshot | None = None
    error_kind: ErrorKind | None = None
