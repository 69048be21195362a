"""Pool client protocol — one method per consumed pool ABI entry."""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .chain import PendingTransaction


class PoolClient(Protocol):
    @property
    def address(self) -> str: ...

    async def supply(
        self, asset: str, amount: int, on_behalf_of: str, referral_code: int
    ) -> PendingTransaction: ...

    async def withdraw(self, asset: str, amount: int, to: str) -> PendingTransaction: ...

    async def borrow(
        self,
        asset: str,
        amount: int,
        interest_rate_mode: int,
        referral_code: int,
        on_behalf_of: str,
    ) -> PendingTransaction: ...

    async def repay(
        self, asset: str, amount: int, rate_mode: int, on_behalf_of: str
    ) -> PendingTransaction: ...

    async def liquidation_call(
        self,
        collateral_asset: str,
        debt_asset: str,
        user: str,
        debt_to_cover: int,
        receive_a_token: bool,
    ) -> PendingTransaction: ...

    async def get_user_account_data(
        self, user: str
    ) -> tuple[int, int, int, int, int, int]: ...
