"""Tool adapter — turns tool arguments into requests and results into text."""
from __future__ import annotations

import logging
from collections.abc import Callable

from .addresses import check_address
from .errors import BlendError, ErrorKind, InvalidRequest
from .models import (
    BorrowRequest,
    InterestRateMode,
    LiquidateRequest,
    OperationRequest,
    RepayRequest,
    SupplyRequest,
    WithdrawRequest,
)
from .services import AccountHealthReader, LendingContext, PoolOperationExecutor

logger = logging.getLogger(__name__)

AMOUNT_PATTERN = r"^(?:\d+(?:\.\d*)?|\.\d+)$"


def _rate_mode(value: int, field: str) -> InterestRateMode:
    try:
        return InterestRateMode(value)
    except ValueError:
        raise InvalidRequest(f"'{field}' must be 1 (stable) or 2 (variable), got {value!r}") from None


class ToolAdapter:
    """One method per tool; every method returns a single text payload."""

    def __init__(self, context: LendingContext) -> None:
        self._context = context
        self._executor = PoolOperationExecutor(context)
        self._reader = AccountHealthReader(context)

    @property
    def context(self) -> LendingContext:
        return self._context

    async def supply(self, token: str, amount: str, on_behalf_of: str | None = None) -> str:
        return await self._run("Supply", lambda: SupplyRequest(
            token=token,
            amount=amount,
            on_behalf_of=check_address(on_behalf_of, "onBehalfOf"),
        ))

    async def borrow(
        self,
        token: str,
        amount: str,
        interest_rate_mode: int,
        on_behalf_of: str | None = None,
    ) -> str:
        return await self._run("Borrow", lambda: BorrowRequest(
            token=token,
            amount=amount,
            rate_mode=_rate_mode(interest_rate_mode, "interestRateMode"),
            on_behalf_of=check_address(on_behalf_of, "onBehalfOf"),
        ))

    async def repay(
        self, token: str, amount: str, rate_mode: int, on_behalf_of: str | None = None
    ) -> str:
        return await self._run("Repay", lambda: RepayRequest(
            token=token,
            amount=amount,
            rate_mode=_rate_mode(rate_mode, "rateMode"),
            on_behalf_of=check_address(on_behalf_of, "onBehalfOf"),
        ))

    async def withdraw(self, token: str, amount: str, to: str | None = None) -> str:
        return await self._run("Withdraw", lambda: WithdrawRequest(
            token=token, amount=amount, to=check_address(to, "to"),
        ))

    async def liquidate(
        self,
        collateral_token: str,
        debt_token: str,
        user: str,
        debt_to_cover: str,
        receive_a_token: bool,
    ) -> str:
        return await self._run("Liquidation", lambda: LiquidateRequest(
            collateral_token=collateral_token,
            debt_token=debt_token,
            user=check_address(user, "user", required=True),
            debt_to_cover=debt_to_cover,
            receive_a_token=bool(receive_a_token),
        ))

    async def account_status(self, address: str) -> str:
        try:
            check_address(address, "address", required=True)
        except InvalidRequest as e:
            return f"Failed to read account status [{e.kind.value}]: {e}"
        result = await self._reader.read(address)
        return result.human_message

    async def _run(self, operation: str, build: Callable[[], OperationRequest]) -> str:
        try:
            request = build()
        except BlendError as e:
            logger.warning("%s rejected [%s]: %s", operation, e.kind.value, e)
            return f"{operation} failed [{e.kind.value}]: {e}"
        except Exception as e:
            logger.warning("%s rejected malformed arguments: %s", operation, e)
            return f"{operation} failed [{ErrorKind.INVALID_REQUEST.value}]: {e}"

        try:
            result = await self._executor.execute(request)
        except Exception as e:
            logger.exception("%s raised past the executor", operation)
            return f"{operation} failed [{ErrorKind.TRANSACTION_REVERTED.value}]: {e}"
        return result.human_message
