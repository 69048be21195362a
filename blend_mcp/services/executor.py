"""Pool write operations — supply, borrow, repay, withdraw, liquidate.

Every operation runs the same pipeline:

    validate → (conditional) ensure allowance → encode → submit → confirm → format

and returns a TransactionResult. Nothing raises past ``execute`` or the
per-operation methods; stage failures come back as failed results tagged
with an ErrorKind.
"""
from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from .. import amounts
from ..addresses import check_address
from ..errors import BlendError, ErrorKind, InvalidRequest, TransactionReverted
from ..interfaces.chain import ChainConnection, PendingTransaction
from ..models import (
    BorrowRequest,
    InterestRateMode,
    LiquidateRequest,
    OperationRequest,
    RepayRequest,
    SupplyRequest,
    TokenConfig,
    TransactionReceipt,
    TransactionResult,
    WithdrawRequest,
)
from .allowance import AllowanceGuard
from .context import LendingContext

logger = logging.getLogger(__name__)

REFERRAL_CODE = 0


# ---------------------------------------------------------------------------
# Result formatting
# ---------------------------------------------------------------------------


def _success(operation: str, receipt: TransactionReceipt, details: list[str]) -> TransactionResult:
    lines = [f"{operation} succeeded!", f"Transaction hash: {receipt.transaction_hash}"]
    lines.extend(details)
    return TransactionResult(
        success=True,
        human_message="\n".join(lines),
        transaction_hash=receipt.transaction_hash,
    )


def _failure(operation: str, kind: ErrorKind, message: str) -> TransactionResult:
    return TransactionResult(
        success=False,
        human_message=f"{operation} failed [{kind.value}]: {message}",
        error_kind=kind,
    )


def _rate_mode(value: Any) -> InterestRateMode:
    try:
        return InterestRateMode(value)
    except ValueError:
        raise InvalidRequest(
            f"Interest rate mode must be 1 (stable) or 2 (variable), got {value!r}"
        ) from None


class PoolOperationExecutor:
    """Orchestrates the five pool write operations."""

    def __init__(self, context: LendingContext) -> None:
        self._context = context

    async def execute(self, request: OperationRequest) -> TransactionResult:
        """Dispatch a request to its operation."""
        handlers: dict[type, Callable[[Any], Awaitable[TransactionResult]]] = {
            SupplyRequest: self.supply,
            BorrowRequest: self.borrow,
            RepayRequest: self.repay,
            WithdrawRequest: self.withdraw,
            LiquidateRequest: self.liquidate,
        }
        handler = handlers.get(type(request))
        if handler is None:
            return _failure(
                "Operation",
                ErrorKind.INVALID_REQUEST,
                f"Unsupported request {type(request).__name__}",
            )
        return await handler(request)

    async def supply(self, request: SupplyRequest) -> TransactionResult:
        return await self._run("Supply", self._supply(request))

    async def borrow(self, request: BorrowRequest) -> TransactionResult:
        return await self._run("Borrow", self._borrow(request))

    async def repay(self, request: RepayRequest) -> TransactionResult:
        return await self._run("Repay", self._repay(request))

    async def withdraw(self, request: WithdrawRequest) -> TransactionResult:
        return await self._run("Withdraw", self._withdraw(request))

    async def liquidate(self, request: LiquidateRequest) -> TransactionResult:
        return await self._run("Liquidation", self._liquidate(request))

    # ------------------------------------------------------------------
    # Pipeline plumbing
    # ------------------------------------------------------------------

    async def _run(
        self, operation: str, pipeline: Awaitable[TransactionResult]
    ) -> TransactionResult:
        try:
            result = await pipeline
        except BlendError as e:
            logger.warning("%s failed [%s]: %s", operation, e.kind.value, e)
            return _failure(operation, e.kind, str(e))
        except Exception as e:
            logger.exception("%s failed unexpectedly", operation)
            return _failure(
                operation, ErrorKind.TRANSACTION_REVERTED, str(e) or type(e).__name__
            )

        logger.info("%s confirmed: %s", operation, result.transaction_hash)
        return result

    @staticmethod
    async def _confirm(pending: PendingTransaction) -> TransactionReceipt:
        receipt = await pending.wait()
        if not receipt.succeeded:
            raise TransactionReverted(
                f"Transaction {receipt.transaction_hash} reverted "
                f"in block {receipt.block_number}"
            )
        return receipt

    @staticmethod
    async def _ensure_allowance(
        connection: ChainConnection, token: TokenConfig, amount: int
    ) -> None:
        guard = AllowanceGuard(connection)
        await guard.ensure_allowance(
            connection.address, connection.pool.address, token, amount
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def _supply(self, request: SupplyRequest) -> TransactionResult:
        token = self._context.registry.lookup(request.token)
        on_behalf_of = check_address(request.on_behalf_of, "onBehalfOf")
        amount = amounts.encode(request.amount, token.decimals)
        connection = self._context.require_connection()
        target = on_behalf_of or connection.address

        await self._ensure_allowance(connection, token, amount)
        pending = await connection.pool.supply(token.address, amount, target, REFERRAL_CODE)
        receipt = await self._confirm(pending)

        return _success("Supply", receipt, [
            f"Amount: {amounts.normalize(request.amount)} {token.symbol.value}",
            f"On behalf of: {target}",
        ])

    async def _borrow(self, request: BorrowRequest) -> TransactionResult:
        token = self._context.registry.lookup(request.token)
        rate_mode = _rate_mode(request.rate_mode)
        on_behalf_of = check_address(request.on_behalf_of, "onBehalfOf")
        amount = amounts.encode(request.amount, token.decimals)
        connection = self._context.require_connection()
        target = on_behalf_of or connection.address

        pending = await connection.pool.borrow(
            token.address, amount, int(rate_mode), REFERRAL_CODE, target
        )
        receipt = await self._confirm(pending)

        return _success("Borrow", receipt, [
            f"Amount: {amounts.normalize(request.amount)} {token.symbol.value}",
            f"Rate mode: {rate_mode.label}",
            f"On behalf of: {target}",
        ])

    async def _repay(self, request: RepayRequest) -> TransactionResult:
        token = self._context.registry.lookup(request.token)
        rate_mode = _rate_mode(request.rate_mode)
        on_behalf_of = check_address(request.on_behalf_of, "onBehalfOf")
        amount = amounts.encode(request.amount, token.decimals)
        connection = self._context.require_connection()
        target = on_behalf_of or connection.address

        await self._ensure_allowance(connection, token, amount)
        pending = await connection.pool.repay(token.address, amount, int(rate_mode), target)
        receipt = await self._confirm(pending)

        return _success("Repay", receipt, [
            f"Amount: {amounts.normalize(request.amount)} {token.symbol.value}",
            f"Rate mode: {rate_mode.label}",
            f"On behalf of: {target}",
        ])

    async def _withdraw(self, request: WithdrawRequest) -> TransactionResult:
        token = self._context.registry.lookup(request.token)
        to = check_address(request.to, "to")
        amount = amounts.encode(request.amount, token.decimals)
        connection = self._context.require_connection()
        target = to or connection.address

        pending = await connection.pool.withdraw(token.address, amount, target)
        receipt = await self._confirm(pending)

        return _success("Withdraw", receipt, [
            f"Amount: {amounts.normalize(request.amount)} {token.symbol.value}",
            f"To: {target}",
        ])

    async def _liquidate(self, request: LiquidateRequest) -> TransactionResult:
        collateral = self._context.registry.lookup(request.collateral_token)
        debt = self._context.registry.lookup(request.debt_token)
        user = check_address(request.user, "user", required=True)
        amount = amounts.encode(request.debt_to_cover, debt.decimals)
        connection = self._context.require_connection()

        # The liquidator pays the debt, so the allowance is the caller's own.
        await self._ensure_allowance(connection, debt, amount)
        pending = await connection.pool.liquidation_call(
            collateral.address,
            debt.address,
            user,
            amount,
            bool(request.receive_a_token),
        )
        receipt = await self._confirm(pending)

        return _success("Liquidation", receipt, [
            f"Debt covered: {amounts.normalize(request.debt_to_cover)} {debt.symbol.value}",
            f"Collateral: {collateral.symbol.value}",
            f"User: {user}",
            f"Receive aToken: {'yes' if request.receive_a_token else 'no'}",
        ])
