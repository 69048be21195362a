"""Read-only account health query against the pool."""
from __future__ import annotations

import logging

from .. import amounts
from ..addresses import check_address
from ..errors import BlendError, ErrorKind
from ..models import AccountDataResult, AccountHealthSnapshot
from .context import LendingContext

logger = logging.getLogger(__name__)

HEALTH_FACTOR_DECIMALS = 18


def _basis_points(value: int) -> str:
    """8250 → "8250 (82.50%)"."""
    return f"{value} ({value // 100}.{value % 100:02d}%)"


def _health_factor(value: int) -> str:
    # The pool reports uint256 max when the account has no debt.
    if value == amounts.MAX_UINT256:
        return "∞"
    return amounts.decode(value, HEALTH_FACTOR_DECIMALS)


def format_snapshot(snapshot: AccountHealthSnapshot) -> str:
    return (
        f"Account status for {snapshot.address}:\n"
        f"Total collateral: {snapshot.total_collateral}\n"
        f"Total debt: {snapshot.total_debt}\n"
        f"Available borrows: {snapshot.available_borrows}\n"
        f"Liquidation threshold: {snapshot.liquidation_threshold}\n"
        f"Loan to value: {snapshot.loan_to_value}\n"
        f"Health factor: {snapshot.health_factor}"
    )


class AccountHealthReader:
    """Decode the pool's getUserAccountData view into a snapshot."""

    def __init__(self, context: LendingContext) -> None:
        self._context = context

    async def get_account_data(self, address: str) -> AccountHealthSnapshot:
        check_address(address, "address", required=True)
        connection = self._context.require_connection()
        (
            total_collateral,
            total_debt,
            available_borrows,
            liquidation_threshold,
            ltv,
            health_factor,
        ) = await connection.pool.get_user_account_data(address)

        base = self._context.base_currency_decimals
        return AccountHealthSnapshot(
            address=address,
            total_collateral=amounts.decode(total_collateral, base),
            total_debt=amounts.decode(total_debt, base),
            available_borrows=amounts.decode(available_borrows, base),
            liquidation_threshold=_basis_points(liquidation_threshold),
            loan_to_value=_basis_points(ltv),
            health_factor=_health_factor(health_factor),
        )

    async def read(self, address: str) -> AccountDataResult:
        """Like get_account_data, but failures come back as a result."""
        try:
            snapshot = await self.get_account_data(address)
        except BlendError as e:
            logger.warning("Account read for %s failed [%s]: %s", address, e.kind.value, e)
            return AccountDataResult(
                success=False,
                human_message=f"Failed to read account status for {address} [{e.kind.value}]: {e}",
                error_kind=e.kind,
            )
        except Exception as e:
            logger.exception("Account read for %s failed unexpectedly", address)
            return AccountDataResult(
                success=False,
                human_message=f"Failed to read account status for {address} "
                f"[{ErrorKind.RPC_UNAVAILABLE.value}]: {e}",
                error_kind=ErrorKind.RPC_UNAVAILABLE,
            )

        return AccountDataResult(
            success=True, human_message=format_snapshot(snapshot), snapshot=snapshot
        )
