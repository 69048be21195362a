"""Typed pool and ERC-20 clients over web3 contract handles."""
from __future__ import annotations

from typing import TYPE_CHECKING

from web3 import AsyncWeb3

from .abi import ERC20_ABI, POOL_ABI
from .errors import chain_errors

if TYPE_CHECKING:
    from .client import EvmConnection, Web3PendingTransaction


def _checksum(address: str) -> str:
    return AsyncWeb3.to_checksum_address(address)


class PoolContract:
    """Lending pool: supply, withdraw, borrow, repay, liquidationCall, account data."""

    def __init__(self, connection: EvmConnection, address: str) -> None:
        self._connection = connection
        self._contract = connection.contract(address, POOL_ABI)

    @property
    def address(self) -> str:
        return self._contract.address

    async def supply(
        self, asset: str, amount: int, on_behalf_of: str, referral_code: int
    ) -> Web3PendingTransaction:
        with chain_errors():
            fn = self._contract.functions.supply(
                _checksum(asset), amount, _checksum(on_behalf_of), referral_code
            )
        return await self._connection.transact(fn, "supply")

    async def withdraw(self, asset: str, amount: int, to: str) -> Web3PendingTransaction:
        with chain_errors():
            fn = self._contract.functions.withdraw(_checksum(asset), amount, _checksum(to))
        return await self._connection.transact(fn, "withdraw")

    async def borrow(
        self,
        asset: str,
        amount: int,
        interest_rate_mode: int,
        referral_code: int,
        on_behalf_of: str,
    ) -> Web3PendingTransaction:
        with chain_errors():
            fn = self._contract.functions.borrow(
                _checksum(asset),
                amount,
                interest_rate_mode,
                referral_code,
                _checksum(on_behalf_of),
            )
        return await self._connection.transact(fn, "borrow")

    async def repay(
        self, asset: str, amount: int, rate_mode: int, on_behalf_of: str
    ) -> Web3PendingTransaction:
        with chain_errors():
            fn = self._contract.functions.repay(
                _checksum(asset), amount, rate_mode, _checksum(on_behalf_of)
            )
        return await self._connection.transact(fn, "repay")

    async def liquidation_call(
        self,
        collateral_asset: str,
        debt_asset: str,
        user: str,
        debt_to_cover: int,
        receive_a_token: bool,
    ) -> Web3PendingTransaction:
        with chain_errors():
            fn = self._contract.functions.liquidationCall(
                _checksum(collateral_asset),
                _checksum(debt_asset),
                _checksum(user),
                debt_to_cover,
                receive_a_token,
            )
        return await self._connection.transact(fn, "liquidationCall")

    async def get_user_account_data(self, user: str) -> tuple[int, int, int, int, int, int]:
        with chain_errors():
            data = await self._contract.functions.getUserAccountData(_checksum(user)).call()
        return tuple(int(v) for v in data)  # type: ignore[return-value]


class Erc20Contract:
    """ERC-20 token: allowance read and approve."""

    def __init__(self, connection: EvmConnection, address: str) -> None:
        self._connection = connection
        self._contract = connection.contract(address, ERC20_ABI)

    @property
    def address(self) -> str:
        return self._contract.address

    async def allowance(self, owner: str, spender: str) -> int:
        with chain_errors():
            value = await self._contract.functions.allowance(
                _checksum(owner), _checksum(spender)
            ).call()
        return int(value)

    async def approve(self, spender: str, amount: int) -> Web3PendingTransaction:
        with chain_errors():
            fn = self._contract.functions.approve(_checksum(spender), amount)
        return await self._connection.transact(fn, "approve")
