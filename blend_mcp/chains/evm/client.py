"""EVM chain connection — signing identity, nonce-serialized submission."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncHTTPProvider, AsyncWeb3

from ...config import AppConfig
from ...models import TransactionReceipt
from .contracts import Erc20Contract, PoolContract
from .errors import chain_errors
from .rpc import EvmRpcClient, ssl_context

logger = logging.getLogger(__name__)


class Web3PendingTransaction:
    """Broadcast transaction awaiting its receipt."""

    def __init__(self, w3: AsyncWeb3, transaction_hash: str, timeout: float) -> None:
        self._w3 = w3
        self._hash = transaction_hash
        self._timeout = timeout

    @property
    def transaction_hash(self) -> str:
        return self._hash

    async def wait(self) -> TransactionReceipt:
        with chain_errors():
            receipt = await self._w3.eth.wait_for_transaction_receipt(
                self._hash, timeout=self._timeout
            )
        result = TransactionReceipt(
            transaction_hash=self._w3.to_hex(receipt["transactionHash"]),
            block_number=int(receipt["blockNumber"]),
            status=int(receipt["status"]),
        )
        logger.info(
            "Transaction %s mined in block %d (status %d)",
            result.transaction_hash, result.block_number, result.status,
        )
        return result


class EvmConnection:
    """Process-wide connection: one provider, one signer, bound pool contract."""

    def __init__(
        self,
        w3: AsyncWeb3,
        account: LocalAccount,
        pool_address: str,
        receipt_timeout: float = 120,
    ) -> None:
        self._w3 = w3
        self._account = account
        self._receipt_timeout = receipt_timeout
        # One signer draws sequential nonces; submissions must not interleave.
        self._submit_lock = asyncio.Lock()
        self._next_nonce = 0
        self._pool = PoolContract(self, pool_address)

    @property
    def address(self) -> str:
        return self._account.address

    @property
    def pool(self) -> PoolContract:
        return self._pool

    def token(self, address: str) -> Erc20Contract:
        return Erc20Contract(self, address)

    def contract(self, address: str, abi: list[dict[str, Any]]) -> Any:
        return self._w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(address), abi=abi
        )

    async def _reserve_nonce(self) -> int:
        """Pending nonce, bumped past anything this process already broadcast.

        A lagging or load-balanced node may not list our last transaction in
        its pending pool yet. Caller must hold ``_submit_lock``.
        """
        pending = await self._w3.eth.get_transaction_count(self.address, "pending")
        if pending < self._next_nonce:
            logger.debug(
                "Node reports pending nonce %d, using local %d", pending, self._next_nonce
            )
            return self._next_nonce
        return pending

    async def transact(self, function: Any, label: str) -> Web3PendingTransaction:
        """Build, sign and broadcast a contract call; return without waiting."""
        with chain_errors():
            async with self._submit_lock:
                nonce = await self._reserve_nonce()
                tx = await function.build_transaction(
                    {"from": self.address, "nonce": nonce}
                )
                signed = self._account.sign_transaction(tx)
                tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
                self._next_nonce = nonce + 1

        hash_hex = self._w3.to_hex(tx_hash)
        logger.info("Submitted %s (nonce %d): %s", label, nonce, hash_hex)
        return Web3PendingTransaction(self._w3, hash_hex, self._receipt_timeout)

    async def close(self) -> None:
        await self._w3.provider.disconnect()


async def connect(config: AppConfig) -> EvmConnection:
    """Bootstrap the chain connection from configuration."""
    if not config.chain.private_key:
        raise ValueError("No signing key configured (chain.private_key)")

    endpoint = await EvmRpcClient(config.chain).select_endpoint()
    provider = AsyncHTTPProvider(
        endpoint,
        request_kwargs={
            "ssl": ssl_context(),
            "timeout": aiohttp.ClientTimeout(total=config.chain.rpc_timeout),
        },
    )
    account: LocalAccount = Account.from_key(config.chain.private_key)

    connection = EvmConnection(
        AsyncWeb3(provider),
        account,
        config.pool.address,
        receipt_timeout=config.chain.receipt_timeout,
    )
    logger.info(
        "Chain connection ready: signer %s, pool %s",
        connection.address, connection.pool.address,
    )
    return connection
