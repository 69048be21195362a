"""Allowance precondition for operations where the pool pulls tokens."""
from __future__ import annotations

import logging

from ..amounts import MAX_UINT256
from ..errors import ApprovalFailed, RpcUnavailable
from ..interfaces.chain import ChainConnection
from ..models import TokenConfig

logger = logging.getLogger(__name__)


class AllowanceGuard:
    """Make sure ``spender`` may pull ``required`` units of a token from ``owner``."""

    def __init__(self, connection: ChainConnection) -> None:
        self._connection = connection

    async def ensure_allowance(
        self, owner: str, spender: str, token: TokenConfig, required: int
    ) -> bool:
        """Approve the maximum allowance when the current one is too small.

        Returns True when an approval transaction was sent and confirmed,
        False when the existing allowance already covered ``required``.
        The allowance is not re-read after the approval is mined.
        """
        client = self._connection.token(token.address)
        current = await client.allowance(owner, spender)

        if current >= required:
            logger.debug(
                "%s allowance %d covers %d, no approval needed",
                token.symbol.value, current, required,
            )
            return False

        logger.info(
            "%s allowance %d below %d, approving %s",
            token.symbol.value, current, required, spender,
        )
        try:
            pending = await client.approve(spender, MAX_UINT256)
            receipt = await pending.wait()
        except RpcUnavailable:
            raise
        except Exception as e:
            raise ApprovalFailed(f"Approval of {token.symbol.value} failed: {e}") from e

        if not receipt.succeeded:
            raise ApprovalFailed(
                f"Approval of {token.symbol.value} reverted "
                f"(transaction {receipt.transaction_hash})"
            )

        logger.info(
            "%s approval confirmed: %s", token.symbol.value, receipt.transaction_hash
        )
        return True
