"""Translation of web3/aiohttp failures into the server's error taxonomy."""
from __future__ import annotations

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager

import aiohttp
from web3.exceptions import ContractLogicError, TimeExhausted

from ...errors import BlendError, RpcUnavailable, TransactionReverted


def translate_error(exc: Exception) -> BlendError:
    """Map a chain-side exception onto a BlendError."""
    if isinstance(exc, BlendError):
        return exc
    if isinstance(exc, ContractLogicError):
        return TransactionReverted(getattr(exc, "message", None) or str(exc) or "execution reverted")
    if isinstance(exc, TimeExhausted):
        return RpcUnavailable(f"Timed out waiting for confirmation: {exc}")
    if isinstance(exc, (aiohttp.ClientError, asyncio.TimeoutError, OSError)):
        return RpcUnavailable(f"RPC request failed: {str(exc) or type(exc).__name__}")
    return TransactionReverted(str(exc) or type(exc).__name__)


@contextmanager
def chain_errors() -> Iterator[None]:
    """Re-raise anything coming out of the chain as a BlendError."""
    try:
        yield
    except BlendError:
        raise
    except Exception as e:
        raise translate_error(e) from e
