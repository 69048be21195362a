"""Error taxonomy shared by every layer of the server."""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    UNKNOWN_TOKEN = "UnknownToken"
    INVALID_AMOUNT = "InvalidAmount"
    APPROVAL_FAILED = "ApprovalFailed"
    TRANSACTION_REVERTED = "TransactionReverted"
    RPC_UNAVAILABLE = "RpcUnavailable"
    UNINITIALIZED_CONNECTION = "UninitializedConnection"
    INVALID_REQUEST = "InvalidRequest"


class BlendError(Exception):
    """Base class for failures that are reported back to the caller."""

    kind: ErrorKind = ErrorKind.TRANSACTION_REVERTED


class UnknownToken(BlendError):
    kind = ErrorKind.UNKNOWN_TOKEN


class InvalidAmount(BlendError):
    kind = ErrorKind.INVALID_AMOUNT


class ApprovalFailed(BlendError):
    kind = ErrorKind.APPROVAL_FAILED


class TransactionReverted(BlendError):
    kind = ErrorKind.TRANSACTION_REVERTED


class RpcUnavailable(BlendError):
    kind = ErrorKind.RPC_UNAVAILABLE


class UninitializedConnection(BlendError):
    kind = ErrorKind.UNINITIALIZED_CONNECTION


class InvalidRequest(BlendError):
    kind = ErrorKind.INVALID_REQUEST
