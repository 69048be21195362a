"""EVM chain connection backed by web3.py."""
from .client import EvmConnection, Web3PendingTransaction, connect
from .contracts import Erc20Contract, PoolContract
from .errors import chain_errors, translate_error
from .rpc import EvmRpcClient

__all__ = [
    "EvmConnection",
    "EvmRpcClient",
    "Erc20Contract",
    "PoolContract",
    "Web3PendingTransaction",
    "chain_errors",
    "connect",
    "translate_error",
]
