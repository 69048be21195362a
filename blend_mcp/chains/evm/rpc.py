"""JSON-RPC endpoint selection with fallback support."""
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ...config import ChainConfig
from ...errors import RpcUnavailable

logger = logging.getLogger(__name__)


def ssl_context() -> ssl.SSLContext:
    return ssl.create_default_context(cafile=certifi.where())


class EvmRpcClient:
    """Probe configured RPC endpoints and pick the first healthy one."""

    def __init__(self, config: ChainConfig) -> None:
        self.endpoints = list(config.rpc_endpoints)
        self.timeout = config.rpc_timeout
        self.chain_id = config.chain_id
        self.current_rpc_index = 0

    async def rpc_call(self, rpc_url: str, method: str, params: list[Any]) -> Any:
        """Make a single JSON-RPC call against one endpoint."""
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        connector = aiohttp.TCPConnector(ssl=ssl_context())
        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.post(
                rpc_url,
                json=payload,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                result = await response.json()
                if "error" in result:
                    raise RuntimeError(f"RPC Error: {result['error']}")
                return result.get("result")

    async def select_endpoint(self) -> str:
        """Return the first endpoint that answers eth_chainId for the expected chain."""
        if not self.endpoints:
            raise RpcUnavailable("No RPC endpoints configured")

        last_error: Exception | None = None
        for attempt in range(len(self.endpoints)):
            rpc_index = (self.current_rpc_index + attempt) % len(self.endpoints)
            rpc_url = self.endpoints[rpc_index]

            try:
                chain_id = int(await self.rpc_call(rpc_url, "eth_chainId", []), 16)
            except Exception as e:
                last_error = e
                logger.warning("RPC endpoint %s failed: %s", rpc_url, e)
                if attempt < len(self.endpoints) - 1:
                    logger.info("Trying next endpoint...")
                continue

            if self.chain_id is not None and chain_id != self.chain_id:
                last_error = RuntimeError(
                    f"endpoint reports chain {chain_id}, expected {self.chain_id}"
                )
                logger.warning("RPC endpoint %s is on the wrong chain: %s", rpc_url, last_error)
                continue

            if rpc_index != self.current_rpc_index:
                logger.info("Switched to RPC endpoint: %s", rpc_url)
                self.current_rpc_index = rpc_index
            logger.info("Using RPC endpoint %s (chain %d)", rpc_url, chain_id)
            return rpc_url

        raise RpcUnavailable(f"All RPC endpoints failed. Last error: {last_error}")
