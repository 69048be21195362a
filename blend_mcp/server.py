"""MCP server: exposes the pool operations as tools and account health as a resource."""
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Annotated, Any, Literal, Optional

from mcp.server.fastmcp import Context, FastMCP
from pydantic import Field

from .addresses import ADDRESS_PATTERN
from .chains.evm import connect
from .config import AppConfig
from .interfaces.chain import ChainConnection
from .models import TokenSymbol
from .services import LendingContext
from .tools import AMOUNT_PATTERN, ToolAdapter

logger = logging.getLogger(__name__)

Amount = Annotated[
    str,
    Field(pattern=AMOUNT_PATTERN, description="Decimal amount in token units, e.g. '100.5'"),
]
Address = Annotated[str, Field(pattern=ADDRESS_PATTERN, description="0x-prefixed account address")]
RateMode = Annotated[Literal[1, 2], Field(description="1 = stable, 2 = variable")]

Connector = Callable[[AppConfig], Awaitable[ChainConnection]]


@asynccontextmanager
async def open_context(
    config: AppConfig, connector: Connector = connect
) -> AsyncIterator[LendingContext]:
    """Bootstrap the chain connection once; a failure is recorded, not retried."""
    connection: Any = None
    init_error = ""
    try:
        connection = await connector(config)
    except Exception as e:
        init_error = str(e) or type(e).__name__
        logger.error("Chain connection bootstrap failed: %s", init_error)

    try:
        yield LendingContext.from_config(config, connection, init_error)
    finally:
        close = getattr(connection, "close", None)
        if close is not None:
            try:
                await close()
            except Exception as e:
                logger.warning("Error closing chain connection: %s", e)


def _adapter(ctx: Context) -> ToolAdapter:
    return ctx.request_context.lifespan_context


def build_server(config: AppConfig, connector: Connector = connect) -> FastMCP:
    """Create the FastMCP server with all tools and the account resource registered."""

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[ToolAdapter]:
        async with open_context(config, connector) as context:
            logger.info("%s ready (%d tokens)", config.server.name, len(context.registry))
            yield ToolAdapter(context)
        logger.info("%s shutdown complete", config.server.name)

    mcp = FastMCP(config.server.name, lifespan=lifespan)

    @mcp.tool()
    async def supply(
        ctx: Context,
        token: TokenSymbol,
        amount: Amount,
        onBehalfOf: Optional[Address] = None,
    ) -> str:
        """Supply a token to the lending pool.

        Approves the pool first when the current allowance is too small.
        onBehalfOf defaults to the server's own account.
        """
        return await _adapter(ctx).supply(token.value, amount, onBehalfOf)

    @mcp.tool()
    async def borrow(
        ctx: Context,
        token: TokenSymbol,
        amount: Amount,
        interestRateMode: RateMode,
        onBehalfOf: Optional[Address] = None,
    ) -> str:
        """Borrow a token from the lending pool at a stable (1) or variable (2) rate."""
        return await _adapter(ctx).borrow(token.value, amount, interestRateMode, onBehalfOf)

    @mcp.tool()
    async def repay(
        ctx: Context,
        token: TokenSymbol,
        amount: Amount,
        rateMode: RateMode,
        onBehalfOf: Optional[Address] = None,
    ) -> str:
        """Repay borrowed tokens for the given rate mode."""
        return await _adapter(ctx).repay(token.value, amount, rateMode, onBehalfOf)

    @mcp.tool()
    async def withdraw(
        ctx: Context,
        token: TokenSymbol,
        amount: Amount,
        to: Optional[Address] = None,
    ) -> str:
        """Withdraw supplied tokens; 'to' defaults to the server's own account."""
        return await _adapter(ctx).withdraw(token.value, amount, to)

    @mcp.tool()
    async def liquidate(
        ctx: Context,
        collateralToken: TokenSymbol,
        debtToken: TokenSymbol,
        user: Address,
        debtToCover: Amount,
        receiveAToken: bool,
    ) -> str:
        """Liquidate an under-collateralized account.

        Repays debtToCover of the user's debtToken debt and seizes
        collateralToken, as aTokens when receiveAToken is true.
        """
        return await _adapter(ctx).liquidate(
            collateralToken.value, debtToken.value, user, debtToCover, receiveAToken
        )

    @mcp.resource(
        "blend://user/{address}",
        name="userStatus",
        description="Collateral, debt, LTV and health factor of an account",
    )
    async def user_status(address: str) -> str:
        return await _adapter(mcp.get_context()).account_status(address)

    return mcp
