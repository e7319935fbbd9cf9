"""Operator commands that write the chain configuration and token registry."""

import asyncio
import logging

import click

from config import settings
from db.store import RedisStore
from services.errors import ProvisioningError
from services.provisioning import ChainParams, ProvisioningService, derive_address

module_logger = logging.getLogger(__name__)


def _service(ctx: click.Context) -> ProvisioningService:
    store = ctx.obj.get("store") or RedisStore.from_url(settings.redis_url)
    ctx.obj["store"] = store

    factory = ctx.obj.get("client_factory")
    if factory is None:
        return ProvisioningService(store)
    return ProvisioningService(store, factory)


def _run(ctx: click.Context, coro):
    async def runner():
        try:
            return await coro
        finally:
            await ctx.obj["store"].close()

    try:
        return asyncio.run(runner())
    except ProvisioningError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("--log-level", default=lambda: settings.LOG_LEVEL, show_default="LOG_LEVEL")
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    """Provision the transfer dispatcher."""

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.ensure_object(dict)


@cli.command("set-chain")
@click.option("--chain-id", default=lambda: settings.RPC_CHAIN_ID, help="Chain id (RPC_CHAIN_ID).")
@click.option("--chain-name", default=lambda: settings.RPC_CHAIN_NAME, help="Chain name (RPC_CHAIN_NAME).")
@click.option("--rpc-url", default=lambda: settings.RPC_URL, help="RPC endpoint (RPC_URL).")
@click.option("--token-symbol", default=lambda: settings.RPC_TOKEN_SYMBOL, help="Native token symbol, e.g. $ETH (RPC_TOKEN_SYMBOL).")
@click.option("--token-decimals", default=lambda: settings.RPC_TOKEN_DECIMALS, help="Native token decimals (RPC_TOKEN_DECIMALS).")
@click.option("--block-explorer-url", default=lambda: settings.RPC_BLOCKEXPLORER_URL, help="Explorer base URL (RPC_BLOCKEXPLORER_URL).")
@click.option("--private-key", default=lambda: settings.WALLET_PRIVATE_KEY, help="Signing key (WALLET_PRIVATE_KEY).")
@click.pass_context
def set_chain(
    ctx: click.Context,
    chain_id: str,
    chain_name: str,
    rpc_url: str,
    token_symbol: str,
    token_decimals: str,
    block_explorer_url: str,
    private_key: str,
) -> None:
    """Validate the chain parameters and store them."""

    params = ChainParams(
        chain_id=str(chain_id),
        chain_name=chain_name,
        rpc_url=rpc_url,
        token_symbol=token_symbol,
        token_decimals=str(token_decimals),
        block_explorer_url=block_explorer_url,
        private_key=private_key,
    )

    chain_config = _run(ctx, _service(ctx).provision_chain(params))

    click.echo(f"chainId: {chain_config.chain_id}")
    click.echo(f"chainName: {chain_config.chain_name}")
    click.echo(f"rpcUrl: {chain_config.rpc_url}")
    click.echo(f"token: {chain_config.native_token_symbol}")
    click.echo(f"decimals: {chain_config.native_token_decimals}")
    click.echo(f"blockExplorerUrl: {chain_config.block_explorer_url}")
    click.echo(f"walletAddress: {derive_address(chain_config.private_key)}")
    click.echo("Done!")


@cli.command("add-token")
@click.argument("token")
@click.argument("address")
@click.argument("decimals")
@click.pass_context
def add_token(ctx: click.Context, token: str, address: str, decimals: str) -> None:
    """Register TOKEN at contract ADDRESS with DECIMALS."""

    tokens = _run(ctx, _service(ctx).register_token(token, address, decimals))

    for symbol, entry in sorted(tokens.items()):
        click.echo(f"{symbol}: {entry.address} ({entry.decimals})")
    click.echo("Done!")


if __name__ == "__main__":
    cli()
