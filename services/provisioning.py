import logging
from dataclasses import dataclass
from typing import Callable

from eth_account import Account

from chains.dto import ChainConfig, TokenEntry
from chains.validation import (
    is_positive_number,
    is_valid_address,
    is_valid_decimals,
    is_valid_name,
    is_valid_token,
    is_valid_url,
    normalize_symbol,
)
from clients.evm.wallet import WalletClient
from db.repositories.chain import ChainRepository
from db.repositories.token import TokenRepository
from db.store import KeyValueStore
from services.errors import ProvisioningError

module_logger = logging.getLogger(__name__)


@dataclass
class ChainParams:
    chain_id: str
    chain_name: str
    rpc_url: str
    token_symbol: str
    token_decimals: str
    block_explorer_url: str
    private_key: str


def derive_address(private_key: str) -> str | None:
    if not private_key:
        return None

    if not private_key.startswith("0x"):
        private_key = f"0x{private_key}"

    try:
        return Account.from_key(private_key).address
    except Exception:
        return None


class ProvisioningService:
    def __init__(
        self,
        store: KeyValueStore,
        client_factory: Callable[[ChainConfig], WalletClient] = WalletClient,
    ):
        self.chain_repo = ChainRepository(store)
        self.token_repo = TokenRepository(store)
        self.client_factory = client_factory

    async def _check_chain_id(self, chain_config: ChainConfig) -> None:
        async with self.client_factory(chain_config) as client:
            chain_id = await client.get_chain_id()

        if chain_id != chain_config.chain_id:
            module_logger.error(
                f"RPC reports chain id {chain_id}, expected {chain_config.chain_id}"
            )
            raise ProvisioningError("Invalid RPC settings.")

    async def provision_chain(self, params: ChainParams) -> ChainConfig:
        wallet_address = derive_address(params.private_key)

        if not (
            is_positive_number(params.chain_id)
            and params.chain_id.isdigit()
            and is_valid_name(params.chain_name)
            and is_valid_url(params.rpc_url)
            and is_valid_token(params.token_symbol)
            and is_valid_decimals(params.token_decimals)
            and is_valid_url(params.block_explorer_url)
            and is_valid_address(wallet_address)
        ):
            raise ProvisioningError("Invalid environment variables.")

        private_key = params.private_key
        if not private_key.startswith("0x"):
            private_key = f"0x{private_key}"

        chain_config = ChainConfig(
            chain_id=int(params.chain_id),
            chain_name=params.chain_name,
            rpc_url=params.rpc_url,
            block_explorer_url=params.block_explorer_url,
            native_token_symbol=params.token_symbol,
            native_token_decimals=int(params.token_decimals),
            private_key=private_key,
        )

        await self._check_chain_id(chain_config)
        await self.chain_repo.save(chain_config)

        stored = await self.chain_repo.get_config()
        if stored is None:
            raise ProvisioningError("RPC not configured or found.")

        module_logger.info(
            f"Chain {stored.chain_name} ({stored.chain_id}) stored, "
            f"rpc {stored.rpc_url}, explorer {stored.block_explorer_url}, "
            f"token {stored.native_token_symbol}/{stored.native_token_decimals}, "
            f"wallet {derive_address(stored.private_key)}"
        )
        return stored

    async def register_token(
        self, token: str, address: str, decimals: str
    ) -> dict[str, TokenEntry]:
        symbol = normalize_symbol(token)

        if not (
            is_valid_token(symbol)
            and is_valid_address(address)
            and is_valid_decimals(decimals)
        ):
            raise ProvisioningError("Invalid arguments.")

        chain_config = await self.chain_repo.get_config()
        if chain_config is None:
            raise ProvisioningError("RPC not configured or found.")

        await self._check_chain_id(chain_config)

        if chain_config.is_native(symbol):
            raise ProvisioningError("Cannot set the same name as the native gas token.")

        tokens = await self.token_repo.add_token(
            symbol, TokenEntry(address=address, decimals=str(decimals))
        )

        module_logger.info(f"Token {symbol} stored, registry: {sorted(tokens)}")
        return tokens
