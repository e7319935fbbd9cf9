from abc import ABC
from typing import Any
from web3 import AsyncWeb3
from web3.providers import AsyncHTTPProvider
from chains.dto import ChainConfig


class BaseWeb3Client(ABC):
    ERC20_ABI = [
        {
            "inputs": [],
            "name": "decimals",
            "outputs": [{"name": "", "type": "uint8"}],
            "stateMutability": "view",
            "type": "function",
        },
        {
            "inputs": [{"name": "owner", "type": "address"}],
            "name": "balanceOf",
            "outputs": [{"name": "", "type": "uint256"}],
            "stateMutability": "view",
            "type": "function",
        },
        {
            "inputs": [
                {"name": "to", "type": "address"},
                {"name": "amount", "type": "uint256"},
            ],
            "name": "transfer",
            "outputs": [{"name": "", "type": "bool"}],
            "stateMutability": "nonpayable",
            "type": "function",
        },
    ]

    def __init__(self, chain_config: ChainConfig, w3: AsyncWeb3 | None = None):
        self.chain_config = chain_config
        self._w3 = w3
        self._owns_provider = w3 is None

    async def __aenter__(self):
        if self._w3 is None:
            self._w3 = AsyncWeb3(AsyncHTTPProvider(self.chain_config.rpc_url))
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._w3 is not None and self._owns_provider:
            await self._w3.provider.disconnect()

            self._w3 = None

    @property
    def w3(self) -> AsyncWeb3:
        return self._w3

    def _get_erc20_contract(self, token_address: str):
        return self.w3.eth.contract(
            AsyncWeb3.to_checksum_address(token_address), abi=self.ERC20_ABI
        )

    async def get_chain_id(self) -> int:
        return await self.w3.eth.chain_id

    async def get_gas_fees(self) -> dict[str, Any]:
        latest_block = await self.w3.eth.get_block("latest")
        base_fee = latest_block.get("baseFeePerGas")

        if base_fee is None:
            return {"gasPrice": await self.w3.eth.gas_price}

        max_priority_fee = await self.w3.eth.max_priority_fee

        max_fee = base_fee * 2 + max_priority_fee

        return {
            "maxFeePerGas": max_fee,
            "maxPriorityFeePerGas": max_priority_fee,
        }
