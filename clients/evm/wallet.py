import logging
from eth_account import Account
from eth_typing import HexStr
from web3 import AsyncWeb3
from chains.dto import ChainConfig
from clients.evm.base import BaseWeb3Client

module_logger = logging.getLogger(__name__)


class WalletClient(BaseWeb3Client):
    def __init__(
        self,
        chain_config: ChainConfig,
        w3: AsyncWeb3 | None = None,
        private_key: str | None = None,
    ):
        super().__init__(chain_config, w3)
        self._account = Account.from_key(private_key or chain_config.private_key)

    @property
    def address(self) -> str:
        return self._account.address

    async def _base_tx_params(self) -> dict:
        nonce = await self.w3.eth.get_transaction_count(self.address, "pending")
        fees = await self.get_gas_fees()

        return {
            "from": self.address,
            "nonce": nonce,
            "chainId": self.chain_config.chain_id,
            **fees,
        }

    async def build_native_transfer(self, recipient: str, value: int) -> dict:
        tx_params = await self._base_tx_params()
        tx_params["to"] = AsyncWeb3.to_checksum_address(recipient)
        tx_params["value"] = value
        tx_params["gas"] = await self.w3.eth.estimate_gas(tx_params)

        return tx_params

    async def build_token_transfer(
        self, token_address: str, recipient: str, amount: int
    ) -> dict:
        contract = self._get_erc20_contract(token_address)
        tx_params = await self._base_tx_params()

        return await contract.functions.transfer(
            AsyncWeb3.to_checksum_address(recipient), amount
        ).build_transaction(tx_params)

    def sign_transaction(self, tx_params: dict) -> bytes:
        signed_tx = self.w3.eth.account.sign_transaction(
            tx_params,
            self._account.key
        )

        return signed_tx.raw_transaction

    async def send_transaction(self, signed_tx: bytes) -> HexStr:
        tx_hash = await self.w3.eth.send_raw_transaction(signed_tx)
        return self.w3.to_hex(tx_hash)

    async def transfer_native(self, recipient: str, value: int) -> HexStr:
        tx_params = await self.build_native_transfer(recipient, value)
        tx_hash = await self.send_transaction(self.sign_transaction(tx_params))

        module_logger.info(f"Native transfer {value} -> {recipient} sent: {tx_hash}")
        return tx_hash

    async def transfer_token(
        self, token_address: str, recipient: str, amount: int
    ) -> HexStr:
        tx_params = await self.build_token_transfer(token_address, recipient, amount)
        tx_hash = await self.send_transaction(self.sign_transaction(tx_params))

        module_logger.info(
            f"Token {token_address} transfer {amount} -> {recipient} sent: {tx_hash}"
        )
        return tx_hash

    async def wait_for_transaction(
        self,
        tx_hash: HexStr,
        timeout: float = 120,
        poll_latency: float = 0.5
    ) -> dict:
        receipt = await self.w3.eth.wait_for_transaction_receipt(
            tx_hash,
            timeout=timeout,
            poll_latency=poll_latency
        )
        return dict(receipt)
