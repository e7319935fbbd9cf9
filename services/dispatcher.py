import asyncio
import json
import logging
from decimal import Decimal
from typing import Callable

from web3.exceptions import TimeExhausted

from chains.dto import ChainConfig
from chains.validation import (
    is_positive_number,
    is_valid_address,
    is_valid_decimals,
    is_valid_token,
)
from clients.evm.wallet import WalletClient
from db.repositories.chain import ChainRepository
from db.repositories.token import TokenRepository
from db.store import KeyValueStore
from enums.dispatch import ErrorKind
from services.dto import DispatchResult, TransferPlan, TransferRequest
from services.errors import (
    AuthenticationError,
    ConfigurationError,
    DispatchError,
    SubmissionError,
    TokenError,
    ValidationError,
)
from services.signature import SignatureVerifier
from utils.utils import format_amount, to_base_units

module_logger = logging.getLogger(__name__)


class TransferDispatcher:
    """Turns one signed webhook call into one confirmed transfer.

    Every outcome is returned as a ``DispatchResult``; nothing raised inside the
    pipeline escapes ``dispatch``. Mapping results onto HTTP is left to the
    transport layer.
    """

    def __init__(
        self,
        store: KeyValueStore,
        verifier: SignatureVerifier,
        client_factory: Callable[[ChainConfig], WalletClient] = WalletClient,
        receipt_timeout: float = 120,
        poll_latency: float = 0.5,
    ):
        self.chain_repo = ChainRepository(store)
        self.token_repo = TokenRepository(store)
        self.verifier = verifier
        self.client_factory = client_factory
        self.receipt_timeout = receipt_timeout
        self.poll_latency = poll_latency
        self._account_locks: dict[str, asyncio.Lock] = {}

    async def dispatch(
        self, body: str | bytes, signature: str | None, url: str | None = None
    ) -> DispatchResult:
        try:
            tx_hash, tx_url = await self._process(body, signature, url)
        except DispatchError as e:
            module_logger.warning(f"Dispatch rejected ({e.kind.label}): {e.message}")
            return DispatchResult.failure(e.kind, e.message)
        except Exception as e:
            module_logger.exception(f"Dispatch failed: {e}")
            return DispatchResult.failure(ErrorKind.SUBMISSION, str(e) or None)

        module_logger.info(f"Transaction Hash: {tx_url}")
        return DispatchResult.success(tx_url, tx_hash)

    async def _process(
        self, body: str | bytes, signature: str | None, url: str | None
    ) -> tuple[str, str]:
        if isinstance(body, bytes):
            body = self._decode(body)

        self.verifier.verify(signature, body, url)

        request = self._parse(body)
        self._validate(request)

        chain_config = await self._resolve_chain()
        plan = await self._resolve_transfer(chain_config, request)

        tx_hash = await self._submit(chain_config, plan)
        return tx_hash, chain_config.tx_url(tx_hash)

    @staticmethod
    def _decode(raw: bytes) -> str:
        # signatures are issued over UTF-8 text, other bytes cannot verify
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise AuthenticationError() from e

    @staticmethod
    def _parse(body: str) -> TransferRequest:
        if not body:
            return TransferRequest()

        try:
            payload = json.loads(body, parse_float=Decimal)
        except ValueError as e:
            raise ValidationError() from e

        if not isinstance(payload, dict):
            raise ValidationError()

        return TransferRequest.from_payload(payload)

    @staticmethod
    def _validate(request: TransferRequest) -> None:
        if not (
            is_valid_address(request.address)
            and is_valid_token(request.token)
            and is_positive_number(request.amount_text)
        ):
            raise ValidationError()

    async def _resolve_chain(self) -> ChainConfig:
        chain_config = await self.chain_repo.get_config()
        if chain_config is None:
            raise ConfigurationError()
        return chain_config

    async def _resolve_transfer(
        self, chain_config: ChainConfig, request: TransferRequest
    ) -> TransferPlan:
        if chain_config.is_native(request.token):
            decimals = chain_config.native_token_decimals
            token_address = None
        else:
            token = await self.token_repo.get_by_symbol(request.token)

            if (
                token is None
                or not token.is_complete
                or not is_valid_address(token.address)
                or not is_valid_decimals(token.decimals)
            ):
                raise TokenError()

            decimals = int(token.decimals)
            token_address = token.address

        value = to_base_units(request.amount_text, decimals)
        if value <= 0:
            raise ValidationError()

        module_logger.info(
            f"Dispatching {format_amount(value, decimals)} {request.token} "
            f"to {request.address} on {chain_config.chain_name}"
        )

        return TransferPlan(
            recipient=request.address,
            value=value,
            is_native=token_address is None,
            token_address=token_address,
        )

    def _account_lock(self, address: str) -> asyncio.Lock:
        return self._account_locks.setdefault(address.lower(), asyncio.Lock())

    async def _submit(self, chain_config: ChainConfig, plan: TransferPlan) -> str:
        async with self.client_factory(chain_config) as client:
            chain_id = await client.get_chain_id()
            if chain_id != chain_config.chain_id:
                raise ConfigurationError("Invalid RPC settings.")

            # nonce is read from the pending pool, one broadcast per account at a time
            async with self._account_lock(client.address):
                if plan.is_native:
                    tx_hash = await client.transfer_native(plan.recipient, plan.value)
                else:
                    tx_hash = await client.transfer_token(
                        plan.token_address, plan.recipient, plan.value
                    )

            try:
                receipt = await client.wait_for_transaction(
                    tx_hash,
                    timeout=self.receipt_timeout,
                    poll_latency=self.poll_latency,
                )
            except TimeExhausted as e:
                raise SubmissionError(
                    f"Transaction {tx_hash} was not confirmed in time."
                ) from e

        if receipt.get("status") == 0:
            raise SubmissionError(f"Transaction {tx_hash} reverted.")

        return tx_hash
