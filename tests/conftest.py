"""Shared fakes for the dispatcher test suite."""

import copy

import pytest

from services.errors import AuthenticationError

SIGNER = "0x" + "c" * 40
TX_HASH = "0x" + "d" * 64
PRIVATE_KEY = "0x" + "1" * 64

CHAIN_RECORD = {
    "chainId": 1,
    "chainName": "ethereum",
    "rpcUrl": "https://eth.example.org",
    "token": "$ETH",
    "decimals": 18,
    "blockExplorerUrl": "https://etherscan.io",
    "privateKey": PRIVATE_KEY,
}


class MemoryStore:
    def __init__(self, data: dict | None = None):
        self.data = copy.deepcopy(data or {})
        self.calls: list[tuple[str, str]] = []
        self.closed = False

    async def get(self, key):
        self.calls.append(("get", key))
        return copy.deepcopy(self.data.get(key))

    async def set(self, key, value):
        self.calls.append(("set", key))
        self.data[key] = copy.deepcopy(value)

    async def close(self):
        self.closed = True


class FakeVerifier:
    def __init__(self, valid: bool = True):
        self.valid = valid
        self.calls = []

    def verify(self, signature, body, url=None):
        self.calls.append((signature, body))
        if not self.valid or not signature:
            raise AuthenticationError()


class FakeWalletClient:
    address = SIGNER

    def __init__(self, chain, chain_config):
        self.chain = chain
        self.chain_config = chain_config

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False

    async def get_chain_id(self):
        return self.chain.chain_id

    async def transfer_native(self, recipient, value):
        if self.chain.send_error:
            raise self.chain.send_error
        self.chain.native_transfers.append((recipient, value))
        return TX_HASH

    async def transfer_token(self, token_address, recipient, amount):
        if self.chain.send_error:
            raise self.chain.send_error
        self.chain.token_transfers.append((token_address, recipient, amount))
        return TX_HASH

    async def wait_for_transaction(self, tx_hash, timeout=120, poll_latency=0.5):
        self.chain.waits.append((tx_hash, timeout))
        if self.chain.wait_error:
            raise self.chain.wait_error
        return {"transactionHash": tx_hash, "status": self.chain.receipt_status}


class FakeChain:
    """Client factory that records everything the dispatcher submits."""

    def __init__(self, chain_id=1, receipt_status=1, send_error=None, wait_error=None):
        self.chain_id = chain_id
        self.receipt_status = receipt_status
        self.send_error = send_error
        self.wait_error = wait_error
        self.opened = []
        self.native_transfers = []
        self.token_transfers = []
        self.waits = []

    def __call__(self, chain_config):
        self.opened.append(chain_config)
        return FakeWalletClient(self, chain_config)

    @property
    def submitted(self) -> bool:
        return bool(self.native_transfers or self.token_transfers)


@pytest.fixture()
def chain_record() -> dict:
    return dict(CHAIN_RECORD)


@pytest.fixture()
def store(chain_record) -> MemoryStore:
    return MemoryStore({"rpc": chain_record})


@pytest.fixture()
def empty_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def verifier() -> FakeVerifier:
    return FakeVerifier()


@pytest.fixture()
def fake_chain() -> FakeChain:
    return FakeChain()
