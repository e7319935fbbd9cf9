from dataclasses import dataclass
from typing import Any


@dataclass
class TokenEntry:
    address: str
    decimals: str

    @property
    def is_complete(self) -> bool:
        return bool(self.address) and bool(self.decimals)

    @classmethod
    def from_record(cls, record: Any) -> "TokenEntry":
        if not isinstance(record, dict):
            return cls(address="", decimals="")

        address = record.get("address") or ""
        decimals = record.get("decimals")

        return cls(
            address=str(address),
            decimals="" if decimals is None or decimals == "" else str(decimals),
        )

    def to_record(self) -> dict[str, str]:
        return {"address": self.address, "decimals": self.decimals}


@dataclass
class ChainConfig:
    chain_id: int
    chain_name: str
    rpc_url: str
    block_explorer_url: str
    native_token_symbol: str
    native_token_decimals: int
    private_key: str

    RECORD_FIELDS = (
        "chainId",
        "chainName",
        "rpcUrl",
        "token",
        "decimals",
        "blockExplorerUrl",
        "privateKey",
    )

    @classmethod
    def from_record(cls, record: Any) -> "ChainConfig | None":
        if not isinstance(record, dict) or len(record) != len(cls.RECORD_FIELDS):
            return None

        if not all(record.get(field) for field in cls.RECORD_FIELDS):
            return None

        try:
            return cls(
                chain_id=int(record["chainId"]),
                chain_name=str(record["chainName"]),
                rpc_url=str(record["rpcUrl"]),
                block_explorer_url=str(record["blockExplorerUrl"]),
                native_token_symbol=str(record["token"]),
                native_token_decimals=int(record["decimals"]),
                private_key=str(record["privateKey"]),
            )
        except (TypeError, ValueError):
            return None

    def to_record(self) -> dict[str, Any]:
        return {
            "chainId": self.chain_id,
            "chainName": self.chain_name,
            "rpcUrl": self.rpc_url,
            "token": self.native_token_symbol,
            "decimals": self.native_token_decimals,
            "blockExplorerUrl": self.block_explorer_url,
            "privateKey": self.private_key,
        }

    def is_native(self, symbol: str) -> bool:
        return self.native_token_symbol.lower() == symbol.lower()

    def tx_url(self, tx_hash: str) -> str:
        return f"{self.block_explorer_url.rstrip('/')}/tx/{tx_hash}"

    def __repr__(self) -> str:
        return (
            f"<ChainConfig(chain_id={self.chain_id}, chain_name={self.chain_name}, "
            f"token={self.native_token_symbol})>"
        )
