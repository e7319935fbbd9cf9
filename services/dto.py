from dataclasses import dataclass
from typing import Any

from enums.dispatch import ErrorKind


@dataclass
class TransferRequest:
    address: Any = None
    token: Any = None
    amount: Any = None

    @classmethod
    def from_payload(cls, payload: dict) -> "TransferRequest":
        return cls(
            address=payload.get("address"),
            token=payload.get("token"),
            amount=payload.get("amount"),
        )

    @property
    def amount_text(self) -> str:
        return f"{self.amount}"


@dataclass
class TransferPlan:
    recipient: str
    value: int
    is_native: bool
    token_address: str | None = None


@dataclass
class DispatchResult:
    ok: bool
    body: str
    kind: ErrorKind | None = None
    tx_hash: str | None = None

    @classmethod
    def success(cls, url: str, tx_hash: str | None = None) -> "DispatchResult":
        return cls(ok=True, body=url, tx_hash=tx_hash)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str | None = None) -> "DispatchResult":
        return cls(ok=False, body=message or kind.message, kind=kind)
