import logging
from typing import Protocol

from qstash import Receiver

from services.errors import AuthenticationError

module_logger = logging.getLogger(__name__)


class SignatureVerifier(Protocol):
    def verify(self, signature: str | None, body: str, url: str | None = None) -> None: ...


class QStashVerifier:
    """Accepts a request signed with either the current or the next signing key."""

    def __init__(self, current_signing_key: str, next_signing_key: str):
        self._receiver = Receiver(
            current_signing_key=current_signing_key,
            next_signing_key=next_signing_key,
        )

    def verify(self, signature: str | None, body: str, url: str | None = None) -> None:
        if not signature:
            raise AuthenticationError()

        try:
            self._receiver.verify(signature=signature, body=body, url=url)
        except Exception as e:
            module_logger.warning(f"Signature verification failed: {e}")
            raise AuthenticationError() from e
