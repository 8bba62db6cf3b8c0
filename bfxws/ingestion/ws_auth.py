"""HMAC-SHA384 authentication for the Bitfinex v1 websocket account channel."""

from __future__ import annotations

import time

from cryptography.hazmat.primitives import hashes, hmac
import structlog

logger = structlog.get_logger(__name__)


class BitfinexWSAuth:
    """Builds signed ``auth`` requests from an API key/secret pair."""

    def __init__(self, api_key: str, api_secret: str) -> None:
        if not api_key or not api_secret:
            raise ValueError("API key and secret are both required for authentication")
        self._api_key = api_key
        self._api_secret = api_secret.encode()
        logger.info("bitfinex_auth_initialized")

    def _sign(self, message: str) -> str:
        """Sign a message with HMAC-SHA384 and return the hex digest."""
        mac = hmac.HMAC(self._api_secret, hashes.SHA384())
        mac.update(message.encode())
        return mac.finalize().hex()

    def create_auth_request(self, nonce_ms: int | None = None) -> dict[str, str]:
        """Generate the ``auth`` request body.

        The signed payload is "AUTH" + nonce, the nonce being the current
        time in milliseconds.
        """
        if nonce_ms is None:
            nonce_ms = int(time.time() * 1000)
        payload = f"AUTH{nonce_ms}"

        return {
            "event": "auth",
            "apiKey": self._api_key,
            "authSig": self._sign(payload),
            "authPayload": payload,
        }
