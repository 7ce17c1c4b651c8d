import logging

from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

logger = logging.getLogger(__name__)


class SignatureVerifier:
    """Checks the Ed25519 signature Discord puts on every interaction request."""

    def __init__(self, public_key: str) -> None:
        # raises ValueError at startup on a malformed key
        self._verify_key = VerifyKey(bytes.fromhex(public_key)) if public_key else None
        if self._verify_key is None:
            logger.warning("DISCORD_PUBLIC_KEY is not set; every interaction will be rejected")

    def verify(self, signature: str | None, timestamp: str | None, body: bytes) -> bool:
        """
        Args:
            signature: Hex value of the X-Signature-Ed25519 header
            timestamp: Value of the X-Signature-Timestamp header
            body: Raw request body

        Returns:
            Whether Discord signed `timestamp + body`
        """
        if self._verify_key is None or not signature or not timestamp:
            return False

        try:
            self._verify_key.verify(timestamp.encode() + body, bytes.fromhex(signature))
        except (BadSignatureError, ValueError):
            return False
        return True
