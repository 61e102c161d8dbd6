"""Sign and verify client-held game states using itsdangerous."""

import hashlib
import hmac
import json
from typing import Any

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from config import config


def state_digest(payload: dict[str, Any]) -> str:
    """Stable SHA-256 digest of a serialized state."""
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class StateSigner:
    """Sign and verify game states handed to the client."""

    def __init__(self, secret_key: str | None = None, max_age: int | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._secret_key = secret_key or config.security.secret_key
        self._max_age = max_age or config.security.state_ttl
        self._serializer = URLSafeTimedSerializer(self._secret_key, salt="game-state")

    def sign(self, payload: dict[str, Any]) -> str:
        """Create a signed token bound to ``payload``."""
        return self._serializer.dumps(state_digest(payload))

    def verify(self, payload: dict[str, Any], signature: str | None) -> bool:
        """
        Check that ``signature`` was issued for ``payload``.

        Args:
            payload: The serialized state, without its signature
            signature: Token previously returned by ``sign``

        Returns:
            True if the signature is valid, unexpired and matches the payload
        """
        if not signature:
            return False
        try:
            digest = self._serializer.loads(signature, max_age=self._max_age)
        except (BadSignature, SignatureExpired):
            return False
        return hmac.compare_digest(str(digest), state_digest(payload))


# Global signer instance
_state_signer: StateSigner | None = None


def get_state_signer() -> StateSigner:
    """Get or create the state signer."""
    global _state_signer
    if _state_signer is None:
        _state_signer = StateSigner()
    return _state_signer
