"""HMAC signatures that authorize access to a single gallery image."""

import base64
import hashlib
import hmac
from dataclasses import dataclass


def urlsafe_b64encode(raw: bytes) -> str:
    """Encode bytes as URL-safe base64 without padding."""
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def urlsafe_b64decode(value: str) -> bytes:
    """Decode unpadded URL-safe base64."""
    padding = "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(value + padding)


@dataclass(frozen=True)
class SignatureService:
    """Signs and verifies (gallery id, file name) pairs."""

    secret: str

    def __post_init__(self) -> None:
        if not self.secret:
            raise ValueError("A signing secret is required")

    def sign(self, gallery_id: int, file_name: str) -> str:
        """Return the URL-safe signature for a gallery file."""
        message = f"{gallery_id}:{file_name}".encode()
        digest = hmac.new(self.secret.encode(), message, hashlib.sha256).digest()
        return urlsafe_b64encode(digest)

    def verify(self, gallery_id: int, file_name: str, signature: str | None) -> bool:
        """Check a signature in constant time; malformed input is never valid."""
        if not signature or not file_name:
            return False
        try:
            provided = signature.encode("ascii")
        except UnicodeEncodeError:
            return False
        expected = self.sign(gallery_id, file_name).encode("ascii")
        return hmac.compare_digest(provided, expected)
