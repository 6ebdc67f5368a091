"""Visitor session cookies carrying the connected gallery id."""

import binascii
import hashlib
import hmac
import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from academy_gallery.services.signatures import urlsafe_b64decode, urlsafe_b64encode

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "session"


class SessionClaims(BaseModel):
    """Claims stored in the visitor session cookie."""

    model_config = ConfigDict(populate_by_name=True)

    gallery_id: int = Field(alias="GalleryId")
    expires_at: int = Field(alias="exp")


@dataclass(frozen=True)
class SessionCodec:
    """Encodes and verifies signed session tokens."""

    secret: str
    max_age_seconds: int

    def encode(self, gallery_id: int, now: datetime | None = None) -> str:
        """Return a signed token granting access to one gallery."""
        issued_at = now or datetime.now(tz=UTC)
        expires_at = issued_at + timedelta(seconds=self.max_age_seconds)
        claims = SessionClaims(gallery_id=gallery_id, expires_at=int(expires_at.timestamp()))
        body = urlsafe_b64encode(
            json.dumps(claims.model_dump(by_alias=True), separators=(",", ":")).encode()
        )
        return f"{body}.{self._sign(body)}"

    def decode(self, token: str | None, now: datetime | None = None) -> SessionClaims | None:
        """Return the claims of a valid, unexpired token, otherwise None."""
        if not token or token.count(".") != 1:
            return None
        body, signature = token.split(".")
        if not hmac.compare_digest(
            signature.encode("ascii", "replace"), self._sign(body).encode("ascii")
        ):
            return None
        try:
            claims = SessionClaims.model_validate_json(urlsafe_b64decode(body))
        except (ValidationError, binascii.Error, ValueError):
            logger.warning("Rejected malformed session payload")
            return None
        current = now or datetime.now(tz=UTC)
        if claims.expires_at <= int(current.timestamp()):
            return None
        return claims

    def _sign(self, body: str) -> str:
        digest = hmac.new(self.secret.encode(), body.encode(), hashlib.sha256).digest()
        return urlsafe_b64encode(digest)
