"""Admission decisions for gallery listings and gallery files."""

from dataclasses import dataclass

from academy_gallery.domain.errors import Forbidden, Unauthenticated
from academy_gallery.services.sessions import SessionClaims
from academy_gallery.services.signatures import SignatureService


@dataclass(frozen=True)
class AccessGate:
    """Combines session and signed-URL authorization.

    Listings need a live session for the gallery. Single files are also
    admitted through a valid signature so ``<img>`` tags can load them
    without the cookie.
    """

    signatures: SignatureService

    def authorize_listing(
        self,
        session: SessionClaims | None,
        gallery_id: int,
        *,
        has_session_cookie: bool | None = None,
    ) -> None:
        """Raise unless the session is bound to the requested gallery."""
        if has_session_cookie is None:
            has_session_cookie = session is not None
        if not has_session_cookie:
            raise Unauthenticated()
        if session is None or session.gallery_id != gallery_id:
            raise Forbidden()

    def authorize_file(
        self,
        session: SessionClaims | None,
        gallery_id: int,
        file_name: str,
        signature: str | None,
    ) -> None:
        """Raise unless the session or the signature admits this file."""
        if session is not None and session.gallery_id == gallery_id:
            return
        if self.signatures.verify(gallery_id, file_name, signature):
            return
        raise Forbidden()
