"""Tests for listing and file admission rules."""

import pytest

from academy_gallery.domain.errors import Forbidden, Unauthenticated
from academy_gallery.services.access import AccessGate
from academy_gallery.services.sessions import SessionClaims
from academy_gallery.services.signatures import SignatureService

SIGNATURES = SignatureService("gate-secret")


def _session(gallery_id: int) -> SessionClaims:
    return SessionClaims(gallery_id=gallery_id, expires_at=2_000_000_000)


def test_listing_requires_session() -> None:
    gate = AccessGate(SIGNATURES)

    with pytest.raises(Unauthenticated):
        gate.authorize_listing(None, 7)


def test_listing_with_unreadable_cookie_is_forbidden() -> None:
    gate = AccessGate(SIGNATURES)

    with pytest.raises(Forbidden):
        gate.authorize_listing(None, 7, has_session_cookie=True)


def test_listing_for_other_gallery_is_forbidden() -> None:
    gate = AccessGate(SIGNATURES)

    with pytest.raises(Forbidden):
        gate.authorize_listing(_session(8), 7)


def test_listing_for_own_gallery_is_admitted() -> None:
    AccessGate(SIGNATURES).authorize_listing(_session(7), 7)


def test_file_admitted_by_session_without_signature() -> None:
    AccessGate(SIGNATURES).authorize_file(_session(7), 7, "a.jpg", None)


def test_file_admitted_by_signature_without_session() -> None:
    signature = SIGNATURES.sign(7, "a.jpg")

    AccessGate(SIGNATURES).authorize_file(None, 7, "a.jpg", signature)


def test_file_admitted_by_signature_with_other_gallery_session() -> None:
    signature = SIGNATURES.sign(7, "a.jpg")

    AccessGate(SIGNATURES).authorize_file(_session(3), 7, "a.jpg", signature)


@pytest.mark.parametrize(
    ("session", "signature"),
    [
        (None, None),
        (None, SIGNATURES.sign(7, "b.jpg")),
        (None, SIGNATURES.sign(8, "a.jpg")),
        (_session(8), "bogus"),
    ],
)
def test_file_rejected_without_session_or_valid_signature(
    session: SessionClaims | None, signature: str | None
) -> None:
    with pytest.raises(Forbidden):
        AccessGate(SIGNATURES).authorize_file(session, 7, "a.jpg", signature)
