"""Tests for container wiring."""

import asyncio

import pytest

from academy_gallery.containers import build_container
from academy_gallery.domain.errors import InvalidFrame


def test_build_container_creates_services(settings) -> None:  # type: ignore[no-untyped-def]
    container = build_container(settings)
    assert container.gallery_service is not None
    assert container.galleries_root == settings.galleries_root
    assert container.event_service is None
    asyncio.run(container.close_resources())


def test_build_container_with_eventbrite(settings) -> None:  # type: ignore[no-untyped-def]
    configured = settings.model_copy(
        update={"event_brite_token": "token", "event_brite_organization_id": "org"}
    )

    container = build_container(configured)

    assert container.event_service is not None
    asyncio.run(container.close_resources())


def test_build_container_fails_on_missing_frame(settings, tmp_path) -> None:  # type: ignore[no-untyped-def]
    broken = settings.model_copy(update={"frame_path": str(tmp_path / "nope.png")})

    with pytest.raises(InvalidFrame):
        build_container(broken)
