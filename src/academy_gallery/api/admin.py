"""Admin API endpoints with simple token auth."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from academy_gallery.api.params import parse_positive_int
from academy_gallery.services.paths import resolve_folder

if TYPE_CHECKING:
    from academy_gallery.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/gallery-images", dependencies=[Depends(require_admin)])
async def gallery_images(request: Request) -> dict[str, object]:
    """Return every image of a gallery with its size, unpaginated."""
    container: AppContainer = request.app.state.container
    gallery_id = parse_positive_int(request.query_params.get("galleryId"), "galleryId")
    gallery = await asyncio.to_thread(container.gallery_service.get_gallery, gallery_id)
    if not (gallery.photos_path or "").strip():
        return {"data": []}
    folder = resolve_folder(gallery.photos_path, container.galleries_root)
    images = await asyncio.to_thread(
        container.image_enumerator.list_all, gallery.id, folder
    )
    return {
        "message": "Images retrieved.",
        "data": [image.to_admin_payload() for image in images],
    }


@router.get("/public-images", dependencies=[Depends(require_admin)])
async def public_images(request: Request) -> dict[str, object]:
    """Browse images and directories below the public assets root."""
    container: AppContainer = request.app.state.container
    browser = container.public_image_browser
    explicit = "dir" in request.query_params
    relative = browser.resolve_relative_directory(
        request.query_params.get("dir"), explicit
    )
    browser.absolute_directory(relative)
    directories = await asyncio.to_thread(browser.collect_directories)
    images = await asyncio.to_thread(browser.list_images, relative)
    return {
        "message": "Public images retrieved.",
        "data": [image.to_payload() for image in images],
        "directories": directories,
        "currentDir": relative.replace("\\", "/"),
    }
