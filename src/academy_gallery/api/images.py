"""Gallery image listing, raw file and decorated file endpoints."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from academy_gallery.api.params import gallery_id_param, page_param
from academy_gallery.domain.errors import (
    GalleryError,
    InvalidInput,
    InvalidPath,
    MissingPhotoDirectory,
    NotFound,
    UnexpectedError,
)
from academy_gallery.services.images import IMAGE_CACHE_CONTROL
from academy_gallery.services.paths import is_safe_file_name, resolve_folder
from academy_gallery.services.sessions import SESSION_COOKIE_NAME

if TYPE_CHECKING:
    from academy_gallery.containers import AppContainer
    from academy_gallery.domain.models import Gallery
    from academy_gallery.services.sessions import SessionClaims

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["images"])


def _session(request: Request) -> tuple[bool, SessionClaims | None]:
    container: AppContainer = request.app.state.container
    token = request.cookies.get(SESSION_COOKIE_NAME)
    return bool(token), container.session_codec.decode(token)


def _gallery_folder(container: AppContainer, gallery: Gallery) -> Path:
    if not (gallery.photos_path or "").strip():
        raise MissingPhotoDirectory()
    return resolve_folder(gallery.photos_path, container.galleries_root)


async def _existing_folder(container: AppContainer, gallery: Gallery) -> Path:
    folder = _gallery_folder(container, gallery)
    if not await asyncio.to_thread(folder.is_dir):
        raise NotFound("Gallery directory does not exist")
    return folder


def _file_param(request: Request) -> str:
    file_name = request.query_params.get("file")
    if not file_name:
        raise InvalidInput("file query parameter is required")
    if not is_safe_file_name(file_name):
        raise InvalidPath()
    return file_name


@router.get("/images")
async def gallery_images(request: Request) -> Response:
    """List a gallery's images, or stream one of them when file is given."""
    container: AppContainer = request.app.state.container
    gallery_id = gallery_id_param(request)
    page = page_param(request)
    has_cookie, session = _session(request)
    try:
        if request.query_params.get("file"):
            file_name = _file_param(request)
            container.access_gate.authorize_file(
                session, gallery_id, file_name, request.query_params.get("sig")
            )
            gallery = await asyncio.to_thread(
                container.gallery_service.get_gallery, gallery_id
            )
            folder = await _existing_folder(container, gallery)
            image = await asyncio.to_thread(
                container.image_server.read, folder, file_name
            )
            return Response(
                content=image.content,
                media_type=image.media_type,
                headers={"Cache-Control": IMAGE_CACHE_CONTROL},
            )

        container.access_gate.authorize_listing(
            session, gallery_id, has_session_cookie=has_cookie
        )
        gallery = await asyncio.to_thread(
            container.gallery_service.get_gallery, gallery_id
        )
        folder = _gallery_folder(container, gallery)
        result = await asyncio.to_thread(
            container.image_enumerator.list_page, gallery_id, folder, page
        )
    except GalleryError:
        raise
    except Exception as exc:
        logger.exception("Failed to serve images for gallery %s", gallery_id)
        raise UnexpectedError("Unable to fetch images") from exc

    payload = {
        "message": "Images fetched successfully",
        "data": [asset.to_payload() for asset in result.items],
        "pagination": result.pagination.to_payload(),
    }
    return JSONResponse(payload)


@router.get("/decorate")
async def decorated_image(request: Request) -> Response:
    """Return the framed and captioned PNG derivative of one gallery file."""
    container: AppContainer = request.app.state.container
    gallery_id = gallery_id_param(request)
    file_name = _file_param(request)
    _, session = _session(request)
    try:
        container.access_gate.authorize_file(
            session, gallery_id, file_name, request.query_params.get("sig")
        )
        gallery = await asyncio.to_thread(
            container.gallery_service.get_gallery, gallery_id
        )
        folder = await _existing_folder(container, gallery)
        target = await asyncio.to_thread(
            container.image_server.locate, folder, file_name
        )
        content = await asyncio.to_thread(
            container.decoration_engine.decorate, target, gallery.date
        )
    except GalleryError:
        raise
    except Exception as exc:
        logger.exception("Failed to decorate %s for gallery %s", file_name, gallery_id)
        raise UnexpectedError("Unable to decorate image") from exc
    return Response(
        content=content,
        media_type="image/png",
        headers={"Cache-Control": IMAGE_CACHE_CONTROL},
    )
