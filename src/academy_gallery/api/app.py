"""FastAPI application factory."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from academy_gallery.adapters.eventbrite_client import EventbriteError
from academy_gallery.api.admin import router as admin_router
from academy_gallery.api.images import router as images_router
from academy_gallery.api.models import ConnectRequest
from academy_gallery.api.params import parse_positive_int
from academy_gallery.app_logging import configure_logging
from academy_gallery.containers import AppContainer
from academy_gallery.domain.errors import GalleryError, InvalidInput
from academy_gallery.services.galleries import summarize
from academy_gallery.services.sessions import SESSION_COOKIE_NAME


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(GalleryError)
    async def gallery_error_handler(_: Request, exc: GalleryError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Request failed: %s", exc.message)
        return JSONResponse(exc.to_payload(), status_code=exc.status_code)

    app.include_router(images_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/gallery")
    async def galleries(request: Request) -> dict[str, object]:
        """Return one gallery (by id or title) or the list of galleries."""
        state_container: AppContainer = request.app.state.container
        gallery_param = request.query_params.get("gallery")
        if gallery_param:
            gallery = await asyncio.to_thread(
                state_container.gallery_service.find_gallery, gallery_param
            )
            return {
                "message": "Gallery fetched successfully",
                "data": summarize(gallery),
            }
        summaries = await asyncio.to_thread(state_container.gallery_service.list_galleries)
        return {"message": "Galleries fetched successfully", "data": summaries}

    @app.post("/api/connect")
    async def connect(payload: ConnectRequest, request: Request) -> JSONResponse:
        """Check a gallery password and open a visitor session."""
        state_container: AppContainer = request.app.state.container
        if payload.id in (None, "") or not payload.password:
            raise InvalidInput("id and password are required")
        gallery_id = parse_positive_int(str(payload.id), "id")
        gallery = await asyncio.to_thread(
            state_container.gallery_service.connect, gallery_id, payload.password
        )
        response = JSONResponse(
            {"message": "Connected to the gallery", "data": summarize(gallery)}
        )
        settings = state_container.settings
        response.set_cookie(
            key=SESSION_COOKIE_NAME,
            value=state_container.session_codec.encode(gallery.id),
            max_age=settings.session_max_age_seconds,
            httponly=True,
            samesite="lax",
            secure=settings.environment == "production",
            path="/",
        )
        return response

    @app.get("/api/events")
    async def events(request: Request, test: str | None = None) -> JSONResponse:
        """Return live academy events with their remaining tickets."""
        state_container: AppContainer = request.app.state.container
        if state_container.event_service is None:
            return JSONResponse(
                {"message": "Configuration Error: Missing API Token or Organization ID"},
                status_code=500,
            )
        try:
            items = await state_container.event_service.list_events(
                test_mode=test == "true"
            )
        except EventbriteError as exc:
            logger.warning("Eventbrite API error: %s", exc.status_code)
            return JSONResponse(
                {
                    "message": "Failed to fetch events from Eventbrite",
                    "details": exc.details,
                },
                status_code=exc.status_code,
            )
        except Exception:
            logger.exception("Failed to fetch Eventbrite events")
            return JSONResponse({"message": "Internal Server Error"}, status_code=500)
        return JSONResponse({"events": [item.to_payload() for item in items]})

    @app.get("/api/messages/{locale}")
    async def messages(locale: str, request: Request) -> dict[str, object]:
        """Return the message tree of a supported locale."""
        state_container: AppContainer = request.app.state.container
        return state_container.message_catalog.messages_for(locale)

    return app
