"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from academy_gallery.adapters.eventbrite_client import HttpxEventbriteClient
from academy_gallery.adapters.supabase_gallery_repository import (
    SupabaseGalleryRepository,
)
from academy_gallery.config import Settings
from academy_gallery.services.access import AccessGate
from academy_gallery.services.decoration import DecorationEngine
from academy_gallery.services.events import EventService
from academy_gallery.services.galleries import GalleryService
from academy_gallery.services.images import ImageEnumerator, ImageServer
from academy_gallery.services.messages import MessageCatalog
from academy_gallery.services.public_images import PublicImageBrowser
from academy_gallery.services.sessions import SessionCodec
from academy_gallery.services.signatures import SignatureService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    gallery_service: GalleryService
    signature_service: SignatureService
    session_codec: SessionCodec
    access_gate: AccessGate
    image_enumerator: ImageEnumerator
    image_server: ImageServer
    decoration_engine: DecorationEngine
    public_image_browser: PublicImageBrowser
    message_catalog: MessageCatalog
    event_service: EventService | None
    close_resources: Callable[[], Awaitable[None]]

    @property
    def galleries_root(self) -> Path:
        return self.settings.galleries_root


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    Missing secrets, an unreadable frame template or missing locale
    messages fail here, before any request is served.
    """
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    gallery_service = GalleryService(SupabaseGalleryRepository(supabase_client))
    signature_service = SignatureService(resolved_settings.signing_secret)
    session_codec = SessionCodec(
        secret=resolved_settings.cookie_secret,
        max_age_seconds=resolved_settings.session_max_age_seconds,
    )
    decoration_engine = DecorationEngine.load(
        resolved_settings.frame_template_path, resolved_settings.frame_borders
    )
    message_catalog = MessageCatalog.load(Path(resolved_settings.messages_dir))

    eventbrite_client: HttpxEventbriteClient | None = None
    event_service: EventService | None = None
    if (
        resolved_settings.event_brite_token
        and resolved_settings.event_brite_organization_id
    ):
        eventbrite_client = HttpxEventbriteClient.create(
            token=resolved_settings.event_brite_token,
            organization_id=resolved_settings.event_brite_organization_id,
            base_url=resolved_settings.eventbrite_base_url,
        )
        event_service = EventService(eventbrite_client)

    async def close_resources() -> None:
        if eventbrite_client is not None:
            await eventbrite_client.close()

    return AppContainer(
        settings=resolved_settings,
        gallery_service=gallery_service,
        signature_service=signature_service,
        session_codec=session_codec,
        access_gate=AccessGate(signature_service),
        image_enumerator=ImageEnumerator(signature_service),
        image_server=ImageServer(),
        decoration_engine=decoration_engine,
        public_image_browser=PublicImageBrowser(resolved_settings.public_root_path),
        message_catalog=message_catalog,
        event_service=event_service,
        close_resources=close_resources,
    )
