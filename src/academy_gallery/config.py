"""Application configuration."""

import os
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from academy_gallery.domain.models import DEFAULT_FRAME_BORDERS, FrameBorders

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    image_signature_secret: str | None = None
    session_secret: str | None = None
    session_max_age_seconds: int = 60 * 60 * 24 * 7
    galleries_folder: str | None = None
    public_root: str = "public"
    frame_path: str | None = None
    frame_borders: FrameBorders = DEFAULT_FRAME_BORDERS
    messages_dir: str = "messages"
    supabase_url: str
    supabase_service_key: str
    admin_token: str
    event_brite_token: str | None = None
    event_brite_organization_id: str | None = None
    eventbrite_base_url: str = "https://www.eventbriteapi.com/v3"
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_signing_secret(self) -> "Settings":
        if not self.image_signature_secret and not self.session_secret:
            raise ValueError(
                "IMAGE_SIGNATURE_SECRET or SESSION_SECRET must be defined"
            )
        return self

    @property
    def signing_secret(self) -> str:
        """Secret used to sign image URLs."""
        return self.image_signature_secret or self.session_secret or ""

    @property
    def cookie_secret(self) -> str:
        """Secret used to sign visitor session cookies."""
        return self.session_secret or self.image_signature_secret or ""

    @property
    def public_root_path(self) -> Path:
        """Absolute, normalized public assets directory."""
        return _absolute(self.public_root)

    @property
    def galleries_root(self) -> Path:
        """Root directory that every gallery folder must live under."""
        if self.galleries_folder:
            return _absolute(self.galleries_folder)
        return self.public_root_path

    @property
    def frame_template_path(self) -> Path:
        """Location of the 9-slice frame template image."""
        if self.frame_path:
            return _absolute(self.frame_path)
        return self.public_root_path / "frames" / "frame_9slice.png"


def _absolute(raw: str) -> Path:
    path = Path(raw)
    if not path.is_absolute():
        path = Path.cwd() / path
    return Path(os.path.normpath(path))
