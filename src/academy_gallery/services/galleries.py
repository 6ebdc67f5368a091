"""Gallery lookups and password connection."""

import hmac
import logging
import math
from dataclasses import dataclass
from typing import Protocol

from academy_gallery.domain.errors import NotFound
from academy_gallery.domain.models import Gallery

logger = logging.getLogger(__name__)


class GalleryRepository(Protocol):
    """Persistence interface for gallery records."""

    def get_gallery(self, gallery_id: int) -> Gallery | None:
        """Return a gallery by id, if present."""

    def find_by_title(self, title: str) -> Gallery | None:
        """Return the first gallery with this exact title."""

    def list_galleries(self) -> list[Gallery]:
        """Return all galleries."""

    def get_password(self, gallery_id: int) -> str | None:
        """Return the shared password of a gallery, if present."""


def summarize(gallery: Gallery) -> dict[str, object]:
    """Public view of a gallery, without its folder or password."""
    return {"id": gallery.id, "title": gallery.title, "createdAt": gallery.created_at}


@dataclass
class GalleryService:
    """Application service for gallery records."""

    repository: GalleryRepository

    def get_gallery(self, gallery_id: int) -> Gallery:
        """Return a gallery or raise NotFound."""
        gallery = self.repository.get_gallery(gallery_id)
        if gallery is None:
            raise NotFound("Gallery not found", galleryId=gallery_id)
        return gallery

    def find_gallery(self, param: str) -> Gallery:
        """Look a gallery up by numeric id, falling back to its title."""
        gallery: Gallery | None
        try:
            maybe_id = float(param)
        except ValueError:
            maybe_id = None
        if maybe_id is not None and math.isfinite(maybe_id):
            gallery = self.repository.get_gallery(int(maybe_id))
        else:
            gallery = self.repository.find_by_title(param)
        if gallery is None:
            raise NotFound("Gallery not found", gallery=param)
        return gallery

    def list_galleries(self) -> list[dict[str, object]]:
        """Return public summaries of every gallery."""
        return [summarize(gallery) for gallery in self.repository.list_galleries()]

    def connect(self, gallery_id: int, password: str) -> Gallery:
        """Return the gallery when the password matches, else raise NotFound."""
        gallery = self.repository.get_gallery(gallery_id)
        stored = self.repository.get_password(gallery_id) if gallery else None
        if gallery is None or stored is None or not hmac.compare_digest(
            stored.encode(), password.encode()
        ):
            logger.info("Rejected connection attempt for gallery %s", gallery_id)
            raise NotFound("Gallery not found")
        return gallery
