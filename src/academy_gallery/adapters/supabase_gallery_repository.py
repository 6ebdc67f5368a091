"""Supabase-backed gallery repository."""

from dataclasses import dataclass

from supabase import Client

from academy_gallery.domain.models import Gallery
from academy_gallery.services.galleries import GalleryRepository

_GALLERY_COLUMNS = "id, title, photos_path, date, created_at"


@dataclass
class SupabaseGalleryRepository(GalleryRepository):
    """Supabase implementation for gallery lookups."""

    client: Client

    def get_gallery(self, gallery_id: int) -> Gallery | None:
        """Return a gallery by id, if present."""
        response = (
            self.client.table("galleries")
            .select(_GALLERY_COLUMNS)
            .eq("id", gallery_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _gallery_from_row(response.data[0])
        return None

    def find_by_title(self, title: str) -> Gallery | None:
        """Return the first gallery with this exact title."""
        response = (
            self.client.table("galleries")
            .select(_GALLERY_COLUMNS)
            .eq("title", title)
            .limit(1)
            .execute()
        )
        if response.data:
            return _gallery_from_row(response.data[0])
        return None

    def list_galleries(self) -> list[Gallery]:
        """Return all galleries ordered by id."""
        response = (
            self.client.table("galleries").select(_GALLERY_COLUMNS).order("id").execute()
        )
        return [_gallery_from_row(row) for row in response.data or []]

    def get_password(self, gallery_id: int) -> str | None:
        """Return the shared password of a gallery, if present."""
        response = (
            self.client.table("galleries")
            .select("password")
            .eq("id", gallery_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return response.data[0].get("password")
        return None


def _gallery_from_row(row: dict[str, object]) -> Gallery:
    date = row.get("date")
    created_at = row.get("created_at")
    return Gallery(
        id=int(row["id"]),
        title=str(row.get("title") or ""),
        photos_path=row.get("photos_path"),
        date=str(date) if date is not None else None,
        created_at=str(created_at) if created_at is not None else None,
    )
