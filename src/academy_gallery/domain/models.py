"""Domain models for the academy gallery."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Gallery:
    """A gallery record stored in the database."""

    id: int
    title: str
    photos_path: str | None
    date: str | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class FrameBorders:
    """Pixel widths of the non-stretchable borders of a 9-slice frame."""

    top: int
    right: int
    bottom: int
    left: int


# Must match the slicing of public/frames/frame_9slice.png.
DEFAULT_FRAME_BORDERS = FrameBorders(top=75, right=131, bottom=75, left=75)


@dataclass(frozen=True)
class ImageAsset:
    """A displayable image found in a gallery folder."""

    file: str
    width: int
    height: int
    size: int
    signature: str
    thumbnail_url: str
    large_url: str

    def to_payload(self) -> dict[str, object]:
        """Serialize for the public listing endpoint."""
        return {
            "file": self.file,
            "largeURL": self.large_url,
            "thumbnailURL": self.thumbnail_url,
            "width": self.width,
            "height": self.height,
        }

    def to_admin_payload(self) -> dict[str, object]:
        """Serialize for the admin listing endpoint."""
        return {
            "file": self.file,
            "width": self.width,
            "height": self.height,
            "size": self.size,
            "thumbnailURL": self.thumbnail_url,
            "largeURL": self.large_url,
        }


@dataclass(frozen=True)
class Pagination:
    """Page window over a sorted image list."""

    page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool

    def to_payload(self) -> dict[str, object]:
        return {
            "page": self.page,
            "pageSize": self.page_size,
            "total": self.total,
            "totalPages": self.total_pages,
            "hasNext": self.has_next,
        }


@dataclass(frozen=True)
class ImagePage:
    """One page of gallery images."""

    items: list[ImageAsset]
    pagination: Pagination


@dataclass(frozen=True)
class ImageFile:
    """Raw image bytes ready to be streamed."""

    content: bytes
    media_type: str


@dataclass(frozen=True)
class PublicImage:
    """An image stored under the public assets root."""

    file: str
    width: int
    height: int
    size: int
    url: str
    directory: str

    def to_payload(self) -> dict[str, object]:
        return {
            "file": self.file,
            "width": self.width,
            "height": self.height,
            "size": self.size,
            "url": self.url,
            "directory": self.directory,
        }
