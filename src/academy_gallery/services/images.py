"""Gallery image enumeration and raw image serving."""

import logging
import math
import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

from PIL import Image, UnidentifiedImageError

from academy_gallery.domain.errors import InvalidPath, NotFound
from academy_gallery.domain.models import ImageAsset, ImageFile, ImagePage, Pagination
from academy_gallery.services.paths import assert_file_within_folder
from academy_gallery.services.signatures import SignatureService

logger = logging.getLogger(__name__)

PAGE_SIZE = 20
IMAGE_EXT = re.compile(r"\.(?:jpe?g|png|webp|gif|bmp|tiff)$", re.IGNORECASE)
IMAGE_CACHE_CONTROL = "public, max-age=60"

_MEDIA_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".tiff": "image/tiff",
    ".tif": "image/tiff",
}


def media_type_for(path: str | Path) -> str:
    """Return the content type for a file based on its extension."""
    return _MEDIA_TYPES.get(Path(path).suffix.lower(), "application/octet-stream")


def encode_uri_component(value: str) -> str:
    return quote(value, safe="!~*'()")


def image_url(gallery_id: int, file_name: str, signature: str) -> str:
    """Signed URL serving the original file."""
    return (
        f"/api/images?galleryId={gallery_id}"
        f"&file={encode_uri_component(file_name)}&sig={signature}"
    )


def decorated_image_url(gallery_id: int, file_name: str, signature: str) -> str:
    """Signed URL serving the framed derivative."""
    return (
        f"/api/decorate?galleryId={gallery_id}"
        f"&file={encode_uri_component(file_name)}&sig={signature}"
    )


def read_dimensions(path: Path) -> tuple[int, int] | None:
    """Decode the pixel size of an image file, or None if it is not readable."""
    try:
        with Image.open(path) as img:
            width, height = img.size
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError):
        logger.warning("Failed to read image dimensions for %s", path.name)
        return None
    if not width or not height:
        return None
    return width, height


def has_portable_name(path: Path) -> bool:
    """Whether a directory entry name survives UTF-8 encoding."""
    try:
        path.name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def paginate(total: int, page: int, page_size: int = PAGE_SIZE) -> Pagination:
    start = (page - 1) * page_size
    return Pagination(
        page=page,
        page_size=page_size,
        total=total,
        total_pages=math.ceil(total / page_size),
        has_next=start + page_size < total,
    )


@dataclass(frozen=True)
class ImageEnumerator:
    """Lists the images of a gallery folder with signed access URLs."""

    signatures: SignatureService
    page_size: int = PAGE_SIZE

    def list_all(self, gallery_id: int, folder: Path) -> list[ImageAsset]:
        """Return every valid image in the folder, sorted by file name."""
        if not folder.is_dir():
            return []
        assets: list[ImageAsset] = []
        for entry in folder.iterdir():
            if not IMAGE_EXT.search(entry.name) or not entry.is_file():
                continue
            if not has_portable_name(entry):
                logger.warning("Skipping file with an undecodable name in %s", folder.name)
                continue
            dimensions = read_dimensions(entry)
            if dimensions is None:
                continue
            width, height = dimensions
            signature = self.signatures.sign(gallery_id, entry.name)
            assets.append(
                ImageAsset(
                    file=entry.name,
                    width=width,
                    height=height,
                    size=entry.stat().st_size,
                    signature=signature,
                    thumbnail_url=image_url(gallery_id, entry.name, signature),
                    large_url=decorated_image_url(gallery_id, entry.name, signature),
                )
            )
        return sorted(assets, key=lambda asset: asset.file)

    def list_page(self, gallery_id: int, folder: Path, page: int = 1) -> ImagePage:
        """Return one page of the folder's images."""
        if page < 1:
            raise ValueError("page must be a positive number")
        assets = self.list_all(gallery_id, folder)
        start = (page - 1) * self.page_size
        return ImagePage(
            items=assets[start : start + self.page_size],
            pagination=paginate(len(assets), page, self.page_size),
        )


@dataclass(frozen=True)
class ImageServer:
    """Reads a single validated image file."""

    def locate(self, folder: Path, file_name: str | None) -> Path:
        """Return the file path after containment and existence checks."""
        target = assert_file_within_folder(folder, file_name)
        if target is None:
            raise InvalidPath()
        if not target.is_file():
            raise NotFound("Image not found")
        return target

    def read(self, folder: Path, file_name: str | None) -> ImageFile:
        """Return the bytes and content type of one gallery file."""
        target = self.locate(folder, file_name)
        return ImageFile(content=target.read_bytes(), media_type=media_type_for(target))
