"""Admin browser over the public assets tree."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

from academy_gallery.domain.errors import InvalidPath
from academy_gallery.domain.models import PublicImage
from academy_gallery.services.images import IMAGE_EXT, has_portable_name, read_dimensions
from academy_gallery.services.paths import (
    ensure_within_root,
    sanitize_nested_relative_path,
)

logger = logging.getLogger(__name__)

DEFAULT_PUBLIC_UPLOAD_DIR = "uploads"
MAX_DIRECTORY_DEPTH = 4


def _to_url_dir(relative: str) -> str:
    return relative.replace("\\", "/")


def _encode_path_segments(relative: str) -> str:
    return "/".join(quote(segment, safe="!~*'()") for segment in relative.split("/") if segment)


@dataclass(frozen=True)
class PublicImageBrowser:
    """Lists directories and images below the public root."""

    root: Path
    default_upload_dir: str = DEFAULT_PUBLIC_UPLOAD_DIR
    max_depth: int = MAX_DIRECTORY_DEPTH

    def resolve_relative_directory(self, value: str | None, explicit: bool) -> str:
        """Sanitize the requested directory; fall back to the upload dir."""
        if not explicit:
            fallback = self.default_upload_dir.strip()
            return sanitize_nested_relative_path(fallback) if fallback else ""
        if not value:
            return ""
        trimmed = value.strip()
        if trimmed in {"", "/", "."}:
            return ""
        return sanitize_nested_relative_path(trimmed)

    def absolute_directory(self, relative: str) -> Path:
        """Return the absolute directory, refusing anything outside the root."""
        target = Path(os.path.normpath(self.root / relative)) if relative else self.root
        if not ensure_within_root(target, self.root):
            raise InvalidPath("Invalid directory path")
        return target

    def collect_directories(self) -> list[str]:
        """Return every non-hidden directory up to max_depth, '/'-separated."""
        result: set[str] = {""}
        stack: list[tuple[Path, str, int]] = [(self.root, "", 0)]
        while stack:
            current, relative, depth = stack.pop()
            if depth >= self.max_depth:
                continue
            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError:
                continue
            for entry in entries:
                if not entry.is_dir() or entry.name.startswith("."):
                    continue
                if not has_portable_name(Path(entry.path)):
                    continue
                next_relative = os.path.join(relative, entry.name) if relative else entry.name
                next_absolute = current / entry.name
                if not ensure_within_root(next_absolute, self.root):
                    continue
                result.add(_to_url_dir(next_relative))
                stack.append((next_absolute, next_relative, depth + 1))
        default_relative = self.resolve_relative_directory(None, explicit=False)
        if default_relative:
            result.add(_to_url_dir(default_relative))
        return sorted(result)

    def list_images(self, relative: str) -> list[PublicImage]:
        """Return the images stored directly in one public directory."""
        directory = self.absolute_directory(relative)
        if not directory.is_dir():
            return []
        url_dir = _to_url_dir(relative)
        images: list[PublicImage] = []
        for entry in directory.iterdir():
            if not IMAGE_EXT.search(entry.name) or not entry.is_file():
                continue
            if not ensure_within_root(entry, self.root):
                continue
            if not has_portable_name(entry):
                logger.warning("Skipping file with an undecodable name in %s", url_dir or "/")
                continue
            dimensions = read_dimensions(entry)
            if dimensions is None:
                continue
            width, height = dimensions
            relative_path = f"{url_dir}/{entry.name}" if url_dir else entry.name
            images.append(
                PublicImage(
                    file=entry.name,
                    width=width,
                    height=height,
                    size=entry.stat().st_size,
                    url=f"/{_encode_path_segments(relative_path)}",
                    directory=url_dir,
                )
            )
        return sorted(images, key=lambda image: image.file)
