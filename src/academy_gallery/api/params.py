"""Query parameter parsing shared by the API routers."""

from fastapi import Request

from academy_gallery.domain.errors import InvalidInput


def parse_positive_int(raw: str | None, name: str) -> int:
    """Parse a strictly positive integer or raise InvalidInput."""
    text = (raw or "").strip()
    if not (text.isascii() and text.isdigit()):
        raise InvalidInput(f"{name} must be a positive number")
    value = int(text)
    if value <= 0:
        raise InvalidInput(f"{name} must be a positive number")
    return value


def gallery_id_param(request: Request) -> int:
    """Read galleryId (or its legacy alias gallery) from the query string."""
    raw = request.query_params.get("galleryId") or request.query_params.get("gallery")
    if not raw:
        raise InvalidInput("galleryId query parameter is required")
    return parse_positive_int(raw, "galleryId")


def page_param(request: Request) -> int:
    raw = request.query_params.get("page")
    if raw is None or raw == "":
        return 1
    return parse_positive_int(raw, "page")
