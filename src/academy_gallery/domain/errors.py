"""Error types surfaced to API callers."""


class GalleryError(Exception):
    """Base error carrying a caller-safe message and HTTP status."""

    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message: str | None = None, **extra: object) -> None:
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_payload(self) -> dict[str, object]:
        return {"message": self.message, **self.extra}


class InvalidInput(GalleryError):
    status_code = 400
    default_message = "Invalid request"


class InvalidPath(InvalidInput):
    default_message = "Invalid file path"


class PathTraversal(InvalidPath):
    """Resolved path escapes its root; never reports the attempted path."""


class Unauthenticated(GalleryError):
    status_code = 401
    default_message = "Not authenticated"


class Forbidden(GalleryError):
    status_code = 403
    default_message = "Forbidden for this gallery"


class NotFound(GalleryError):
    status_code = 404
    default_message = "Not found"


class UnsupportedLocale(NotFound):
    default_message = "Unsupported locale"


class ConfigurationError(GalleryError):
    status_code = 422
    default_message = "Invalid configuration"


class MissingPhotoDirectory(ConfigurationError):
    default_message = "Gallery has no photo directory configured"


class InvalidFrame(ConfigurationError):
    default_message = "Invalid frame image"


class InvalidGeometry(ConfigurationError):
    default_message = "Invalid borders vs image size"


class DecodeError(GalleryError):
    status_code = 422
    default_message = "Unable to decode image"


class InvalidImage(DecodeError):
    default_message = "Invalid base image"


class UnexpectedError(GalleryError):
    """Unhandled failure; the original exception is only logged."""
