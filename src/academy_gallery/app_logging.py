"""Logging configuration helpers."""

import logging

_QUIET_LOGGERS = ("PIL", "httpx", "hpack")


def configure_logging(level: str | int = logging.INFO) -> None:
    """Attach one stream handler to the package logger.

    Pillow and HTTP client loggers are capped at WARNING.
    """
    logger = logging.getLogger("academy_gallery")
    logger.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
