"""Locale message trees, loaded once at startup."""

import json
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from academy_gallery.domain.errors import ConfigurationError, UnsupportedLocale


class Locale(StrEnum):
    FR = "fr"
    EN = "en"
    NL = "nl"


def parse_locale(raw: str) -> Locale:
    """Return the matching locale or raise UnsupportedLocale."""
    try:
        return Locale(raw)
    except ValueError as exc:
        raise UnsupportedLocale() from exc


@dataclass(frozen=True)
class MessageCatalog:
    """Static mapping of locale to its message tree."""

    messages: dict[Locale, dict[str, object]]

    @classmethod
    def load(cls, directory: Path) -> "MessageCatalog":
        """Read messages/{locale}.json for every supported locale."""
        messages: dict[Locale, dict[str, object]] = {}
        for locale in Locale:
            path = directory / f"{locale.value}.json"
            try:
                messages[locale] = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                raise ConfigurationError(f"Unreadable messages for {locale.value}") from exc
        return cls(messages=messages)

    def messages_for(self, raw_locale: str) -> dict[str, object]:
        """Return the message tree of a supported locale."""
        return self.messages[parse_locale(raw_locale)]
