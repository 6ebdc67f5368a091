"""Traversal-safe path resolution for gallery and public asset folders."""

import os
import re
import unicodedata
from pathlib import Path

from academy_gallery.domain.errors import InvalidPath, PathTraversal

_UNSAFE_SEGMENT_CHARS = re.compile(r"[^a-zA-Z0-9_-]")
_REPEATED_DASHES = re.compile(r"-+")
_SEPARATORS = re.compile(r"[\\/]+")


def _normalize(path: str | Path) -> Path:
    return Path(os.path.normpath(path))


def ensure_within_root(target: str | Path, root: str | Path) -> bool:
    """Return True when target is the root itself or one of its descendants.

    The comparison is case-insensitive so that case-insensitive filesystems
    cannot be used to sidestep it.
    """
    normalized_root = str(_normalize(root))
    normalized_target = str(_normalize(target))
    root_with_sep = (
        normalized_root
        if normalized_root.endswith(os.sep)
        else normalized_root + os.sep
    )
    return normalized_target.lower() == normalized_root.lower() or (
        normalized_target.lower().startswith(root_with_sep.lower())
    )


def resolve_folder(stored_path: str | None, root: str | Path) -> Path:
    """Resolve a stored gallery path to an absolute directory under root."""
    trimmed = (stored_path or "").strip()
    if not trimmed:
        raise InvalidPath("Stored path is invalid")
    candidate = Path(trimmed)
    if candidate.is_absolute():
        resolved = _normalize(candidate)
    else:
        resolved = _normalize(Path(root) / candidate)
    if not ensure_within_root(resolved, root):
        raise PathTraversal("Stored path is invalid")
    return resolved


def is_safe_file_name(file_name: str | None) -> bool:
    """Reject empty names, parent references and any path separator."""
    if not file_name or ".." in file_name or "\x00" in file_name:
        return False
    return not _SEPARATORS.search(file_name)


def assert_file_within_folder(folder: str | Path, file_name: str | None) -> Path | None:
    """Return the absolute path of file_name inside folder, or None if unsafe."""
    if not is_safe_file_name(file_name):
        return None
    absolute = _normalize(Path(folder) / file_name)
    normalized_folder = str(_normalize(folder))
    folder_with_sep = (
        normalized_folder
        if normalized_folder.endswith(os.sep)
        else normalized_folder + os.sep
    )
    if not str(absolute).lower().startswith(folder_with_sep.lower()):
        return None
    return absolute


def sanitize_segment(value: str) -> str:
    """Reduce a path segment to lowercase ASCII letters, digits, '-' and '_'."""
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    replaced = _UNSAFE_SEGMENT_CHARS.sub("-", stripped)
    collapsed = _REPEATED_DASHES.sub("-", replaced)
    return collapsed.strip("-_").lower()


def sanitize_nested_relative_path(value: str) -> str:
    """Sanitize every segment of a relative path and join them with os.sep."""
    segments = (sanitize_segment(segment) for segment in _SEPARATORS.split(value))
    return os.sep.join(segment for segment in segments if segment)
