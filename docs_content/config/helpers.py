"""Utility helpers shared by the docs_content configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import SiteConfigError

DEFAULT_NAVIGATION_FILE = "navigation.json"


def _section(raw: typ.Mapping[str, typ.Any], name: str) -> typ.Mapping[str, typ.Any]:
    """Return the mapping stored under ``name``, or {} when it is absent."""
    value = raw.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"Configuration section '{name}' must be a mapping."
        raise SiteConfigError(msg)
    return value


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_path(value: object | None, default: str, base_dir: Path) -> Path:
    """Return ``value`` as a path, anchoring relative paths at ``base_dir``."""
    text = _optional_str(value) or default
    path = Path(text).expanduser()
    if path.is_absolute():
        return path
    return base_dir / path


def _normalize_virtual_root(value: object | None, default: str) -> str:
    """Validate the virtual root and strip any trailing slash."""
    text = _optional_str(value) or default
    if not text.startswith("/"):
        msg = f"content.virtual_root must start with '/', got {text!r}."
        raise SiteConfigError(msg)
    normalized = "/" + text.strip("/")
    if normalized == "/":
        msg = "content.virtual_root must name a directory below '/'."
        raise SiteConfigError(msg)
    return normalized


__all__ = [
    "DEFAULT_NAVIGATION_FILE",
    "_normalize_virtual_root",
    "_optional_str",
    "_resolve_path",
    "_section",
]
