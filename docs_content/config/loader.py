"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    DEFAULT_NAVIGATION_FILE,
    _normalize_virtual_root,
    _optional_str,
    _resolve_path,
    _section,
)
from .models import ContentConfig, OutputConfig, RenderConfig, SiteConfig


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing content and export settings.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/content.yaml``). Relative paths inside the file are resolved
        against the file's parent directory.

    Returns
    -------
    SiteConfig
        Parsed configuration with defaults applied for every missing key.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a section is not a mapping or a value is invalid (for example, a
        virtual root without a leading slash).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docs_content.config import load_site_config
    >>> config = load_site_config(Path("config/content.yaml"))  # doctest: +SKIP
    >>> config.content.virtual_root  # doctest: +SKIP
    '/content'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.parent

    content_raw = _section(raw, "content")
    render_raw = _section(raw, "render")
    output_raw = _section(raw, "output")

    content_defaults = ContentConfig()
    content = ContentConfig(
        root=_resolve_path(
            content_raw.get("root"), str(content_defaults.root), base_dir
        ),
        virtual_root=_normalize_virtual_root(
            content_raw.get("virtual_root"), content_defaults.virtual_root
        ),
    )

    render_defaults = RenderConfig()
    render = RenderConfig(
        pygments_style=_optional_str(render_raw.get("pygments_style"))
        or render_defaults.pygments_style,
        site_name=_optional_str(render_raw.get("site_name"))
        or render_defaults.site_name,
        page_title_suffix=_optional_str(render_raw.get("page_title_suffix"))
        or render_defaults.page_title_suffix,
    )

    output_dir = _resolve_path(
        output_raw.get("dir"), str(OutputConfig().directory), base_dir
    )
    navigation_name = (
        _optional_str(output_raw.get("navigation_file")) or DEFAULT_NAVIGATION_FILE
    )
    output = OutputConfig(
        directory=output_dir, navigation_file=output_dir / navigation_name
    )

    return SiteConfig(content=content, render=render, output=output)


__all__ = ["load_site_config"]
