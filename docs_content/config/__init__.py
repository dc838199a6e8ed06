"""Load and validate site configuration YAML for docs_content builds.

This subpackage parses the project's ``content.yaml`` file, applies defaults
for every missing key, resolves relative paths against the file's location,
and produces typed dataclasses (:class:`SiteConfig` and its sections) that the
CLI and static site builder consume. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from docs_content.config import load_site_config
>>> site = load_site_config(Path("config/content.yaml"))  # doctest: +SKIP
>>> site.output.navigation_file  # doctest: +SKIP
PosixPath('config/../public/navigation.json')
"""

from .loader import load_site_config
from .models import (
    ContentConfig,
    OutputConfig,
    RenderConfig,
    SiteConfig,
    SiteConfigError,
)

__all__ = [
    "ContentConfig",
    "OutputConfig",
    "RenderConfig",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
]
