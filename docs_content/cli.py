"""Cyclopts CLI entrypoint for inspecting and exporting docs content.

The ``docs-content`` console script exposes the content engine: print the
navigation tree as JSON, show which stored document a route resolves to, or
export the whole content tree as a static site. Every option can also be set
through an ``INPUT_*`` environment variable so CI jobs can drive it without
arguments.

Examples
--------
Print the navigation tree for the default configuration:

>>> from docs_content.cli import app
>>> app.run(["navigation"])  # doctest: +SKIP

Resolve a route against an ad-hoc content directory:

>>> app.run(
...     ["resolve", "/database/migrations", "--content-dir", "content"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import json
import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import SiteConfig, load_site_config
from .generator import SiteBuilder
from .library import ContentLibrary
from .navigation import navigation_to_dicts

DEFAULT_CONFIG = Path("config/content.yaml")

app = App(name="docs-content", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
]
ContentDirOption = typ.Annotated[
    Path | None,
    Parameter(help="Override the content directory", env_var="INPUT_CONTENT_DIR"),
]
VerboseOption = typ.Annotated[
    bool, Parameter(help="Log progress at INFO level", env_var="INPUT_VERBOSE")
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(
    config: Path, content_dir: Path | None, output_dir: Path | None = None
) -> SiteConfig:
    """Load ``config`` when it exists and apply directory overrides.

    A missing configuration file is only tolerated when ``content_dir`` is
    given, in which case the built-in defaults are used.
    """
    if config.exists() or content_dir is None:
        site_config = load_site_config(config)
    else:
        site_config = SiteConfig()
    return site_config.with_overrides(content_dir=content_dir, output_dir=output_dir)


def _open_library(site_config: SiteConfig) -> ContentLibrary:
    return ContentLibrary.from_directory(
        site_config.content.root, virtual_root=site_config.content.virtual_root
    )


@app.command(help="Print the navigation tree as JSON.")
def navigation(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    content_dir: ContentDirOption = None,
    active: typ.Annotated[
        str | None, Parameter(help="Mark the item for this route as active")
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the navigation tree for the configured content directory.

    Parameters
    ----------
    config : Path, optional
        Path to the ``content.yaml`` configuration file.
    content_dir : Path or None, optional
        Content directory overriding ``content.root`` from the config.
    active : str or None, optional
        Route whose navigation item should be flagged as active.
    verbose : bool, optional
        Emit INFO-level logs to stderr.
    """
    _configure_logging(verbose)
    library = _open_library(_load_config(config, content_dir))
    items = library.navigation(active_path=active)
    print(json.dumps(navigation_to_dicts(items), indent=2))


@app.command(help="Show which stored document a route resolves to.")
def resolve(
    route: str,
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    content_dir: ContentDirOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the virtual path of the document published at ``route``.

    Parameters
    ----------
    route : str
        Public route such as ``/database/migrations``.
    config : Path, optional
        Path to the ``content.yaml`` configuration file.
    content_dir : Path or None, optional
        Content directory overriding ``content.root`` from the config.
    verbose : bool, optional
        Emit INFO-level logs to stderr.

    Raises
    ------
    SystemExit
        With status 1 when no document is published at ``route``.
    """
    _configure_logging(verbose)
    library = _open_library(_load_config(config, content_dir))
    document = library.resolve(route)
    if document is None:
        print(f"no document for route '{route}'", file=sys.stderr)
        raise SystemExit(1)
    print(document.virtual_path)


@app.command(help="Export every document as static HTML plus navigation JSON.")
def build(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    content_dir: ContentDirOption = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Render the content tree into the configured output directory.

    Parameters
    ----------
    config : Path, optional
        Path to the ``content.yaml`` configuration file.
    content_dir : Path or None, optional
        Content directory overriding ``content.root`` from the config.
    output_dir : Path or None, optional
        Output directory overriding ``output.dir`` from the config.
    verbose : bool, optional
        Emit INFO-level logs to stderr.
    """
    _configure_logging(verbose)
    site_config = _load_config(config, content_dir, output_dir)
    library = _open_library(site_config)
    for path in SiteBuilder(library, site_config).run():
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers ``docs-content``."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
