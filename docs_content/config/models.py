"""Typed dataclasses describing docs_content site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from .._constants import DEFAULT_VIRTUAL_ROOT


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ContentConfig:
    """Where content lives on disk and the virtual root it is stored under."""

    root: Path = Path("content")
    virtual_root: str = DEFAULT_VIRTUAL_ROOT


@dc.dataclass(slots=True)
class RenderConfig:
    """Labels and highlighting options used when exporting pages."""

    pygments_style: str = "monokai"
    site_name: str = "Documentation"
    page_title_suffix: str = "Docs"


@dc.dataclass(slots=True)
class OutputConfig:
    """Destination of the static export."""

    directory: Path = Path("public")
    navigation_file: Path = Path("public/navigation.json")


@dc.dataclass(slots=True)
class SiteConfig:
    """Fully resolved configuration consumed by the CLI and site builder."""

    content: ContentConfig = dc.field(default_factory=ContentConfig)
    render: RenderConfig = dc.field(default_factory=RenderConfig)
    output: OutputConfig = dc.field(default_factory=OutputConfig)

    def with_overrides(
        self, *, content_dir: Path | None = None, output_dir: Path | None = None
    ) -> SiteConfig:
        """Return a copy with the content and/or output directory replaced.

        Overriding the output directory moves the navigation file along with it,
        keeping its location relative to the output directory (a navigation file
        configured outside that directory keeps only its name).
        """
        content = self.content
        output = self.output
        if content_dir is not None:
            content = dc.replace(content, root=content_dir)
        if output_dir is not None:
            navigation_file = output.navigation_file
            if navigation_file.is_relative_to(output.directory):
                relative = navigation_file.relative_to(output.directory)
            else:
                relative = Path(navigation_file.name)
            output = OutputConfig(
                directory=output_dir, navigation_file=output_dir / relative
            )
        return dc.replace(self, content=content, output=output)


__all__ = [
    "ContentConfig",
    "OutputConfig",
    "RenderConfig",
    "SiteConfig",
    "SiteConfigError",
]
