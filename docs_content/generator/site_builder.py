"""Export every stored document as a static HTML page.

:class:`SiteBuilder` takes one consistent snapshot from a
:class:`~docs_content.library.ContentLibrary`, renders each document through
:class:`~docs_content.generator.renderer.DocumentRenderer`, and writes
``<output>/<public path>/index.html`` files alongside a ``navigation.json``
dump of the sidebar tree.

>>> from pathlib import Path
>>> from docs_content.config import load_site_config
>>> from docs_content.library import ContentLibrary
>>> from docs_content.generator import SiteBuilder
>>> config = load_site_config(Path("config/content.yaml"))  # doctest: +SKIP
>>> library = ContentLibrary.from_directory(config.content.root)  # doctest: +SKIP
>>> SiteBuilder(library, config).run()  # doctest: +SKIP
[PosixPath('public/index.html'), ..., PosixPath('public/navigation.json')]
"""

from __future__ import annotations

import datetime as dt
import json
import logging
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from docs_content.navigation import mark_active, navigation_to_dicts

from .renderer import DocumentRenderer

if typ.TYPE_CHECKING:
    from docs_content.config import SiteConfig
    from docs_content.library import ContentLibrary, ContentSnapshot
    from docs_content.store import Document

    from .models import RenderedDocument

logger = logging.getLogger(__name__)


class SiteBuilder:
    """Render the current content snapshot into a static site."""

    def __init__(
        self,
        library: ContentLibrary,
        site_config: SiteConfig,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        library : ContentLibrary
            Source of the content snapshot to export.
        site_config : SiteConfig
            Output locations and render labels.
        templates_dir : Path, optional
            Directory containing ``doc_page.jinja``. Defaults to the package
            templates.
        """
        self.library = library
        self.site_config = site_config
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("doc_page.jinja")

    def run(self) -> list[Path]:
        """Write one page per published route plus the navigation JSON.

        Returns
        -------
        list[Path]
            Written page paths in virtual-path order, followed by the
            navigation file.

        Notes
        -----
        When several documents share a public path, only the one the resolver
        returns for that path is exported.
        """
        snapshot = self.library.snapshot
        renderer = DocumentRenderer(
            self.site_config.render.pygments_style, store=snapshot.store
        )
        navigation = snapshot.navigation.build()
        out_dir = self.site_config.output.directory
        out_dir.mkdir(parents=True, exist_ok=True)
        generated_at = dt.datetime.now(dt.UTC)

        written: list[Path] = []
        for document in self._published_documents(snapshot):
            rendered = renderer.render(document)
            context = {
                "page": rendered,
                "navigation": mark_active(navigation, rendered.path),
                "site_name": self.site_config.render.site_name,
                "html_title": self._format_page_title(rendered),
                "pygments_css": renderer.stylesheet,
                "generated_at": generated_at,
            }
            html = self.template.render(**context)
            output_path = _page_output_path(out_dir, rendered.path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html, encoding="utf-8")
            written.append(output_path)

        written.append(self._write_navigation(navigation_to_dicts(navigation)))
        return written

    @staticmethod
    def _published_documents(snapshot: ContentSnapshot) -> list[Document]:
        """Return the documents that own their public path."""
        published: list[Document] = []
        for document in snapshot.store.documents():
            owner = snapshot.resolver.resolve(document.public_path)
            if owner is not document:
                logger.info(
                    "Skipping %s: route '%s' is served by %s",
                    document.virtual_path,
                    document.public_path,
                    owner.virtual_path if owner is not None else "nothing",
                )
                continue
            published.append(document)
        return published

    def _write_navigation(self, payload: list[dict[str, typ.Any]]) -> Path:
        """Persist the navigation tree as JSON and return its path."""
        path = self.site_config.output.navigation_file
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        return path

    def _format_page_title(self, page: RenderedDocument) -> str:
        """Compose the HTML title from the page title and site labels."""
        render = self.site_config.render
        return f"{page.title} | {render.site_name} {render.page_title_suffix}"


def _page_output_path(out_dir: Path, route_path: str) -> Path:
    """Return ``<out_dir>/<route>/index.html`` for a public route."""
    relative = route_path.strip("/")
    if not relative:
        return out_dir / "index.html"
    return out_dir.joinpath(*relative.split("/"), "index.html")


__all__ = ["SiteBuilder"]
