"""Rewrite relative links between content files to their public routes."""

from __future__ import annotations

import posixpath
import typing as typ
from urllib.parse import urlsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from docs_content._constants import MARKDOWN_SUFFIX

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from docs_content.store import ContentStore
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any
    ContentStore = typ.Any


class ContentLinkExtension(Extension):
    """Point links such as ``../5.database/3.migrations.md`` at public routes.

    Insert this extension into a ``markdown.Markdown`` instance converting the
    document stored at ``source_path``. Relative links whose target is another
    document in ``store`` are replaced by that document's public path (query
    strings are dropped, fragments kept). Every other link is left untouched.
    """

    def __init__(self, source_path: str, store: ContentStore) -> None:
        super().__init__()
        self.source_path = source_path
        self.store = store

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the content-link treeprocessor on the Markdown instance."""
        processor = ContentLinkTreeprocessor(md, self.source_path, self.store)
        md.treeprocessors.register(processor, "docs_content_links", 15)


class ContentLinkTreeprocessor(Treeprocessor):
    """Rewrite anchors that target other stored documents."""

    def __init__(self, md: Markdown, source_path: str, store: ContentStore) -> None:
        super().__init__(md)
        self.base_dir = posixpath.dirname(source_path)
        self.store = store

    def run(self, root: Element) -> Element:
        """Rewrite content-relative anchors in the parsed markdown tree."""
        for element in root.iter("a"):
            rewritten = self._rewrite(element.get("href"))
            if rewritten:
                element.set("href", rewritten)
        return root

    def _rewrite(self, target: str | None) -> str | None:
        """Return the public route for a link to a stored document, or None."""
        if not target or target.startswith(("#", "//")) or "://" in target:
            return None
        parsed = urlsplit(target)
        if parsed.scheme or parsed.netloc or parsed.path.startswith("/"):
            return None
        if not parsed.path.endswith(MARKDOWN_SUFFIX):
            return None
        joined = posixpath.normpath(posixpath.join(self.base_dir, parsed.path))
        document = self.store.get(joined)
        if document is None:
            return None
        if parsed.fragment:
            return f"{document.public_path}#{parsed.fragment}"
        return document.public_path


__all__ = ["ContentLinkExtension", "ContentLinkTreeprocessor"]
