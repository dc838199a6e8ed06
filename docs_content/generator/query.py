"""Resolve routes and hand the matching documents to the renderer."""

from __future__ import annotations

import typing as typ

from .renderer import DocumentRenderer

if typ.TYPE_CHECKING:
    import re

    from docs_content.resolver import ContentPathResolver

    from .models import RenderedDocument


class ContentQuery:
    """Find rendered documents by public route or virtual-path pattern."""

    def __init__(
        self,
        resolver: ContentPathResolver,
        renderer: DocumentRenderer | None = None,
    ) -> None:
        self.resolver = resolver
        self.renderer = renderer or DocumentRenderer(store=resolver.store)

    def find_one(self, route_path: str) -> RenderedDocument | None:
        """Render the document at ``route_path``, or return None when absent."""
        document = self.resolver.resolve(route_path)
        if document is None:
            return None
        return self.renderer.render(document)

    def find(self, pattern: str | re.Pattern[str]) -> list[RenderedDocument]:
        """Render every document whose virtual path matches ``pattern``."""
        return [self.renderer.render(doc) for doc in self.resolver.find(pattern)]


__all__ = ["ContentQuery"]
