"""Map public route paths onto stored documents.

A route such as ``/database/migrations`` is matched against the content store
by comparing its segments with each stored path's segments after their ordering
prefixes are stripped. The final route segment may name either a directory
(served by that directory's index document) or a flat Markdown file; when both
exist the directory index wins. Ties between several stored paths of the same
kind are broken by taking the lexically smallest virtual path, and logged. An
index document is also reachable with an explicit trailing ``index`` segment
(``/start/index``), as a page named ``index``.

>>> from docs_content.store import ContentStore
>>> from docs_content.resolver import ContentPathResolver
>>> store = ContentStore({
...     "/content/1.start/1.index.md": "---\\ntitle: Introduction\\n---\\n",
...     "/content/1.start/2.setup.md": "# Setup\\n",
... })
>>> resolver = ContentPathResolver(store)
>>> resolver.resolve("/start/setup").virtual_path
'/content/1.start/2.setup.md'
>>> resolver.resolve("/nonexistent/page") is None
True
"""

from __future__ import annotations

import logging
import re
import typing as typ

from .ordering import split_route

if typ.TYPE_CHECKING:
    from .store import ContentStore, Document

logger = logging.getLogger(__name__)

RouteKey = tuple[str, ...]


class ContentPathResolver:
    """Resolve route paths against a fixed content store snapshot.

    The lookup tables are computed once at construction; the store must not
    change for the lifetime of the resolver.
    """

    def __init__(self, store: ContentStore) -> None:
        self.store = store
        self._index_routes: dict[RouteKey, list[Document]] = {}
        self._page_routes: dict[RouteKey, list[Document]] = {}
        for document in store.documents():
            directories = tuple(
                segment.clean for segment in document.directory_segments
            )
            if document.is_index:
                self._index_routes.setdefault(directories, []).append(document)
            key = (*directories, document.file_name.clean)
            self._page_routes.setdefault(key, []).append(document)

    def resolve(self, route_path: str) -> Document | None:
        """Return the document published at ``route_path`` or None.

        Parameters
        ----------
        route_path : str
            Public route, with or without a leading slash. ``""`` and ``"/"``
            address the content root's own index document.

        Returns
        -------
        Document | None
            The matching document; None signals "not found" and is never
            replaced by an exception.

        Raises
        ------
        TypeError
            If ``route_path`` is not a string.
        """
        key = tuple(split_route(route_path))
        for table in (self._index_routes, self._page_routes):
            candidates = table.get(key)
            if candidates:
                return _first_candidate(route_path, candidates)
        return None

    def public_path_of(self, document: Document) -> str:
        """Return the route at which ``document`` is published."""
        return document.public_path

    def find(self, pattern: str | re.Pattern[str]) -> list[Document]:
        """Return every document whose virtual path matches ``pattern``.

        The pattern is searched anywhere in the virtual path; results follow
        virtual path order.
        """
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        return [
            document
            for document in self.store.documents()
            if compiled.search(document.virtual_path)
        ]


def _first_candidate(route_path: str, candidates: list[Document]) -> Document:
    """Return the lexically first candidate, warning when the route is ambiguous."""
    ordered = sorted(candidates, key=lambda document: document.virtual_path)
    if len(ordered) > 1:
        logger.warning(
            "Route '%s' matches %d documents (%s); using %s",
            route_path,
            len(ordered),
            ", ".join(document.virtual_path for document in ordered),
            ordered[0].virtual_path,
        )
    return ordered[0]


__all__ = ["ContentPathResolver"]
