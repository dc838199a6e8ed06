"""Synthesize the sidebar navigation tree from the content store.

The builder groups documents by directory, orders every sibling set by its
numeric ordering prefix (falling back to the raw name), hides the prefixes
from public paths, and pulls titles, icons, and badges from front matter. Only
top-level directories that carry an ordering prefix become sections; files at
the content root are reachable by route but never listed.

Example
-------
>>> from docs_content.store import ContentStore
>>> from docs_content.navigation import NavigationTreeBuilder
>>> store = ContentStore({
...     "/content/1.start/1.index.md": "---\\ntitle: Introduction\\n---\\n",
...     "/content/1.start/2.setup.md": "Setup body\\n",
... })
>>> [item.to_dict() for item in NavigationTreeBuilder(store).build()]  # doctest: +NORMALIZE_WHITESPACE
[{'title': 'Introduction', 'path': '/start',
  'children': [{'title': 'Setup', 'path': '/start/setup'}]}]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from ._constants import UNORDERED
from .ordering import (
    OrderedName,
    humanize_name,
    normalize_route,
    sibling_sort_key,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .store import ContentStore, Document

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True, frozen=True)
class NavigationItem:
    """One row of the navigation tree.

    Attributes
    ----------
    title : str
        Display label from metadata, or the humanized clean name.
    path : str
        Public route without ordering prefixes or file extensions.
    icon : str | None
        Optional icon identifier from metadata.
    badge : str | None
        Optional badge text from metadata.
    children : tuple[NavigationItem, ...] | None
        Ordered child rows for directories (possibly empty); None for pages.
    order : int
        Ordering prefix of the underlying file or directory.
    stem : str
        Raw on-disk name the item was built from.
    active : bool
        True when the item matches the current route (see :func:`mark_active`).
    """

    title: str
    path: str
    icon: str | None = None
    badge: str | None = None
    children: tuple[NavigationItem, ...] | None = None
    order: int = UNORDERED
    stem: str = ""
    active: bool = False

    @property
    def is_section(self) -> bool:
        """Return True for items built from directories."""
        return self.children is not None

    def to_dict(self) -> dict[str, typ.Any]:
        """Return a JSON-ready mapping, omitting unset optional fields."""
        payload: dict[str, typ.Any] = {"title": self.title, "path": self.path}
        if self.icon:
            payload["icon"] = self.icon
        if self.badge:
            payload["badge"] = self.badge
        if self.active:
            payload["active"] = True
        if self.children is not None:
            payload["children"] = [child.to_dict() for child in self.children]
        return payload


@dc.dataclass(slots=True)
class DirectorySection:
    """Transient grouping of the documents found under one directory.

    Attributes
    ----------
    name : OrderedName
        Ordering prefix and clean name of the directory.
    relative_path : str
        Raw directory path relative to the content root.
    documents : list[Document]
        Markdown documents directly inside the directory.
    subsections : dict[str, DirectorySection]
        Child directories keyed by raw name.
    """

    name: OrderedName
    relative_path: str
    documents: list[Document] = dc.field(default_factory=list)
    subsections: dict[str, DirectorySection] = dc.field(default_factory=dict)

    @property
    def index_document(self) -> Document | None:
        """Return the visible index document, preferring the first-ordered one."""
        candidates = sorted(
            (
                document
                for document in self.documents
                if document.is_index and not _is_hidden(document)
            ),
            key=lambda document: sibling_sort_key(document.file_name.name),
        )
        if len(candidates) > 1:
            logger.warning(
                "Directory '%s' has %d index documents; using %s",
                self.relative_path,
                len(candidates),
                candidates[0].virtual_path,
            )
        return candidates[0] if candidates else None

    @property
    def pages(self) -> list[Document]:
        """Return the visible non-index documents."""
        return [
            document
            for document in self.documents
            if not document.is_index and not _is_hidden(document)
        ]


class NavigationTreeBuilder:
    """Build the ordered navigation tree for one content store snapshot.

    The tree is computed on the first call to :meth:`build` and reused for the
    lifetime of the builder. Create a new builder for a reloaded store.
    """

    def __init__(self, store: ContentStore) -> None:
        self.store = store
        self._tree: tuple[NavigationItem, ...] | None = None

    def build(self) -> list[NavigationItem]:
        """Return the top-level navigation items in display order."""
        if self._tree is None:
            self._tree = tuple(self._build_tree())
        return list(self._tree)

    def sections(self) -> list[DirectorySection]:
        """Group documents into top-level sections, ordered for display.

        Top-level directories without an ordering prefix are excluded, as are
        documents stored directly under the content root.
        """
        roots: dict[str, DirectorySection] = {}
        for document in self.store.documents():
            directories = document.directory_segments
            if not directories or not directories[0].name.has_prefix:
                continue
            section: DirectorySection | None = None
            level = roots
            raw_parts: list[str] = []
            for segment in directories:
                raw_parts.append(segment.raw)
                section = level.get(segment.raw)
                if section is None:
                    section = DirectorySection(
                        name=segment.name, relative_path="/".join(raw_parts)
                    )
                    level[segment.raw] = section
                level = section.subsections
            if section is not None:
                section.documents.append(document)
        return _sorted_siblings(
            [(section.name, section) for section in roots.values()], parent="/"
        )

    def _build_tree(self) -> list[NavigationItem]:
        items: list[NavigationItem] = []
        for section in self.sections():
            item = self._section_item(section, parent_path="")
            if item is not None:
                items.append(item)
        return items

    def _section_item(
        self, section: DirectorySection, parent_path: str
    ) -> NavigationItem | None:
        """Build the item for ``section``, or None when it has nothing to show."""
        path = f"{parent_path}/{section.name.clean}"
        index = section.index_document
        metadata = index.metadata if index is not None else {}
        settings = self.store.navigation_config(section.relative_path)
        children = self._children(section, path)
        if index is None and not children:
            logger.debug("Dropping empty directory '%s'", section.relative_path)
            return None
        return NavigationItem(
            title=_text(metadata.get("title"))
            or _text(settings.get("title"))
            or humanize_name(section.name.clean),
            path=path,
            icon=_hint(metadata, "icon") or _text(settings.get("icon")),
            badge=_hint(metadata, "badge") or _text(settings.get("badge")),
            children=tuple(children),
            order=section.name.order,
            stem=section.name.raw,
        )

    def _children(
        self, section: DirectorySection, path: str
    ) -> list[NavigationItem]:
        entries: list[tuple[OrderedName, NavigationItem]] = []
        directories: dict[str, DirectorySection] = {}
        for subsection in section.subsections.values():
            item = self._section_item(subsection, parent_path=path)
            if item is not None:
                entries.append((subsection.name, item))
                directories[subsection.name.clean] = subsection
        # A listed directory owns its route; a same-named page would duplicate it.
        for document in section.pages:
            shadowing = directories.get(document.file_name.clean)
            if shadowing is not None:
                logger.info(
                    "Skipping %s in navigation: route '%s' is served by "
                    "directory '%s'",
                    document.virtual_path,
                    document.public_path,
                    shadowing.relative_path,
                )
                continue
            entries.append((document.file_name.name, _page_item(document, path)))
        return _sorted_siblings(entries, parent=section.relative_path)


def _page_item(document: Document, parent_path: str) -> NavigationItem:
    """Build the leaf item for a non-index document."""
    name = document.file_name.name
    metadata = document.metadata
    return NavigationItem(
        title=_text(metadata.get("title")) or humanize_name(name.clean),
        path=f"{parent_path}/{name.clean}",
        icon=_hint(metadata, "icon"),
        badge=_hint(metadata, "badge"),
        order=name.order,
        stem=name.raw,
    )


_T = typ.TypeVar("_T")


def _sorted_siblings(
    entries: list[tuple[OrderedName, _T]], *, parent: str
) -> list[_T]:
    """Order siblings by prefix then raw name, warning on prefix collisions."""
    ordered = sorted(entries, key=lambda entry: sibling_sort_key(entry[0]))
    seen: dict[int, str] = {}
    for name, _value in ordered:
        if not name.has_prefix:
            continue
        if name.order in seen:
            logger.warning(
                "Ordering prefix %d is shared by '%s' and '%s' in '%s'; "
                "ordering them by name",
                name.order,
                seen[name.order],
                name.raw,
                parent,
            )
        else:
            seen[name.order] = name.raw
    return [value for _name, value in ordered]


def _is_hidden(document: Document) -> bool:
    """Return True when front matter sets ``navigation: false``."""
    return document.metadata.get("navigation") is False


def _hint(metadata: cabc.Mapping[str, typ.Any], key: str) -> str | None:
    """Return ``navigation.<key>`` from metadata, falling back to ``<key>``."""
    navigation = metadata.get("navigation")
    if isinstance(navigation, dict):
        value = _text(navigation.get(key))
        if value:
            return value
    return _text(metadata.get(key))


def _text(value: object) -> str | None:
    """Return ``value`` as a non-empty string, or None for blanks and booleans."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    return text or None


def mark_active(
    items: cabc.Iterable[NavigationItem], route_path: str
) -> list[NavigationItem]:
    """Return a copy of ``items`` with ``active`` set where ``path`` matches.

    Matching is an exact comparison against the normalized route. The input
    tree is left untouched.
    """
    target = normalize_route(route_path)
    return [_mark(item, target) for item in items]


def _mark(item: NavigationItem, target: str) -> NavigationItem:
    children = item.children
    if children is not None:
        children = tuple(_mark(child, target) for child in children)
    return dc.replace(item, active=item.path == target, children=children)


def navigation_to_dicts(
    items: cabc.Iterable[NavigationItem],
) -> list[dict[str, typ.Any]]:
    """Serialize navigation items into JSON-ready dictionaries."""
    return [item.to_dict() for item in items]


def iter_items(
    items: cabc.Iterable[NavigationItem],
) -> cabc.Iterator[NavigationItem]:
    """Yield every item of the tree in depth-first display order."""
    for item in items:
        yield item
        if item.children:
            yield from iter_items(item.children)


__all__ = [
    "DirectorySection",
    "NavigationItem",
    "NavigationTreeBuilder",
    "iter_items",
    "mark_active",
    "navigation_to_dicts",
]
