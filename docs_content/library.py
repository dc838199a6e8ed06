"""Hold the process-wide content snapshot and swap it atomically on reload.

:class:`ContentLibrary` pairs a :class:`~docs_content.store.ContentStore` with
the resolver and navigation builder computed from it. The three are published
together as one immutable snapshot, so a reload never exposes a resolver built
from one store next to a navigation tree built from another.

>>> from docs_content.library import ContentLibrary
>>> from docs_content.store import ContentStore
>>> library = ContentLibrary(ContentStore({"/content/index.md": "# Home\\n"}))
>>> library.resolve("/").virtual_path
'/content/index.md'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from ._constants import DEFAULT_VIRTUAL_ROOT
from .navigation import NavigationTreeBuilder, mark_active
from .resolver import ContentPathResolver
from .store import ContentStore, load_content_store

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .navigation import NavigationItem
    from .store import Document

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True, frozen=True)
class ContentSnapshot:
    """A store together with the components derived from it."""

    store: ContentStore
    resolver: ContentPathResolver
    navigation: NavigationTreeBuilder

    @classmethod
    def from_store(cls, store: ContentStore) -> ContentSnapshot:
        """Derive the resolver and navigation builder for ``store``."""
        return cls(
            store=store,
            resolver=ContentPathResolver(store),
            navigation=NavigationTreeBuilder(store),
        )


class ContentLibrary:
    """Entry point for route resolution and navigation over live content.

    Parameters
    ----------
    store : ContentStore
        Initial snapshot.
    content_dir : Path, optional
        Directory the snapshot was loaded from; required by :meth:`reload`.
    """

    def __init__(
        self, store: ContentStore, *, content_dir: Path | None = None
    ) -> None:
        self.content_dir = content_dir
        self._snapshot = ContentSnapshot.from_store(store)

    @classmethod
    def from_directory(
        cls, content_dir: Path, *, virtual_root: str = DEFAULT_VIRTUAL_ROOT
    ) -> ContentLibrary:
        """Load ``content_dir`` and return a library serving it."""
        store = load_content_store(content_dir, virtual_root=virtual_root)
        return cls(store, content_dir=content_dir)

    @property
    def snapshot(self) -> ContentSnapshot:
        """Return the current snapshot; hold on to it for consistent reads."""
        return self._snapshot

    @property
    def store(self) -> ContentStore:
        """Return the current content store."""
        return self._snapshot.store

    def resolve(self, route_path: str) -> Document | None:
        """Resolve ``route_path`` against the current snapshot."""
        return self._snapshot.resolver.resolve(route_path)

    def navigation(self, active_path: str | None = None) -> list[NavigationItem]:
        """Return the navigation tree, optionally marked for ``active_path``."""
        items = self._snapshot.navigation.build()
        if active_path is None:
            return items
        return mark_active(items, active_path)

    def replace(self, store: ContentStore) -> ContentSnapshot:
        """Publish ``store`` as the new snapshot and return it."""
        snapshot = ContentSnapshot.from_store(store)
        self._snapshot = snapshot
        return snapshot

    def reload(self) -> ContentSnapshot:
        """Reload content from :attr:`content_dir` and swap it in wholesale.

        Raises
        ------
        RuntimeError
            If the library was not created from a directory.
        """
        if self.content_dir is None:
            msg = "Cannot reload a library that was not loaded from a directory."
            raise RuntimeError(msg)
        store = load_content_store(
            self.content_dir, virtual_root=self._snapshot.store.virtual_root
        )
        logger.info("Reloaded content from %s", self.content_dir)
        return self.replace(store)


__all__ = ["ContentLibrary", "ContentSnapshot"]
