"""Content resolution and navigation synthesis for Markdown documentation.

The package loads a tree of numerically ordered Markdown files into an
immutable store, resolves public routes such as ``/database/migrations`` to the
stored document, and builds the ordered sidebar navigation with the ordering
prefixes hidden.

Exports
-------
- ``ContentLibrary``: snapshot holder offering ``resolve`` and ``navigation``.
- ``ContentStore`` / ``load_content_store``: the in-memory content snapshot.
- ``ContentPathResolver``: route to document lookup.
- ``NavigationTreeBuilder`` / ``NavigationItem``: sidebar tree synthesis.
- ``parse_front_matter``: the metadata block decoder.
- ``strip_ordering_prefix``: shared ordering-prefix parser.

Examples
--------
>>> from docs_content import ContentLibrary, ContentStore
>>> library = ContentLibrary(ContentStore({"/content/1.start/2.setup.md": ""}))
>>> library.resolve("/start/setup").virtual_path
'/content/1.start/2.setup.md'
"""

from __future__ import annotations

from .frontmatter import FrontMatter, parse_front_matter
from .library import ContentLibrary, ContentSnapshot
from .navigation import NavigationItem, NavigationTreeBuilder, mark_active
from .ordering import OrderedName, strip_ordering_prefix
from .resolver import ContentPathResolver
from .store import ContentStore, Document, load_content_store

__all__ = [
    "ContentLibrary",
    "ContentPathResolver",
    "ContentSnapshot",
    "ContentStore",
    "Document",
    "FrontMatter",
    "NavigationItem",
    "NavigationTreeBuilder",
    "OrderedName",
    "load_content_store",
    "mark_active",
    "parse_front_matter",
    "strip_ordering_prefix",
]
