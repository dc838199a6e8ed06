"""Immutable in-memory snapshot of every content file under the content root.

The store maps virtual paths such as ``/content/5.database/3.migrations.md`` to
raw file text. It is populated once, either from a mapping (tests, embedding
applications) or by :func:`load_content_store` walking a directory on disk, and
never changes afterwards. Reloading content means building a new store and
swapping it in wholesale (see :mod:`docs_content.library`).

Typical usage:

>>> from docs_content.store import ContentStore
>>> store = ContentStore({"/content/1.start/2.setup.md": "# Setup\\n"})
>>> store.get("/content/1.start/2.setup.md").public_path
'/start/setup'
"""

from __future__ import annotations

import dataclasses as dc
import functools
import logging
import posixpath
import types
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import (
    DEFAULT_VIRTUAL_ROOT,
    INDEX_STEM,
    MARKDOWN_SUFFIX,
    NAVIGATION_CONFIG_NAME,
)
from .frontmatter import FrontMatter, parse_front_matter
from .ordering import OrderedName, parse_file_name, strip_ordering_prefix

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True, frozen=True)
class PathSegment:
    """One component of a document's path relative to the content root.

    Attributes
    ----------
    name : OrderedName
        Parsed ordering prefix and clean name. File segments have their
        ``.md`` extension removed from ``name.clean``.
    is_file : bool
        True for the final (file) segment, False for directories.
    """

    name: OrderedName
    is_file: bool

    @property
    def raw(self) -> str:
        """Return the segment exactly as stored."""
        return self.name.raw

    @property
    def clean(self) -> str:
        """Return the public, prefix-free name."""
        return self.name.clean

    @property
    def order(self) -> int:
        """Return the numeric ordering position."""
        return self.name.order


@dc.dataclass(frozen=True, eq=False)
class Document:
    """A single Markdown document held by the content store.

    Documents compare by identity: the store creates exactly one per virtual
    path. Front matter is parsed lazily on first access and cached.
    """

    virtual_path: str
    raw_text: str
    relative_path: str

    @functools.cached_property
    def segments(self) -> tuple[PathSegment, ...]:
        """Return the parsed segments of the path below the content root."""
        parts = self.relative_path.split("/")
        directories = tuple(
            PathSegment(strip_ordering_prefix(part), is_file=False)
            for part in parts[:-1]
        )
        return (*directories, PathSegment(parse_file_name(parts[-1]), is_file=True))

    @functools.cached_property
    def front_matter(self) -> FrontMatter:
        """Return the parsed front matter and body."""
        return parse_front_matter(self.raw_text)

    @property
    def metadata(self) -> dict[str, typ.Any]:
        """Return the decoded front-matter metadata."""
        return self.front_matter.metadata

    @property
    def body(self) -> str:
        """Return the document text with the front-matter block removed."""
        return self.front_matter.body

    @property
    def file_name(self) -> PathSegment:
        """Return the final (file) segment."""
        return self.segments[-1]

    @property
    def is_index(self) -> bool:
        """Return True for ``index.md`` and ``<prefix>.index.md`` documents."""
        return self.file_name.clean == INDEX_STEM

    @property
    def directory_segments(self) -> tuple[PathSegment, ...]:
        """Return the directory segments leading to this document."""
        return self.segments[:-1]

    @property
    def public_path(self) -> str:
        """Return the prefix-free route at which this document is published.

        Index documents are published at their directory's route; the content
        root's own index is published at ``/``.
        """
        names = [segment.clean for segment in self.directory_segments]
        if not self.is_index:
            names.append(self.file_name.clean)
        return "/" + "/".join(names)

    def __repr__(self) -> str:
        return f"Document({self.virtual_path!r})"


class ContentStore:
    """Read-only mapping from virtual path to raw content text.

    Parameters
    ----------
    files : Mapping[str, str]
        Virtual path to file text. Keys must live below ``virtual_root``.
        Markdown files become :class:`Document` objects; ``.navigation.yml``
        files are kept as per-directory navigation settings.
    virtual_root : str, optional
        Prefix shared by every virtual path. Defaults to ``/content``.

    Raises
    ------
    ValueError
        If a key is not located below ``virtual_root``.
    """

    def __init__(
        self,
        files: cabc.Mapping[str, str],
        *,
        virtual_root: str = DEFAULT_VIRTUAL_ROOT,
    ) -> None:
        self.virtual_root = "/" + virtual_root.strip("/")
        prefix = f"{self.virtual_root}/"
        documents: dict[str, Document] = {}
        navigation_sources: dict[str, str] = {}
        for virtual_path in sorted(files):
            if not virtual_path.startswith(prefix) or virtual_path == prefix:
                msg = (
                    f"Content path '{virtual_path}' is outside the virtual root "
                    f"'{self.virtual_root}'."
                )
                raise ValueError(msg)
            relative = virtual_path[len(prefix) :]
            text = files[virtual_path]
            name = posixpath.basename(relative)
            if name == NAVIGATION_CONFIG_NAME:
                navigation_sources[posixpath.dirname(relative)] = text
            elif name.endswith(MARKDOWN_SUFFIX) and not name.startswith("."):
                documents[virtual_path] = Document(
                    virtual_path=virtual_path, raw_text=text, relative_path=relative
                )
        self._files = types.MappingProxyType(dict(files))
        self._documents = types.MappingProxyType(documents)
        self._navigation_sources = types.MappingProxyType(navigation_sources)
        self._navigation_configs: dict[str, dict[str, typ.Any]] = {}

    @property
    def files(self) -> cabc.Mapping[str, str]:
        """Return the read-only view of every stored file."""
        return self._files

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, virtual_path: object) -> bool:
        return virtual_path in self._documents

    def __iter__(self) -> cabc.Iterator[Document]:
        return iter(self._documents.values())

    def paths(self) -> list[str]:
        """Return every document's virtual path in lexical order."""
        return list(self._documents)

    def documents(self) -> list[Document]:
        """Return every document, ordered by virtual path."""
        return list(self._documents.values())

    def get(self, virtual_path: str) -> Document | None:
        """Return the document stored at ``virtual_path`` or None."""
        return self._documents.get(virtual_path)

    def navigation_config(self, relative_dir: str) -> dict[str, typ.Any]:
        """Return the parsed ``.navigation.yml`` for a directory below the root.

        Parameters
        ----------
        relative_dir : str
            Raw directory path relative to the content root, for example
            ``"6.extensions"`` or ``"2.guides/1.basics"``.

        Returns
        -------
        dict[str, Any]
            Parsed settings, or an empty dict when the directory has no file or
            the file is not a YAML mapping.
        """
        if relative_dir in self._navigation_configs:
            return self._navigation_configs[relative_dir]
        source = self._navigation_sources.get(relative_dir)
        parsed: dict[str, typ.Any] = {}
        if source is not None:
            parsed = _parse_navigation_yaml(source, relative_dir)
        self._navigation_configs[relative_dir] = parsed
        return parsed

    def __repr__(self) -> str:
        return f"ContentStore({len(self)} documents under {self.virtual_root!r})"


def _parse_navigation_yaml(source: str, relative_dir: str) -> dict[str, typ.Any]:
    """Parse a ``.navigation.yml`` payload, returning {} for unusable content."""
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(source)
    except YAMLError as exc:
        logger.warning(
            "Ignoring unparsable %s in '%s': %s",
            NAVIGATION_CONFIG_NAME,
            relative_dir,
            exc,
        )
        return {}
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        logger.warning(
            "Ignoring %s in '%s': expected a mapping",
            NAVIGATION_CONFIG_NAME,
            relative_dir,
        )
        return {}
    return dict(loaded)


def load_content_store(
    root: Path, *, virtual_root: str = DEFAULT_VIRTUAL_ROOT
) -> ContentStore:
    """Walk ``root`` and return a store holding every content file below it.

    Parameters
    ----------
    root : Path
        Directory containing the numerically ordered Markdown tree.
    virtual_root : str, optional
        Prefix assigned to the loaded paths, ``/content`` by default, so that
        ``root / "5.database/3.migrations.md"`` is stored as
        ``/content/5.database/3.migrations.md``.

    Returns
    -------
    ContentStore
        Snapshot of all ``*.md`` and ``.navigation.yml`` files, read as UTF-8.

    Raises
    ------
    FileNotFoundError
        If ``root`` does not exist or is not a directory.
    """
    if not root.is_dir():
        msg = f"Content directory '{root}' not found."
        raise FileNotFoundError(msg)

    prefix = "/" + virtual_root.strip("/")
    files: dict[str, str] = {}
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        if path.suffix != MARKDOWN_SUFFIX and path.name != NAVIGATION_CONFIG_NAME:
            continue
        relative = path.relative_to(root).as_posix()
        files[f"{prefix}/{relative}"] = path.read_text(encoding="utf-8")

    store = ContentStore(files, virtual_root=prefix)
    logger.info("Loaded %d documents from %s", len(store), root)
    return store


__all__ = ["ContentStore", "Document", "PathSegment", "load_content_store"]
