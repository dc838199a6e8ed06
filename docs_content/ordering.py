r"""Ordering-prefix handling shared by the resolver and navigation builder.

Content files and directories carry a leading ``<digits>.`` token that only
controls sort order (``5.database``, ``3.migrations.md``). Every component that
needs the public name or the sort position of a segment goes through
:func:`strip_ordering_prefix` so that route resolution and navigation always
agree on both.

Example
-------
>>> from docs_content.ordering import strip_ordering_prefix
>>> strip_ordering_prefix("5.database")
OrderedName(order=5, clean='database', raw='5.database')
>>> strip_ordering_prefix("guides").order
999999
"""

from __future__ import annotations

import dataclasses as dc
import re

from ._constants import MARKDOWN_SUFFIX, UNORDERED

ORDERING_PREFIX_PATTERN = re.compile(r"^(\d+)\.(.+)$", re.DOTALL)
WORD_SEPARATOR_PATTERN = re.compile(r"[-_]")


@dc.dataclass(slots=True, frozen=True)
class OrderedName:
    """A path segment split into its sort position and public name.

    Attributes
    ----------
    order : int
        Integer taken from the ordering prefix, or ``UNORDERED`` when the
        segment carries none.
    clean : str
        Segment with the prefix removed.
    raw : str
        Segment exactly as stored.
    """

    order: int
    clean: str
    raw: str

    @property
    def has_prefix(self) -> bool:
        """Return True when the segment carried an explicit ordering prefix."""
        return self.clean != self.raw


def strip_ordering_prefix(segment: str) -> OrderedName:
    """Split ``segment`` into its numeric ordering prefix and clean name.

    Parameters
    ----------
    segment : str
        A single directory or file name such as ``"6.extensions"``.

    Returns
    -------
    OrderedName
        The parsed order (``UNORDERED`` when absent) and the prefix-free name.
        A segment consisting only of digits and a dot (``"3."``) has no name
        left to expose and is returned unchanged.
    """
    match = ORDERING_PREFIX_PATTERN.match(segment)
    if not match:
        return OrderedName(order=UNORDERED, clean=segment, raw=segment)
    return OrderedName(order=int(match.group(1)), clean=match.group(2), raw=segment)


def strip_markdown_suffix(name: str) -> str:
    """Return ``name`` without a trailing ``.md`` extension."""
    if name.endswith(MARKDOWN_SUFFIX) and len(name) > len(MARKDOWN_SUFFIX):
        return name[: -len(MARKDOWN_SUFFIX)]
    return name


def parse_file_name(name: str) -> OrderedName:
    """Parse a document file name, dropping the extension before the prefix.

    ``"3.migrations.md"`` becomes ``OrderedName(3, "migrations", ...)`` while
    ``"12.md"`` keeps ``"12"`` as its name instead of losing it to the prefix.
    """
    parsed = strip_ordering_prefix(strip_markdown_suffix(name))
    return OrderedName(order=parsed.order, clean=parsed.clean, raw=name)


def split_route(route_path: str) -> list[str]:
    """Split a public route into its non-empty segments.

    Raises
    ------
    TypeError
        If ``route_path`` is not a string.
    """
    if not isinstance(route_path, str):
        msg = f"Route path must be a string, got {type(route_path).__name__}."
        raise TypeError(msg)
    return [segment for segment in route_path.strip().split("/") if segment]


def normalize_route(route_path: str) -> str:
    """Return the canonical form of a route: leading slash, no trailing slash."""
    return "/" + "/".join(split_route(route_path))


def humanize_name(clean_name: str) -> str:
    """Turn a clean segment name into a display title.

    Hyphens and underscores become spaces and the first letter of each word is
    upper-cased; the remaining letters are left as written.

    >>> humanize_name("getting-started")
    'Getting Started'
    >>> humanize_name("api_reference")
    'Api Reference'
    """
    words = WORD_SEPARATOR_PATTERN.sub(" ", clean_name).split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def sibling_sort_key(name: OrderedName) -> tuple[int, str]:
    """Return the ``(order, raw name)`` key used to order siblings."""
    return (name.order, name.raw)


__all__ = [
    "ORDERING_PREFIX_PATTERN",
    "OrderedName",
    "humanize_name",
    "normalize_route",
    "parse_file_name",
    "sibling_sort_key",
    "split_route",
    "strip_markdown_suffix",
    "strip_ordering_prefix",
]
