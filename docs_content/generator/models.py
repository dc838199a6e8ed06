"""Shared dataclasses used by the render pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ


@dc.dataclass(slots=True)
class TocEntry:
    """One heading of a rendered document's table of contents.

    Attributes
    ----------
    title : str
        Plain-text heading label.
    anchor : str
        ``id`` attribute assigned to the heading.
    level : int
        Heading level (1-6).
    children : list[TocEntry]
        Nested lower-level headings.
    """

    title: str
    anchor: str
    level: int
    children: list[TocEntry] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class RenderedDocument:
    """Structured output handed to the presentation layer.

    Attributes
    ----------
    virtual_path : str
        Store address of the source document.
    path : str
        Public route of the source document.
    title : str
        Front-matter title, else the first heading, else the humanized name.
    metadata : dict[str, Any]
        Decoded front matter.
    html : str
        Rendered body markup.
    toc : list[TocEntry]
        Heading tree of the body.
    """

    virtual_path: str
    path: str
    title: str
    metadata: dict[str, typ.Any]
    html: str
    toc: list[TocEntry]

    @property
    def description(self) -> str | None:
        """Return the front-matter description when it is a non-empty string."""
        value = self.metadata.get("description")
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None


__all__ = ["RenderedDocument", "TocEntry"]
