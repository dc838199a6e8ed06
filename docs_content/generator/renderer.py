"""Render stored documents into markup and a heading tree."""

from __future__ import annotations

import re
import typing as typ
from html import escape, unescape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from docs_content.ordering import humanize_name

from .link_rewriter import ContentLinkExtension
from .models import RenderedDocument, TocEntry

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension

    from docs_content.store import ContentStore, Document
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

# Fence lines may be indented up to three spaces (list items) and carry
# comma-separated attributes after the language (```rust,no_run).
FENCE_LINE_PATTERN = re.compile(
    r"^ {0,3}(?P<fence>`{3,}|~{3,})(?P<info>[^\r\n]*)(?=\r?$)", re.MULTILINE
)
HIGHLIGHT_BLOCK_TAG = '<div class="codehilite">'
TAG_PATTERN = re.compile(r"<[^>]+>")
BASE_EXTENSIONS = ("fenced_code", "codehilite", "tables", "sane_lists", "toc")


class DocumentRenderer:
    """Convert document bodies to HTML with consistent highlighting."""

    def __init__(
        self, pygments_style: str = "monokai", store: ContentStore | None = None
    ) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        pygments_style : str, optional
            Pygments style applied to highlighted code, ``"monokai"`` unless
            the site configuration says otherwise.
        store : ContentStore, optional
            Store used to rewrite links between documents to public routes;
            pass ``None`` to leave links untouched.
        """
        self.pygments_style = pygments_style
        self.store = store
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(self, document: Document) -> RenderedDocument:
        """Render ``document`` with its front matter stripped.

        Returns
        -------
        RenderedDocument
            Metadata, body markup, heading tree, and resolved title.
        """
        link_extension = None
        if self.store is not None:
            link_extension = ContentLinkExtension(document.virtual_path, self.store)
        html, toc = self.markdown(document.body, link_extension=link_extension)
        metadata = document.metadata
        title = metadata.get("title")
        if not isinstance(title, str) or not title.strip():
            title = toc[0].title if toc else humanize_name(_fallback_name(document))
        return RenderedDocument(
            virtual_path=document.virtual_path,
            path=document.public_path,
            title=title.strip(),
            metadata=metadata,
            html=html,
            toc=toc,
        )

    def markdown(
        self, text: str, *, link_extension: Extension | None = None
    ) -> tuple[str, list[TocEntry]]:
        """Convert ``text`` to HTML and return it with its heading tree."""
        source = normalize_fences(text)
        if not source.strip():
            return "", []
        extensions: list[Extension | str] = list(BASE_EXTENSIONS)
        if link_extension is not None:
            extensions.append(link_extension)
        converter = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "css_class": "codehilite",
                    "guess_lang": False,
                    "linenums": False,
                    "pygments_style": self.pygments_style,
                }
            },
        )
        html = label_code_blocks(converter.convert(source), fence_languages(source))
        toc = [_toc_entry(token) for token in getattr(converter, "toc_tokens", [])]
        return html, toc


def normalize_fences(text: str) -> str:
    """Unindent fence lines and drop attributes after the fence language."""

    def _clean(match: re.Match[str]) -> str:
        info = match["info"]
        if "," in info:
            info = info.split(",", 1)[0]
        return f"{match['fence']}{info}"

    return FENCE_LINE_PATTERN.sub(_clean, text)


def fence_languages(text: str) -> list[str]:
    """Return the language named by each fenced block, ``"text"`` when unset."""
    languages: list[str] = []
    opening: str | None = None
    for match in FENCE_LINE_PATTERN.finditer(text):
        fence = match["fence"]
        info = match["info"].strip()
        if opening is None:
            opening = fence
            languages.append(info.split(maxsplit=1)[0] if info else "text")
        elif fence[0] == opening[0] and len(fence) >= len(opening) and not info:
            opening = None
    return languages


def label_code_blocks(html: str, languages: list[str]) -> str:
    """Add ``data-language`` to highlighted blocks, matching them in order."""
    if not languages:
        return html
    pending = iter(languages)

    def _label(_match: re.Match[str]) -> str:
        language = escape(next(pending, "text"), quote=True)
        return f'<div class="codehilite" data-language="{language}">'

    return re.sub(re.escape(HIGHLIGHT_BLOCK_TAG), _label, html, count=len(languages))


def _toc_entry(token: dict[str, typ.Any]) -> TocEntry:
    """Convert a Python-Markdown toc token into a TocEntry."""
    name = unescape(TAG_PATTERN.sub("", str(token.get("name", ""))))
    return TocEntry(
        title=name.strip(),
        anchor=str(token.get("id", "")),
        level=int(token.get("level", 1)),
        children=[_toc_entry(child) for child in token.get("children", [])],
    )


def _fallback_name(document: Document) -> str:
    """Return the clean name used when a document has no title or heading."""
    if document.is_index and document.directory_segments:
        return document.directory_segments[-1].clean
    return document.file_name.clean


__all__ = [
    "DocumentRenderer",
    "fence_languages",
    "label_code_blocks",
    "normalize_fences",
]
