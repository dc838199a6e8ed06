"""Tests for document rendering, link rewriting, and route queries.

Rendering strips front matter, converts Markdown through Python-Markdown with
Pygments highlighting, collects the heading tree, and rewrites relative links
between stored documents to their public routes.

Usage
-----
Run ``pytest tests/test_renderer.py -v``.
"""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from docs_content.generator import ContentQuery, DocumentRenderer
from docs_content.generator.renderer import fence_languages, normalize_fences
from docs_content.resolver import ContentPathResolver
from docs_content.store import ContentStore

SITE = {
    "/content/1.start/1.index.md": (
        "---\n"
        "title: Introduction\n"
        "description: Where to begin\n"
        "---\n"
        "# Welcome\n\n"
        "Read the [setup guide](2.setup.md#requirements) or the\n"
        "[migrations](../5.database/3.migrations.md), or visit\n"
        "[the project](https://example.com/docs.md).\n\n"
        "## Next steps\n\n"
        "### Deeper\n"
    ),
    "/content/1.start/2.setup.md": (
        "# Setup\n\n"
        "```bash\n"
        "pip install docs-content\n"
        "```\n\n"
        "See [a missing page](9.missing.md).\n"
    ),
    "/content/5.database/1.index.md": "",
    "/content/5.database/3.migrations.md": "Plain text only.\n",
}


@pytest.fixture
def store() -> ContentStore:
    """Return the shared synthetic store."""
    return ContentStore(SITE)


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_render_uses_front_matter_title_and_strips_block(store: ContentStore) -> None:
    """Front matter supplies the title and never reaches the body markup."""
    document = store.get("/content/1.start/1.index.md")
    assert document is not None
    rendered = DocumentRenderer(store=store).render(document)
    assert rendered.title == "Introduction"
    assert rendered.path == "/start"
    assert rendered.description == "Where to begin"
    assert "title:" not in rendered.html
    assert _soup(rendered.html).find("h1").get_text() == "Welcome"


def test_render_collects_heading_tree(store: ContentStore) -> None:
    """Headings are nested by level with their anchors."""
    document = store.get("/content/1.start/1.index.md")
    assert document is not None
    toc = DocumentRenderer(store=store).render(document).toc
    assert [entry.title for entry in toc] == ["Welcome"]
    assert toc[0].anchor == "welcome"
    next_steps = toc[0].children[0]
    assert (next_steps.title, next_steps.level) == ("Next steps", 2)
    assert [child.title for child in next_steps.children] == ["Deeper"]


def test_render_rewrites_links_between_documents(store: ContentStore) -> None:
    """Relative ``.md`` links become public routes; others are untouched."""
    document = store.get("/content/1.start/1.index.md")
    assert document is not None
    soup = _soup(DocumentRenderer(store=store).render(document).html)
    hrefs = [anchor["href"] for anchor in soup.find_all("a")]
    assert hrefs == [
        "/start/setup#requirements",
        "/database/migrations",
        "https://example.com/docs.md",
    ]


def test_unknown_link_targets_are_left_alone(store: ContentStore) -> None:
    """Links to files missing from the store keep their original href."""
    document = store.get("/content/1.start/2.setup.md")
    assert document is not None
    soup = _soup(DocumentRenderer(store=store).render(document).html)
    assert soup.find("a")["href"] == "9.missing.md"


def test_renderer_without_store_keeps_links(store: ContentStore) -> None:
    """Link rewriting only runs when a store is supplied."""
    document = store.get("/content/1.start/1.index.md")
    assert document is not None
    soup = _soup(DocumentRenderer().render(document).html)
    assert soup.find("a")["href"] == "2.setup.md#requirements"


def test_code_blocks_are_highlighted_with_language(store: ContentStore) -> None:
    """Fenced code renders as a codehilite block labelled with its language."""
    document = store.get("/content/1.start/2.setup.md")
    assert document is not None
    rendered = DocumentRenderer(store=store).render(document)
    block = _soup(rendered.html).select_one("div.codehilite")
    assert block is not None, "expected a highlighted code block"
    assert block.get("data-language") == "bash"
    assert "pip install docs-content" in block.get_text()
    assert rendered.title == "Setup"


@pytest.mark.parametrize(
    ("virtual_path", "expected"),
    [
        ("/content/5.database/3.migrations.md", "Migrations"),
        ("/content/5.database/1.index.md", "Database"),
    ],
)
def test_title_falls_back_to_clean_name(
    store: ContentStore, virtual_path: str, expected: str
) -> None:
    """Without a title or heading the humanized clean name is used."""
    document = store.get(virtual_path)
    assert document is not None
    assert DocumentRenderer(store=store).render(document).title == expected


def test_empty_body_renders_to_empty_markup(store: ContentStore) -> None:
    """A document with no body yields no markup and no headings."""
    document = store.get("/content/5.database/1.index.md")
    assert document is not None
    rendered = DocumentRenderer(store=store).render(document)
    assert rendered.html == ""
    assert rendered.toc == []


def test_stylesheet_targets_codehilite() -> None:
    """The Pygments stylesheet is scoped to ``.codehilite``."""
    assert ".codehilite" in DocumentRenderer(pygments_style="default").stylesheet


def test_query_find_one_and_find(store: ContentStore) -> None:
    """Queries resolve routes and patterns to rendered documents."""
    query = ContentQuery(ContentPathResolver(store))
    rendered = query.find_one("/database/migrations")
    assert rendered is not None
    assert rendered.virtual_path == "/content/5.database/3.migrations.md"
    assert query.find_one("/nonexistent/page") is None
    assert [page.path for page in query.find(r"/1\.start/")] == [
        "/start",
        "/start/setup",
    ]


def test_indented_fence_with_attributes_is_highlighted() -> None:
    """Fences nested in list items keep their language after normalization."""
    html, _toc = DocumentRenderer().markdown(
        "- **Example** demonstrates code\n\n"
        "  ```rust,no_run\n"
        '  fn main() { println!("hi"); }\n'
        "  ```\n"
    )
    blocks = _soup(html).select("div.codehilite")
    assert [block.get("data-language") for block in blocks] == ["rust"]
    assert "fn main" in blocks[0].get_text()


def test_fence_helpers() -> None:
    """Fence normalization and language detection agree on block boundaries."""
    source = "  ```rust,no_run\nx\n  ```\n\n~~~\nplain\n~~~\n````md\n```\n````\n"
    normalized = normalize_fences(source)
    assert normalized.splitlines()[0] == "```rust"
    assert normalized.splitlines()[2] == "```"
    assert fence_languages(normalized) == ["rust", "text", "md"]
