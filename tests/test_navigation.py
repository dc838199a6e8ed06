"""Unit tests for navigation tree synthesis.

The tests cover section discovery, sibling ordering and prefix collisions,
title/icon/badge extraction, ``.navigation.yml`` fallbacks, hidden pages, and
the active-route marking helper.

Usage
-----
Run ``pytest tests/test_navigation.py -v``.
"""

from __future__ import annotations

import logging

import pytest

from docs_content.navigation import (
    NavigationTreeBuilder,
    iter_items,
    mark_active,
    navigation_to_dicts,
)
from docs_content.store import ContentStore


def _build(files: dict[str, str]) -> list[dict[str, object]]:
    """Return the serialized navigation for ``files``."""
    return navigation_to_dicts(NavigationTreeBuilder(ContentStore(files)).build())


def test_section_with_index_and_page() -> None:
    """A prefixed directory becomes a section titled from its index."""
    tree = _build(
        {
            "/content/1.start/1.index.md": "---\ntitle: Introduction\n---\n",
            "/content/1.start/2.setup.md": "Setup body\n",
        }
    )
    assert tree == [
        {
            "title": "Introduction",
            "path": "/start",
            "children": [{"title": "Setup", "path": "/start/setup"}],
        }
    ]


def test_shared_prefix_orders_by_raw_name(caplog: pytest.LogCaptureFixture) -> None:
    """Siblings sharing a prefix are ordered by raw name and a warning is logged."""
    with caplog.at_level(logging.WARNING, logger="docs_content.navigation"):
        tree = _build(
            {
                "/content/2.tutorials/index.md": "",
                "/content/2.guides/index.md": "",
                "/content/1.start/index.md": "",
            }
        )
    assert [item["path"] for item in tree] == ["/start", "/guides", "/tutorials"]
    assert "Ordering prefix 2 is shared" in caplog.text


def test_numeric_prefixes_sort_numerically() -> None:
    """Prefix ``10`` sorts after ``9`` despite lexical order."""
    tree = _build(
        {
            "/content/10.appendix/index.md": "",
            "/content/9.reference/index.md": "",
            "/content/1.start/index.md": "",
        }
    )
    assert [item["path"] for item in tree] == ["/start", "/reference", "/appendix"]


def test_children_order_merges_pages_and_subdirectories() -> None:
    """Pages and nested directories are interleaved by their prefixes."""
    tree = _build(
        {
            "/content/2.guides/1.writing.md": "",
            "/content/2.guides/3.advanced/1.index.md": "---\ntitle: Advanced\n---\n",
            "/content/2.guides/3.advanced/2.ordering.md": "",
            "/content/2.guides/4.publishing.md": "",
            "/content/2.guides/2.linking.md": "",
        }
    )
    guides = tree[0]
    assert guides["title"] == "Guides"
    assert [child["path"] for child in guides["children"]] == [
        "/guides/writing",
        "/guides/linking",
        "/guides/advanced",
        "/guides/publishing",
    ]
    advanced = guides["children"][2]
    assert advanced["title"] == "Advanced"
    assert advanced["children"] == [
        {"title": "Ordering", "path": "/guides/advanced/ordering"}
    ]


def test_unprefixed_nested_entries_sort_last() -> None:
    """Nested names without a prefix follow every prefixed sibling."""
    tree = _build(
        {
            "/content/1.start/appendix.md": "",
            "/content/1.start/2.setup.md": "",
            "/content/1.start/1.index.md": "",
        }
    )
    assert [child["path"] for child in tree[0]["children"]] == [
        "/start/setup",
        "/start/appendix",
    ]


def test_icon_and_badge_from_front_matter() -> None:
    """Icons and badges come from ``navigation.*`` keys or top-level keys."""
    tree = _build(
        {
            "/content/1.start/1.index.md": (
                "---\ntitle: Start\nnavigation:\n  icon: i-lucide-house\n---\n"
            ),
            "/content/1.start/2.setup.md": "---\nnavigation.badge: new\n---\n",
            "/content/1.start/3.faq.md": "---\nicon: i-lucide-help\n---\n",
        }
    )
    section = tree[0]
    assert section["icon"] == "i-lucide-house"
    setup, faq = section["children"]
    assert setup == {"title": "Setup", "path": "/start/setup", "badge": "new"}
    assert faq == {"title": "Faq", "path": "/start/faq", "icon": "i-lucide-help"}


def test_navigation_yml_supplies_section_defaults() -> None:
    """``.navigation.yml`` provides the title and icon when no index does."""
    tree = _build(
        {
            "/content/2.guides/.navigation.yml": "title: Guides\nicon: i-lucide-book\n",
            "/content/2.guides/1.writing-pages.md": "",
        }
    )
    assert tree == [
        {
            "title": "Guides",
            "path": "/guides",
            "icon": "i-lucide-book",
            "children": [{"title": "Writing Pages", "path": "/guides/writing-pages"}],
        }
    ]


def test_index_title_wins_over_navigation_yml() -> None:
    """Front matter takes precedence over directory settings."""
    tree = _build(
        {
            "/content/2.guides/.navigation.yml": "title: From YAML\n",
            "/content/2.guides/index.md": "---\ntitle: From Index\n---\n",
        }
    )
    assert tree[0]["title"] == "From Index"


def test_hidden_pages_are_omitted() -> None:
    """``navigation: false`` removes a page from the tree but not the store."""
    files = {
        "/content/1.start/1.index.md": "",
        "/content/1.start/2.setup.md": "",
        "/content/1.start/3.secret.md": "---\nnavigation: false\n---\n",
    }
    tree = _build(files)
    assert [child["path"] for child in tree[0]["children"]] == ["/start/setup"]


def test_section_without_pages_keeps_empty_children() -> None:
    """A directory holding only an index is still listed, with no children."""
    tree = _build({"/content/3.changelog/index.md": "---\ntitle: Changes\n---\n"})
    assert tree == [{"title": "Changes", "path": "/changelog", "children": []}]


def test_directory_without_content_is_dropped() -> None:
    """A directory with neither index nor visible pages is not listed."""
    tree = _build(
        {
            "/content/1.start/index.md": "",
            "/content/2.drafts/1.draft.md": "---\nnavigation: false\n---\n",
        }
    )
    assert [item["path"] for item in tree] == ["/start"]


def test_unprefixed_top_level_and_root_files_are_excluded() -> None:
    """Only prefixed top-level directories form sections."""
    tree = _build(
        {
            "/content/index.md": "# Home\n",
            "/content/1.about.md": "",
            "/content/misc/notes.md": "",
            "/content/1.start/index.md": "",
        }
    )
    assert [item["path"] for item in tree] == ["/start"]


def test_build_is_memoized_and_returns_fresh_lists() -> None:
    """Repeated builds share items but hand back independent lists."""
    builder = NavigationTreeBuilder(ContentStore({"/content/1.a/index.md": ""}))
    first = builder.build()
    second = builder.build()
    assert first == second
    assert first is not second
    assert first[0] is second[0]


def test_build_is_deterministic_across_builders() -> None:
    """Two builders over equal stores produce equal trees."""
    files = {
        "/content/2.b/index.md": "",
        "/content/1.a/2.y.md": "",
        "/content/1.a/1.x.md": "",
    }
    first = NavigationTreeBuilder(ContentStore(files)).build()
    second = NavigationTreeBuilder(ContentStore(dict(reversed(files.items())))).build()
    assert navigation_to_dicts(first) == navigation_to_dicts(second)


def test_mark_active_returns_a_new_tree() -> None:
    """Marking the active route copies items and leaves the input untouched."""
    items = NavigationTreeBuilder(
        ContentStore(
            {
                "/content/1.start/1.index.md": "",
                "/content/1.start/2.setup.md": "",
            }
        )
    ).build()
    marked = mark_active(items, "/start/setup/")
    assert [item.active for item in iter_items(marked)] == [False, True]
    assert not any(item.active for item in iter_items(items))
    assert marked[0].children is not None
    assert marked[0].children[0].to_dict()["active"] is True


def test_iter_items_walks_depth_first() -> None:
    """``iter_items`` yields parents before their children."""
    items = NavigationTreeBuilder(
        ContentStore(
            {
                "/content/1.a/1.index.md": "",
                "/content/1.a/2.b/index.md": "",
                "/content/1.a/2.b/1.c.md": "",
                "/content/2.d/index.md": "",
            }
        )
    ).build()
    assert [item.path for item in iter_items(items)] == ["/a", "/a/b", "/a/b/c", "/d"]


def test_sibling_order_is_stable_under_resorting() -> None:
    """Re-sorting any built sibling set by prefix and stem changes nothing."""
    items = NavigationTreeBuilder(
        ContentStore(
            {
                "/content/3.c/index.md": "",
                "/content/1.a/10.z.md": "",
                "/content/1.a/2.y.md": "",
                "/content/1.a/2.x.md": "",
                "/content/1.a/extra.md": "",
                "/content/2.b/index.md": "",
            }
        )
    ).build()
    sibling_sets = [items] + [
        list(item.children) for item in iter_items(items) if item.children
    ]
    for siblings in sibling_sets:
        resorted = sorted(siblings, key=lambda item: (item.order, item.stem))
        assert resorted == siblings, "sibling order should already be sorted"
    assert [child.path for child in items[0].children or ()] == [
        "/a/x",
        "/a/y",
        "/a/z",
        "/a/extra",
    ]


def test_page_shadowed_by_directory_is_not_listed(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A flat page and a same-named directory yield one row for the route."""
    builder = NavigationTreeBuilder(
        ContentStore(
            {
                "/content/1.start/1.index.md": "",
                "/content/1.start/2.setup.md": "---\ntitle: Flat\n---\n",
                "/content/1.start/2.setup/1.index.md": "---\ntitle: Setup\n---\n",
                "/content/1.start/3.usage.md": "",
            }
        )
    )
    with caplog.at_level(logging.INFO, logger="docs_content.navigation"):
        items = builder.build()
    paths = [item.path for item in iter_items(items)]
    assert len(paths) == len(set(paths)), f"duplicate navigation paths: {paths}"
    assert paths == ["/start", "/start/setup", "/start/usage"]
    setup = items[0].children[0] if items[0].children else None
    assert setup is not None
    assert (setup.title, setup.is_section) == ("Setup", True)
    marked = mark_active(items, "/start/setup")
    assert sum(item.active for item in iter_items(marked)) == 1
    assert "Skipping /content/1.start/2.setup.md in navigation" in caplog.text


def test_page_kept_when_same_named_directory_is_dropped() -> None:
    """A directory with nothing to list does not hide the flat page."""
    tree = _build(
        {
            "/content/1.start/index.md": "",
            "/content/1.start/2.setup.md": "",
            "/content/1.start/2.setup/1.draft.md": "---\nnavigation: false\n---\n",
        }
    )
    assert tree[0]["children"] == [{"title": "Setup", "path": "/start/setup"}]
