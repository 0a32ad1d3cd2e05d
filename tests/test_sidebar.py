"""Tests for content front matter parsing and sidebar autogeneration."""

from __future__ import annotations

import typing as typ

import pytest

from course_pages.config import load_site_config
from course_pages.content import ContentError, load_content_page, parse_front_matter
from course_pages.sidebar import build_sidebar, page_neighbours

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_parse_front_matter_without_block() -> None:
    """Text without a leading ``---`` block has empty metadata."""
    meta, body = parse_front_matter("# Title\n---\nbody\n")
    assert meta == {}
    assert body == "# Title\n---\nbody\n"


def test_parse_front_matter_empty_block() -> None:
    """An empty front matter block yields no metadata."""
    meta, body = parse_front_matter("---\n---\nBody\n")
    assert meta == {}
    assert body == "Body\n"


@pytest.mark.parametrize(
    "text",
    ["---\ntitle: [unclosed\n---\nBody\n", "---\n- a\n- b\n---\nBody\n"],
)
def test_parse_front_matter_rejects_bad_yaml(text: str) -> None:
    """Malformed or non-mapping front matter raises ContentError."""
    with pytest.raises(ContentError):
        parse_front_matter(text)


def test_load_content_page_resolves_title_and_slug(content_root: Path) -> None:
    """Titles fall back to the first heading; index pages take the folder slug."""
    appendix = load_content_page(content_root / "guides" / "appendix.md", content_root)
    assert (appendix.title, appendix.slug, appendix.order) == (
        "Appendix",
        "guides/appendix",
        None,
    )
    tools = load_content_page(content_root / "guides" / "tools.md", content_root)
    assert (tools.title, tools.label, tools.order) == ("Tools", "Dev Tools", 1)
    extras = load_content_page(content_root / "labs" / "extra" / "index.md", content_root)
    assert extras.slug == "labs/extra"


def test_load_content_page_reports_bad_order(tmp_path: Path) -> None:
    """A non-integer sidebar order is reported with the offending path."""
    page = tmp_path / "bad.md"
    page.write_text("---\nsidebar:\n  order: first\n---\nBody\n", encoding="utf-8")
    with pytest.raises(ContentError, match="bad.md"):
        load_content_page(page, tmp_path)


def test_build_sidebar_groups_pages_by_section(
    content_root: Path, write_site_config: typ.Callable[..., Path]
) -> None:
    """Sections are populated in config order with canonical hrefs."""
    site = load_site_config(write_site_config())
    groups = build_sidebar(site, content_root)

    assert [group.label for group in groups] == ["Guides", "Labs", "Assignments"]
    guides, labs, assignments = groups
    assert [(entry.label, entry.href) for entry in guides.entries] == [
        ("Dev Tools", "/420-302-VA_A25/guides/tools/"),
        ("Setting Up", "/420-302-VA_A25/guides/setup/"),
        ("Appendix", "/420-302-VA_A25/guides/appendix/"),
    ]
    assert [entry.href for entry in labs.entries] == ["/420-302-VA_A25/labs/week1/"]
    assert [(group.label, group.directory) for group in labs.groups] == [
        ("extra", "labs/extra")
    ]
    assert [entry.href for entry in labs.iter_entries()] == [
        "/420-302-VA_A25/labs/week1/",
        "/420-302-VA_A25/labs/extra/",
    ]
    assert assignments.entries == [], "Missing directories yield empty groups"
    assert assignments.groups == []


def test_load_content_page_rejects_paths_outside_root(
    content_root: Path, tmp_path: Path
) -> None:
    """Pages outside the content directory raise ContentError, not ValueError."""
    stray = tmp_path / "stray.md"
    stray.write_text("# Stray\n", encoding="utf-8")
    with pytest.raises(ContentError, match="outside the content directory"):
        load_content_page(stray, content_root)


def test_load_content_page_accepts_unresolved_paths(content_root: Path) -> None:
    """Paths with ``..`` segments are resolved before the slug is taken."""
    winding = content_root / "labs" / ".." / "guides" / "setup.md"
    assert load_content_page(winding, content_root).slug == "guides/setup"


def test_page_neighbours_follow_sidebar_order(
    content_root: Path, write_site_config: typ.Callable[..., Path]
) -> None:
    """Neighbours cross section boundaries and stop at the ends."""
    groups = build_sidebar(load_site_config(write_site_config()), content_root)

    previous, following = page_neighbours(groups, "/420-302-VA_A25/labs/week1/")
    assert previous is not None
    assert following is not None
    assert previous.href == "/420-302-VA_A25/guides/appendix/"
    assert following.href == "/420-302-VA_A25/labs/extra/"

    first_previous, _ = page_neighbours(groups, "/420-302-VA_A25/guides/tools/")
    assert first_previous is None
    _, last_following = page_neighbours(groups, "/420-302-VA_A25/labs/extra/")
    assert last_following is None
    assert page_neighbours(groups, "/420-302-VA_A25/missing/") == (None, None)
