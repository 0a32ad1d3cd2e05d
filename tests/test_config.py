"""Tests for loading and validating ``site.yaml``."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from course_pages.config import (
    LINK_CATEGORIES,
    LinkRule,
    SiteConfigError,
    load_site_config,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from course_pages.config import SiteConfig


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "site.yaml"
    path.write_text(dedent(text).lstrip(), encoding="utf-8")
    return path


def test_repository_config_loads(repo_site_config: SiteConfig) -> None:
    """The shipped configuration describes the course site."""
    assert repo_site_config.base == "/420-302-VA_A25"
    assert repo_site_config.links.project_id == "420-302-VA_A25"
    assert [rule.category for rule in repo_site_config.links.rules] == list(
        LINK_CATEGORIES
    )
    assert [section.label for section in repo_site_config.sidebar] == [
        "Guides",
        "Labs",
        "Assignments",
        "External Resources",
    ]
    assert repo_site_config.social[0].href == "https://github.com/paquettm/420-302-VA_A25"
    assert repo_site_config.asset_url(repo_site_config.favicon) == (
        "/420-302-VA_A25/favicon.svg"
    )


def test_rules_default_to_repository_categories(tmp_path: Path) -> None:
    """Without explicit rules, one rule per category is derived from the repo."""
    path = _write(
        tmp_path,
        """
        site:
          title: Course X
          base: /Course_X
          repo: https://github.com/owner/Course_X/
        links:
          branch: trunk
        """,
    )
    config = load_site_config(path)
    labs = next(rule for rule in config.links.rules if rule.category == "labs")
    assert labs == LinkRule(
        category="labs",
        source_prefix="https://github.com/owner/Course_X/blob/trunk/LABS/",
        target_prefix="/Course_X/labs/",
    )
    assert config.links.project_id == "Course_X"
    assert config.links.normalize_unmatched is True
    assert config.url == "/Course_X", "Expected url to fall back to the base path"


def test_sidebar_accepts_autogenerate_mapping(tmp_path: Path) -> None:
    """Sidebar entries may nest the directory under ``autogenerate``."""
    path = _write(
        tmp_path,
        """
        site:
          title: Course X
          base: /course
        sidebar:
          - label: Labs
            autogenerate:
              directory: /labs/
        """,
    )
    config = load_site_config(path)
    assert config.sidebar[0].directory == "labs"
    assert config.get_section("labs").label == "Labs"
    with pytest.raises(KeyError):
        config.get_section("theory")


@pytest.mark.parametrize(
    ("body", "fragment"),
    [
        ("site:\n  base: /course\n", "missing 'title'"),
        ("site:\n  title: X\n  base: course\n", "must start with '/'"),
        ("site:\n  title: X\n  base: /course/\n", "must not end with '/'"),
        (
            "site:\n  title: X\n  base: /course\nsidebar:\n  - label: Labs\n",
            "missing 'directory'",
        ),
        (
            "site:\n  title: X\n  base: /course\n"
            "table_of_contents:\n  min_heading_level: 4\n  max_heading_level: 2\n",
            "heading levels",
        ),
        (
            "site:\n  title: X\n  base: /course\nlinks:\n  rules:\n"
            "    - {category: labs, source: 'https://a/x/', target: /course/labs/}\n"
            "    - {category: more, source: 'https://a/x/y/', target: /course/more/}\n",
            "overlapping",
        ),
        (
            "site:\n  title: X\n  base: /course\nlinks:\n  rules:\n"
            "    - {category: labs, source: 'https://a/x/', target: /elsewhere/labs/}\n",
            "outside base path",
        ),
        (
            "site:\n  title: X\n  base: /course\nlinks:\n  rules:\n"
            "    - {category: labs, source: 'https://a/x/', target: /coursex/labs/}\n",
            "outside base path",
        ),
        ("site:\n  title: X\n  base: /course\nsocial: github\n", "must be a list"),
    ],
)
def test_invalid_configuration_is_rejected(
    tmp_path: Path, body: str, fragment: str
) -> None:
    """Validation errors surface as SiteConfigError with a useful message."""
    path = _write(tmp_path, body)
    with pytest.raises(SiteConfigError, match=fragment):
        load_site_config(path)


def test_missing_file_raises(tmp_path: Path) -> None:
    """A missing configuration file is reported as FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_site_config(tmp_path / "absent.yaml")


def test_non_mapping_top_level_raises(tmp_path: Path) -> None:
    """A YAML list at the top level is not a configuration."""
    path = _write(tmp_path, "- just\n- a list\n")
    with pytest.raises(TypeError):
        load_site_config(path)


def test_external_link_settings(tmp_path: Path) -> None:
    """External-link decoration can be tuned or disabled."""
    path = _write(
        tmp_path,
        """
        site:
          title: X
          base: /course
        external_links:
          marker: ""
          target: null
          rel: noopener noreferrer
        """,
    )
    settings = load_site_config(path).external_links
    assert settings.marker == ""
    assert settings.target is None
    assert settings.rel == ["noopener", "noreferrer"]
