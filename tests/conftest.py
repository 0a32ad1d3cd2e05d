"""Shared fixtures for the course_pages test suite."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from course_pages.config import SiteConfig, load_site_config

REPO_ROOT = Path(__file__).resolve().parents[1]
COURSE_REPO = "https://github.com/paquettm/420-302-VA_A25"
COURSE_BLOB = f"{COURSE_REPO}/blob/main"

SITE_YAML = """
site:
  title: Fixture Course
  url: https://example.invalid/420-302-VA_A25/
  base: /420-302-VA_A25
  repo: https://github.com/paquettm/420-302-VA_A25
  favicon: /favicon.svg
  logo: /logo.svg
social:
  - icon: github
    label: GitHub
    href: https://github.com/paquettm/420-302-VA_A25
sidebar:
  - label: Guides
    directory: guides
  - label: Labs
    directory: labs
  - label: Assignments
    directory: assignments
links:
  normalize_unmatched: {normalize_unmatched}
""".lstrip()


@pytest.fixture
def repo_site_config() -> SiteConfig:
    """Return the configuration shipped in ``config/site.yaml``."""
    return load_site_config(REPO_ROOT / "config" / "site.yaml")


@pytest.fixture
def write_site_config(tmp_path: Path) -> typ.Callable[..., Path]:
    """Return a helper that writes the fixture site YAML into ``tmp_path``."""

    def _write(*, normalize_unmatched: bool = True) -> Path:
        path = tmp_path / "site.yaml"
        path.write_text(
            SITE_YAML.format(normalize_unmatched=str(normalize_unmatched).lower()),
            encoding="utf-8",
        )
        return path

    return _write


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """Build a small content tree with guides and labs."""
    root = tmp_path / "content"
    files = {
        "guides/setup.md": (
            "---\n"
            "title: Setting Up\n"
            "sidebar:\n"
            "  order: 2\n"
            "---\n"
            "## Install Python\n"
            "Download it from [python.org](https://www.python.org/downloads/).\n"
        ),
        "guides/tools.md": (
            "---\n"
            "title: Tools\n"
            "sidebar:\n"
            "  order: 1\n"
            "  label: Dev Tools\n"
            "---\n"
            "Editors and extensions.\n"
        ),
        "guides/appendix.md": "# Appendix\n\nExtra notes.\n",
        "labs/Week1.md": (
            "---\n"
            "title: Week 1\n"
            "---\n"
            "## Goals\n"
            f"Read the [setup guide]({COURSE_BLOB}/GUIDES/setup.md) first.\n\n"
            "### Hardware\n"
            "Grab a Raspberry Pi.\n\n"
            "## Submission\n"
            "Push to [GitHub](https://github.com/).\n"
        ),
        "labs/extra/index.md": "---\ntitle: Extras\n---\nBonus work.\n",
        "labs/notes.txt": "not markdown\n",
    }
    for relative, text in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root
