r"""Read course content pages and their YAML front matter.

Content lives in per-category directories (``guides``, ``labs``,
``assignments``...) below a content root. Each markdown file may open with a
YAML front matter block carrying the page ``title`` and optional ``sidebar``
hints (``order`` and ``label``).

Example
-------
>>> from course_pages.content import parse_front_matter
>>> meta, body = parse_front_matter("---\ntitle: Week 1\n---\n# Intro\n")
>>> meta["title"], body
('Week 1', '# Intro\n')
"""

from __future__ import annotations

import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .generator.models import ContentPage

if typ.TYPE_CHECKING:
    from pathlib import Path

CONTENT_SUFFIX = ".md"
INDEX_STEM = "index"
FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.MULTILINE | re.DOTALL
)
TITLE_PATTERN = re.compile(r"^#[ \t]+(.+?)[ \t#]*$", re.MULTILINE)


class ContentError(ValueError):
    """Raised when a content page cannot be interpreted."""


def parse_front_matter(text: str) -> tuple[dict[str, typ.Any], str]:
    """Split ``text`` into its front matter mapping and markdown body.

    Raises
    ------
    ContentError
        If the front matter is not valid YAML or is not a mapping.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return {}, text
    loader = YAML(typ="safe")
    try:
        loaded = loader.load(match.group(1)) or {}
    except YAMLError as exc:
        msg = f"Invalid front matter: {exc}"
        raise ContentError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Front matter must be a mapping."
        raise ContentError(msg)
    return dict(loaded), text[match.end() :]


def _page_slug(path: Path, content_root: Path) -> str:
    try:
        relative = path.resolve().relative_to(content_root.resolve())
    except ValueError as exc:
        msg = f"{path} is outside the content directory {content_root}."
        raise ContentError(msg) from exc
    parts = list(relative.with_suffix("").parts)
    if parts and parts[-1] == INDEX_STEM:
        parts.pop()
    return "/".join(parts)


def _sidebar_hints(meta: typ.Mapping[str, typ.Any]) -> tuple[int | None, str | None]:
    sidebar = meta.get("sidebar")
    if not isinstance(sidebar, dict):
        return None, None
    order = sidebar.get("order")
    label = sidebar.get("label")
    try:
        parsed_order = int(order) if order is not None else None
    except (TypeError, ValueError) as exc:
        msg = f"Sidebar order must be an integer, got {order!r}."
        raise ContentError(msg) from exc
    return parsed_order, str(label).strip() if label else None


def load_content_page(path: Path, content_root: Path) -> ContentPage:
    """Read ``path`` and return its ContentPage with resolved title and slug."""
    slug = _page_slug(path, content_root)
    text = path.read_text(encoding="utf-8")
    try:
        meta, body = parse_front_matter(text)
        order, label = _sidebar_hints(meta)
    except ContentError as exc:
        msg = f"{path}: {exc}"
        raise ContentError(msg) from exc

    title = str(meta.get("title") or "").strip()
    if not title:
        heading = TITLE_PATTERN.search(body)
        title = heading.group(1).strip() if heading else path.stem
    return ContentPage(
        path=path,
        slug=slug,
        title=title,
        label=label or title,
        order=order,
        body=body,
    )


__all__ = [
    "CONTENT_SUFFIX",
    "ContentError",
    "load_content_page",
    "parse_front_matter",
]
