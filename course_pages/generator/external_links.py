"""Mark links that leave the site so they open in a new tab."""

from __future__ import annotations

import re
import typing as typ
from html import escape
from urllib.parse import urlsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from .link_rewriter import (
    LINK_ATTRIBUTE,
    LINK_TAG,
    get_raw_attribute,
    iter_nodes,
    set_raw_attribute,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from course_pages.config import ExternalLinkSettings
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

EXTERNAL_SCHEMES = frozenset({"http", "https"})
RAW_ANCHOR_TOKEN_PATTERN = re.compile(
    r"(?P<open><a(?=[\s>/])[^>]*>)|(?P<close></a\s*>)", re.IGNORECASE
)


def is_external(href: object) -> bool:
    """Return whether ``href`` is an absolute http(s) URL."""
    if not isinstance(href, str):
        return False
    parts = urlsplit(href.strip())
    return parts.scheme.lower() in EXTERNAL_SCHEMES and bool(parts.netloc)


def _append_marker(element: Element, marker: str) -> None:
    """Append ``marker`` as the final text content of ``element``."""
    children = list(element)
    if children:
        last = children[-1]
        last.tail = (last.tail or "") + marker
    else:
        element.text = (element.text or "") + marker


def decorate_raw_links(
    blocks: cabc.Sequence[str | Element], settings: ExternalLinkSettings
) -> list[str | Element]:
    """Decorate external ``<a>`` tags held as raw HTML strings.

    Inline raw HTML stores opening and closing tags as separate entries, so
    an external anchor left open at the end of one string gets its marker
    in front of the next ``</a>`` found in a later string.
    """
    marker = escape(settings.marker, quote=False)
    pending = False

    def _decorate(match: re.Match[str]) -> str:
        nonlocal pending
        token = match.group(0)
        if match.group("close") is not None:
            if pending:
                pending = False
                return marker + token
            return token
        if not is_external(get_raw_attribute(token, LINK_ATTRIBUTE)):
            return token
        if settings.target:
            token = set_raw_attribute(token, "target", settings.target)
        if settings.rel:
            token = set_raw_attribute(token, "rel", " ".join(settings.rel))
        pending = bool(marker)
        return token

    return [
        RAW_ANCHOR_TOKEN_PATTERN.sub(_decorate, block) if isinstance(block, str) else block
        for block in blocks
    ]


class ExternalLinkExtension(Extension):
    """Decorate external anchors with ``target``/``rel`` and a trailing marker."""

    def __init__(self, settings: ExternalLinkSettings) -> None:
        self.settings = settings
        super().__init__()

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register after the course-link rewriter so local links stay plain."""
        processor = ExternalLinkTreeprocessor(md, self.settings)
        md.treeprocessors.register(processor, "course_external_links", 12)


class ExternalLinkTreeprocessor(Treeprocessor):
    """Apply external-link decoration to every outbound anchor."""

    def __init__(self, md: Markdown, settings: ExternalLinkSettings) -> None:
        super().__init__(md)
        self.settings = settings

    def run(self, root: Element) -> None:
        """Mutate outbound anchors in place, including raw HTML anchors."""
        for node in iter_nodes(root):
            if node.tag != LINK_TAG or not is_external(node.get(LINK_ATTRIBUTE)):
                continue
            if self.settings.target:
                node.set("target", self.settings.target)
            if self.settings.rel:
                node.set("rel", " ".join(self.settings.rel))
            if self.settings.marker:
                _append_marker(node, self.settings.marker)
        stash = self.md.htmlStash
        stash.rawHtmlBlocks = decorate_raw_links(stash.rawHtmlBlocks, self.settings)


__all__ = [
    "ExternalLinkExtension",
    "ExternalLinkTreeprocessor",
    "decorate_raw_links",
    "is_external",
]
