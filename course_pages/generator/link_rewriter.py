"""Rewrite course repository links into canonical local site paths.

Authored content links to files in the course's GitHub repository (for
example ``https://github.com/<owner>/<course>/blob/main/LABS/week1.md``) so it
reads correctly on GitHub. When rendered for the site, those links are mapped
onto the locally published pages (``/<course>/labs/week1/``).
"""

from __future__ import annotations

import re
import typing as typ
from html import escape, unescape

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from course_pages.config import LinkRule, LinkSettings, SiteConfig
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

LINK_TAG = "a"
LINK_ATTRIBUTE = "href"
SUFFIX_MARKER_PATTERN = re.compile(r"[?#]")
CONTENT_EXTENSION_PATTERN = re.compile(r"\.md\Z", re.IGNORECASE)
TRAILING_SLASHES_PATTERN = re.compile(r"/{2,}\Z")
RAW_ANCHOR_PATTERN = re.compile(r"<a(?=[\s>/])[^>]*>", re.IGNORECASE)


def canonicalize_path(target: str, project_id: str | None = None) -> str:
    """Return ``target`` in the site's canonical directory-style form.

    The content extension is swapped for a trailing slash, repeated trailing
    slashes are collapsed, and the result is lowercased apart from the
    project identifier, which keeps its configured case. Query strings and
    fragments stay attached after the path.

    Examples
    --------
    >>> canonicalize_path("/420-302-VA_A25/GUIDES/Setup.md?tab=1", "420-302-VA_A25")
    '/420-302-VA_A25/guides/setup/?tab=1'
    """
    marker = SUFFIX_MARKER_PATTERN.search(target)
    split_at = marker.start() if marker else len(target)
    path, suffix = target[:split_at], target[split_at:]
    path = CONTENT_EXTENSION_PATTERN.sub("/", path)
    path = TRAILING_SLASHES_PATTERN.sub("/", path)
    result = (path + suffix).lower()
    if project_id:
        result = result.replace(project_id.lower(), project_id)
    return result


def rewrite_href(
    href: str,
    rules: cabc.Sequence[LinkRule],
    *,
    project_id: str | None = None,
    normalize_unmatched: bool = True,
) -> str:
    """Rewrite a single link destination.

    Parameters
    ----------
    href : str
        Raw link destination taken from a link node.
    rules : Sequence[LinkRule]
        Prefix substitutions tried in order; the first match wins.
    project_id : str, optional
        Identifier restored in its original case after lowercasing.
    normalize_unmatched : bool, optional
        When ``False``, destinations matching no rule are returned untouched.

    Returns
    -------
    str
        The canonical destination.
    """
    matched = next((rule for rule in rules if rule.matches(href)), None)
    if matched is None:
        if not normalize_unmatched:
            return href
        return canonicalize_path(href, project_id)
    return canonicalize_path(matched.apply(href), project_id)


def iter_nodes(root: Element) -> cabc.Iterator[Element]:
    """Yield every node below and including ``root`` in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(node)))


def rewrite_links(root: Element, settings: LinkSettings) -> None:
    """Rewrite the destination of every link node in ``root`` in place."""
    for node in iter_nodes(root):
        if node.tag != LINK_TAG:
            continue
        href = node.attrib.get(LINK_ATTRIBUTE)
        if not isinstance(href, str):
            continue
        node.set(
            LINK_ATTRIBUTE,
            rewrite_href(
                href,
                settings.rules,
                project_id=settings.project_id,
                normalize_unmatched=settings.normalize_unmatched,
            ),
        )


def _attribute_pattern(name: str) -> re.Pattern[str]:
    return re.compile(
        rf"""(?<![\w-]){re.escape(name)}\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[^\s"'>]+))""",
        re.IGNORECASE,
    )


def get_raw_attribute(tag: str, name: str) -> str | None:
    """Return the unescaped value of ``name`` in the raw HTML opening ``tag``."""
    match = _attribute_pattern(name).search(tag)
    if not match:
        return None
    value = match.group("dq")
    if value is None:
        value = match.group("sq")
    if value is None:
        value = match.group("bare")
    return unescape(value)


def set_raw_attribute(tag: str, name: str, value: str) -> str:
    """Return ``tag`` with attribute ``name`` set to ``value``."""
    replacement = f'{name}="{escape(value, quote=True)}"'
    pattern = _attribute_pattern(name)
    if pattern.search(tag):
        return pattern.sub(lambda _match: replacement, tag, count=1)
    closing = "/>" if tag.endswith("/>") else ">"
    return f"{tag[: -len(closing)].rstrip()} {replacement}{closing}"


def rewrite_raw_links(html: str, settings: LinkSettings) -> str:
    """Rewrite the ``href`` of every ``<a>`` opening tag in a raw HTML string."""

    def _rewrite_tag(match: re.Match[str]) -> str:
        tag = match.group(0)
        href = get_raw_attribute(tag, LINK_ATTRIBUTE)
        if href is None:
            return tag
        rewritten = rewrite_href(
            href,
            settings.rules,
            project_id=settings.project_id,
            normalize_unmatched=settings.normalize_unmatched,
        )
        return set_raw_attribute(tag, LINK_ATTRIBUTE, rewritten)

    return RAW_ANCHOR_PATTERN.sub(_rewrite_tag, html)


def _build_link_rewriter(site_config: SiteConfig) -> Extension:
    """Return a CourseLinkExtension configured from the site link settings."""
    return CourseLinkExtension(site_config.links)


class CourseLinkExtension(Extension):
    """Register the course link rewriter with a ``markdown.Markdown`` instance."""

    def __init__(self, settings: LinkSettings) -> None:
        self.settings = settings
        super().__init__()

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the course-link treeprocessor after inline processing."""
        processor = CourseLinkTreeprocessor(md, self.settings)
        md.treeprocessors.register(processor, "course_links", 15)


class CourseLinkTreeprocessor(Treeprocessor):
    """Rewrite repository links in the parsed markdown tree."""

    def __init__(self, md: Markdown, settings: LinkSettings) -> None:
        super().__init__(md)
        self.settings = settings

    def run(self, root: Element) -> None:
        """Mutate link destinations in place; the tree itself is kept.

        Raw HTML never enters the element tree; Python-Markdown holds it in
        ``htmlStash`` until serialization, so anchors there are rewritten as
        strings. Block HTML and inline tags are both stashed by the time this
        runs, after inline processing.
        """
        rewrite_links(root, self.settings)
        stash = self.md.htmlStash
        stash.rawHtmlBlocks = [
            rewrite_raw_links(block, self.settings) if isinstance(block, str) else block
            for block in stash.rawHtmlBlocks
        ]


__all__ = [
    "CourseLinkExtension",
    "CourseLinkTreeprocessor",
    "_build_link_rewriter",
    "canonicalize_path",
    "get_raw_attribute",
    "iter_nodes",
    "rewrite_href",
    "rewrite_links",
    "rewrite_raw_links",
    "set_raw_attribute",
]
