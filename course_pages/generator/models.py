"""Shared dataclasses used by the render pipeline and sidebar builder."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


@dc.dataclass(slots=True)
class TocEntry:
    """Heading listed in a page's table of contents.

    Attributes
    ----------
    level : int
        Heading level (``2`` for ``##``).
    anchor : str
        Element id assigned to the heading.
    label : str
        Plain-text heading label.
    children : list[TocEntry]
        Nested headings of a deeper level.
    """

    level: int
    anchor: str
    label: str
    children: list[TocEntry] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class RenderedContent:
    """HTML body and table of contents produced from one markdown document."""

    html: str
    toc: list[TocEntry]


@dc.dataclass(slots=True)
class ContentPage:
    """A markdown file from the content directory and its front matter.

    Attributes
    ----------
    path : Path
        Location of the markdown file on disk.
    slug : str
        Path of the page relative to the content root, without extension.
    title : str
        Page title from front matter, the first heading, or the file name.
    label : str
        Sidebar label; defaults to ``title``.
    order : int or None
        Explicit sidebar position, if any.
    body : str
        Markdown with the front matter removed.
    """

    path: Path
    slug: str
    title: str
    label: str
    order: int | None
    body: str


@dc.dataclass(slots=True)
class SidebarEntry:
    """Single navigation link within a sidebar group."""

    label: str
    href: str
    order: int | None = None


@dc.dataclass(slots=True)
class SidebarGroup:
    """Navigation group populated from a content directory."""

    label: str
    directory: str
    entries: list[SidebarEntry] = dc.field(default_factory=list)
    groups: list[SidebarGroup] = dc.field(default_factory=list)

    def iter_entries(self) -> typ.Iterator[SidebarEntry]:
        """Yield the entries of this group and its nested groups in order."""
        yield from self.entries
        for group in self.groups:
            yield from group.iter_entries()


__all__ = [
    "ContentPage",
    "RenderedContent",
    "SidebarEntry",
    "SidebarGroup",
    "TocEntry",
]
