"""Populate sidebar navigation groups from the content directories.

Every configured :class:`~course_pages.config.SidebarSection` names a
directory below the content root. The builder lists the markdown pages found
there (subdirectories become nested groups) and links each one using the same
canonical path form the link rewriter emits.
"""

from __future__ import annotations

import typing as typ

from .content import CONTENT_SUFFIX, load_content_page
from .generator.link_rewriter import canonicalize_path
from .generator.models import SidebarEntry, SidebarGroup

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import SiteConfig
    from .generator.models import ContentPage


def page_href(page: ContentPage, site_config: SiteConfig) -> str:
    """Return the canonical site URL for ``page``."""
    return canonicalize_path(
        f"{site_config.base}/{page.slug}/", site_config.links.project_id
    )


def _entry_sort_key(entry: SidebarEntry) -> tuple[bool, int, str]:
    return entry.order is None, entry.order or 0, entry.label.lower()


def _build_group(
    label: str,
    directory: str,
    *,
    content_root: Path,
    site_config: SiteConfig,
) -> SidebarGroup:
    group = SidebarGroup(label=label, directory=directory)
    source_dir = content_root / directory
    if not source_dir.is_dir():
        return group

    for child in sorted(source_dir.iterdir()):
        if child.is_dir():
            nested = _build_group(
                child.name,
                f"{directory}/{child.name}",
                content_root=content_root,
                site_config=site_config,
            )
            if nested.entries or nested.groups:
                group.groups.append(nested)
        elif child.suffix.lower() == CONTENT_SUFFIX:
            page = load_content_page(child, content_root)
            group.entries.append(
                SidebarEntry(
                    label=page.label,
                    href=page_href(page, site_config),
                    order=page.order,
                )
            )
    group.entries.sort(key=_entry_sort_key)
    return group


def build_sidebar(site_config: SiteConfig, content_root: Path) -> list[SidebarGroup]:
    """Return one populated group per configured sidebar section, in order.

    Parameters
    ----------
    site_config : SiteConfig
        Configuration providing the sidebar sections and base path.
    content_root : Path
        Directory holding the per-section content folders.

    Returns
    -------
    list[SidebarGroup]
        Groups in configuration order. A section whose directory does not
        exist yields an empty group.
    """
    return [
        _build_group(
            section.label,
            section.directory,
            content_root=content_root,
            site_config=site_config,
        )
        for section in site_config.sidebar
    ]


def page_neighbours(
    groups: list[SidebarGroup], href: str
) -> tuple[SidebarEntry | None, SidebarEntry | None]:
    """Return the sidebar entries before and after ``href`` in reading order.

    Groups are flattened in sidebar order, nested groups after their parent's
    own pages. Either side is ``None`` at the ends of the list or when
    ``href`` is not in the sidebar at all.
    """
    entries = [entry for group in groups for entry in group.iter_entries()]
    for index, entry in enumerate(entries):
        if entry.href != href:
            continue
        previous = entries[index - 1] if index > 0 else None
        following = entries[index + 1] if index + 1 < len(entries) else None
        return previous, following
    return None, None


__all__ = ["build_sidebar", "page_href", "page_neighbours"]
