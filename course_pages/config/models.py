"""Typed dataclasses describing the course site configuration."""

from __future__ import annotations

import dataclasses as dc

LINK_CATEGORIES: tuple[str, ...] = ("assignments", "labs", "guides", "theory")


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True, frozen=True)
class LinkRule:
    """Map an external repository folder URL onto a local site path.

    Attributes
    ----------
    category : str
        Content category handled by the rule (for example ``"labs"``).
    source_prefix : str
        External URL prefix recognised by the rule.
    target_prefix : str
        Local absolute path prefix that replaces ``source_prefix``.
    """

    category: str
    source_prefix: str
    target_prefix: str

    def matches(self, href: str) -> bool:
        """Return whether ``href`` starts with this rule's source prefix."""
        return href.startswith(self.source_prefix)

    def apply(self, href: str) -> str:
        """Swap the source prefix of ``href`` for the local target prefix."""
        return self.target_prefix + href[len(self.source_prefix) :]


@dc.dataclass(slots=True)
class LinkSettings:
    """Settings consumed by the link path rewriter."""

    project_id: str
    rules: list[LinkRule] = dc.field(default_factory=list)
    normalize_unmatched: bool = True


@dc.dataclass(slots=True)
class ExternalLinkSettings:
    """Decoration applied to links that leave the site."""

    marker: str = " ↗"
    target: str | None = "_blank"
    rel: list[str] = dc.field(default_factory=lambda: ["noopener"])


@dc.dataclass(slots=True)
class SocialLink:
    """Social link rendered in the site header."""

    icon: str
    label: str
    href: str


@dc.dataclass(slots=True)
class SidebarSection:
    """Sidebar group auto-populated from a content directory."""

    label: str
    directory: str


@dc.dataclass(slots=True)
class TableOfContentsConfig:
    """Heading levels included in the per-page table of contents."""

    min_heading_level: int = 2
    max_heading_level: int = 4


@dc.dataclass(slots=True)
class SiteConfig:
    """Site metadata, navigation, and link handling for the course site."""

    title: str
    url: str
    base: str
    repo_uri: str | None
    favicon: str
    logo: str | None
    links: LinkSettings
    locale: str = "en"
    last_updated: bool = True
    social: list[SocialLink] = dc.field(default_factory=list)
    sidebar: list[SidebarSection] = dc.field(default_factory=list)
    table_of_contents: TableOfContentsConfig = dc.field(
        default_factory=TableOfContentsConfig
    )
    external_links: ExternalLinkSettings = dc.field(
        default_factory=ExternalLinkSettings
    )

    def asset_url(self, path: str | None) -> str | None:
        """Return ``path`` prefixed with the site base path."""
        if not path:
            return None
        if "://" in path:
            return path
        return f"{self.base}/{path.lstrip('/')}"

    def get_section(self, directory: str) -> SidebarSection:
        """Return the sidebar section sourced from ``directory``."""
        for section in self.sidebar:
            if section.directory == directory:
                return section
        available = ", ".join(section.directory for section in self.sidebar)
        msg = f"Unknown sidebar directory '{directory}'. Known directories: {available}"
        raise KeyError(msg)


__all__ = [
    "LINK_CATEGORIES",
    "ExternalLinkSettings",
    "LinkRule",
    "LinkSettings",
    "SidebarSection",
    "SiteConfig",
    "SiteConfigError",
    "SocialLink",
    "TableOfContentsConfig",
]
