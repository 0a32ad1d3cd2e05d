"""Utility helpers shared by the course site configuration loader."""

from __future__ import annotations

import typing as typ

from .models import (
    LINK_CATEGORIES,
    ExternalLinkSettings,
    LinkRule,
    SidebarSection,
    SiteConfigError,
    SocialLink,
    TableOfContentsConfig,
)

DEFAULT_BRANCH = "main"


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(payload: typ.Mapping[str, typ.Any], key: str, context: str) -> str:
    """Return ``payload[key]`` as a non-empty string or raise SiteConfigError."""
    value = _optional_str(payload.get(key))
    if value is None:
        msg = f"{context} is missing '{key}'."
        raise SiteConfigError(msg)
    return value


def _validate_base(base: str) -> str:
    """Check the deployment base path is absolute and has no trailing slash."""
    if not base.startswith("/"):
        msg = f"Base path '{base}' must start with '/'."
        raise SiteConfigError(msg)
    if len(base) > 1 and base.endswith("/"):
        msg = f"Base path '{base}' must not end with '/'."
        raise SiteConfigError(msg)
    return base


def _default_link_rules(repo_uri: str, branch: str, base: str) -> list[LinkRule]:
    """Return one rule per course category for the repository's blob URLs."""
    root = repo_uri.rstrip("/")
    prefix = base.rstrip("/")
    return [
        LinkRule(
            category=category,
            source_prefix=f"{root}/blob/{branch}/{category.upper()}/",
            target_prefix=f"{prefix}/{category}/",
        )
        for category in LINK_CATEGORIES
    ]


def _build_link_rules(raw: list[typ.Any]) -> list[LinkRule]:
    """Build LinkRule entries from the ``links.rules`` list."""
    rules: list[LinkRule] = []
    for index, payload in enumerate(raw, start=1):
        if not isinstance(payload, dict):
            msg = f"Link rule #{index} must be a mapping."
            raise SiteConfigError(msg)
        context = f"Link rule #{index}"
        rules.append(
            LinkRule(
                category=_require_str(payload, "category", context),
                source_prefix=_require_str(payload, "source", context),
                target_prefix=_require_str(payload, "target", context),
            )
        )
    return rules


def _check_link_rules(rules: list[LinkRule], base: str) -> None:
    """Reject overlapping source prefixes and targets outside the base path."""
    base_prefix = base.rstrip("/") + "/"
    for rule in rules:
        if not rule.target_prefix.startswith(base_prefix):
            msg = (
                f"Link rule '{rule.category}' targets '{rule.target_prefix}', "
                f"which is outside base path '{base}'."
            )
            raise SiteConfigError(msg)
    for rule in rules:
        for other in rules:
            if other is rule:
                continue
            if other.source_prefix.startswith(rule.source_prefix):
                msg = (
                    f"Link rules '{rule.category}' and '{other.category}' have "
                    "overlapping source prefixes."
                )
                raise SiteConfigError(msg)


def _build_social_links(raw: list[typ.Any]) -> list[SocialLink]:
    """Build SocialLink entries, skipping anything that is not a mapping."""
    links: list[SocialLink] = []
    for payload in raw:
        match payload:
            case dict():
                icon = _require_str(payload, "icon", "Social link")
                links.append(
                    SocialLink(
                        icon=icon,
                        label=_optional_str(payload.get("label")) or icon.title(),
                        href=_require_str(payload, "href", "Social link"),
                    )
                )
            case _:
                continue
    return links


def _build_sidebar(raw: list[typ.Any]) -> list[SidebarSection]:
    """Build the ordered sidebar sections from ``{label, directory}`` pairs."""
    sections: list[SidebarSection] = []
    for index, payload in enumerate(raw, start=1):
        if not isinstance(payload, dict):
            msg = f"Sidebar entry #{index} must be a mapping."
            raise SiteConfigError(msg)
        context = f"Sidebar entry #{index}"
        directory = payload.get("directory")
        autogenerate = payload.get("autogenerate")
        if directory is None and isinstance(autogenerate, dict):
            directory = autogenerate.get("directory")
        directory = (_optional_str(directory) or "").strip("/")
        if not directory:
            msg = f"{context} is missing 'directory'."
            raise SiteConfigError(msg)
        sections.append(
            SidebarSection(
                label=_require_str(payload, "label", context),
                directory=directory,
            )
        )
    return sections


def _build_toc_config(payload: typ.Mapping[str, typ.Any]) -> TableOfContentsConfig:
    """Build and validate the table-of-contents heading range."""
    base = TableOfContentsConfig()
    toc = TableOfContentsConfig(
        min_heading_level=int(payload.get("min_heading_level", base.min_heading_level)),
        max_heading_level=int(payload.get("max_heading_level", base.max_heading_level)),
    )
    if not 1 <= toc.min_heading_level <= toc.max_heading_level <= 6:  # noqa: PLR2004
        msg = (
            "Table of contents heading levels must satisfy "
            f"1 <= min ({toc.min_heading_level}) <= max "
            f"({toc.max_heading_level}) <= 6."
        )
        raise SiteConfigError(msg)
    return toc


def _build_external_links(payload: typ.Mapping[str, typ.Any]) -> ExternalLinkSettings:
    """Build external-link decoration settings from the provided mapping."""
    base = ExternalLinkSettings()
    rel = payload.get("rel", base.rel)
    if isinstance(rel, str):
        rel = rel.split()
    return ExternalLinkSettings(
        marker=str(payload.get("marker", base.marker) or ""),
        target=_optional_str(payload.get("target", base.target)),
        rel=[str(value) for value in rel or []],
    )


__all__ = [
    "DEFAULT_BRANCH",
    "_build_external_links",
    "_build_link_rules",
    "_build_sidebar",
    "_build_social_links",
    "_build_toc_config",
    "_check_link_rules",
    "_default_link_rules",
    "_optional_str",
    "_require_str",
    "_validate_base",
]
