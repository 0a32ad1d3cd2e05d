"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML

from .helpers import (
    DEFAULT_BRANCH,
    _build_external_links,
    _build_link_rules,
    _build_sidebar,
    _build_social_links,
    _build_toc_config,
    _check_link_rules,
    _default_link_rules,
    _optional_str,
    _require_str,
    _validate_base,
)
from .models import LinkSettings, SiteConfig, SiteConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the course site.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/site.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration with site metadata, sidebar sections, and the
        link rewrite rules.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If required fields are missing or invalid (for example, a base path
        with a trailing slash or overlapping link rule prefixes).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from course_pages.config import load_site_config
    >>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> config.base  # doctest: +SKIP
    '/420-302-VA_A25'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return build_site_config(dict(loaded))


def build_site_config(raw: typ.Mapping[str, typ.Any]) -> SiteConfig:
    """Validate an already-parsed configuration mapping into a SiteConfig."""
    site = raw.get("site") or {}
    if not isinstance(site, dict):
        msg = "'site' must be a mapping."
        raise SiteConfigError(msg)

    title = _require_str(site, "title", "Site configuration")
    base = _validate_base(_require_str(site, "base", "Site configuration"))
    repo_uri = _optional_str(site.get("repo"))
    url = _optional_str(site.get("url")) or base

    return SiteConfig(
        title=title,
        url=url,
        base=base,
        repo_uri=repo_uri,
        favicon=_optional_str(site.get("favicon")) or "/favicon.svg",
        logo=_optional_str(site.get("logo")),
        locale=_optional_str(site.get("locale")) or "en",
        last_updated=bool(site.get("last_updated", True)),
        social=_build_social_links(_as_list(raw.get("social"), "social")),
        sidebar=_build_sidebar(_as_list(raw.get("sidebar"), "sidebar")),
        table_of_contents=_build_toc_config(
            _as_mapping(raw.get("table_of_contents"), "table_of_contents")
        ),
        links=_build_link_settings(
            _as_mapping(raw.get("links"), "links"), base=base, repo_uri=repo_uri
        ),
        external_links=_build_external_links(
            _as_mapping(raw.get("external_links"), "external_links")
        ),
    )


def _build_link_settings(
    payload: typ.Mapping[str, typ.Any], *, base: str, repo_uri: str | None
) -> LinkSettings:
    """Resolve link rewrite rules, deriving the defaults from the repository."""
    project_id = _optional_str(payload.get("project_id")) or base.strip("/")
    raw_rules = payload.get("rules")
    if raw_rules is not None:
        rules = _build_link_rules(_as_list(raw_rules, "links.rules"))
    elif repo_uri:
        branch = _optional_str(payload.get("branch")) or DEFAULT_BRANCH
        rules = _default_link_rules(repo_uri, branch, base)
    else:
        rules = []
    _check_link_rules(rules, base)
    return LinkSettings(
        project_id=project_id,
        rules=rules,
        normalize_unmatched=bool(payload.get("normalize_unmatched", True)),
    )


def _as_mapping(value: object, key: str) -> typ.Mapping[str, typ.Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"'{key}' must be a mapping."
        raise SiteConfigError(msg)
    return value


def _as_list(value: object, key: str) -> list[typ.Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"'{key}' must be a list."
        raise SiteConfigError(msg)
    return value


__all__ = ["build_site_config", "load_site_config"]
