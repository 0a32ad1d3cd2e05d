"""Load and validate the course site configuration YAML.

This subpackage parses ``config/site.yaml`` into strongly typed dataclasses
(:class:`SiteConfig`, :class:`LinkRule`, :class:`SidebarSection`, etc.) that
the renderer, sidebar builder, and CLI consume. When no explicit link rules
are configured, :func:`load_site_config` derives one rule per course category
from the repository URI and base path, and rejects rule sets whose source
prefixes overlap.

Examples
--------
>>> from pathlib import Path
>>> from course_pages.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> [rule.category for rule in site.links.rules]  # doctest: +SKIP
['assignments', 'labs', 'guides', 'theory']
"""

from .loader import build_site_config, load_site_config
from .models import (
    LINK_CATEGORIES,
    ExternalLinkSettings,
    LinkRule,
    LinkSettings,
    SidebarSection,
    SiteConfig,
    SiteConfigError,
    SocialLink,
    TableOfContentsConfig,
)

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
    "build_site_config",
    "load_site_config",
]
