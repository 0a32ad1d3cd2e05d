"""Markdown pipeline pieces: link rewriting, external links, and rendering."""

from .external_links import ExternalLinkExtension
from .link_rewriter import CourseLinkExtension, canonicalize_path, rewrite_href
from .models import ContentPage, RenderedContent, SidebarEntry, SidebarGroup, TocEntry
from .renderer import HtmlContentRenderer

__all__ = [
    "ContentPage",
    "CourseLinkExtension",
    "ExternalLinkExtension",
    "HtmlContentRenderer",
    "RenderedContent",
    "SidebarEntry",
    "SidebarGroup",
    "TocEntry",
    "canonicalize_path",
    "rewrite_href",
]
