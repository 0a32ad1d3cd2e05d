"""Render course markdown through the configured Python-Markdown pipeline."""

from __future__ import annotations

import re
import typing as typ

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from .external_links import ExternalLinkExtension
from .link_rewriter import _build_link_rewriter
from .models import RenderedContent, TocEntry

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension

    from course_pages.config import SiteConfig
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)


class HtmlContentRenderer:
    """Render markdown with heading ids, link rewriting, and highlighting."""

    def __init__(self, site_config: SiteConfig, pygments_style: str = "monokai") -> None:
        """Initialize a renderer for the given site.

        Parameters
        ----------
        site_config : SiteConfig
            Supplies link rules, external-link decoration, and the table of
            contents heading range.
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        """
        self.site_config = site_config
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def extensions(self) -> list[Extension | str]:
        """Return the ordered extension list applied to every document."""
        return [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            "toc",
            _build_link_rewriter(self.site_config),
            ExternalLinkExtension(self.site_config.external_links),
        ]

    def render(self, text: str) -> RenderedContent:
        """Render ``text`` into HTML and collect its table of contents."""
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return RenderedContent(html="", toc=[])
        toc = self.site_config.table_of_contents
        md = Markdown(
            extensions=self.extensions(),
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                },
                "toc": {
                    "toc_depth": f"{toc.min_heading_level}-{toc.max_heading_level}",
                },
            },
        )
        html = md.convert(normalized)
        tokens = getattr(md, "toc_tokens", [])
        marker = self.site_config.external_links.marker
        return RenderedContent(
            html=html, toc=[_toc_entry(token, marker) for token in tokens]
        )

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            return f"{fence}{language or ''}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


def _toc_entry(token: typ.Mapping[str, typ.Any], marker: str = "") -> TocEntry:
    """Convert a Python-Markdown toc token into a TocEntry tree.

    The toc extension reads heading text after external links were
    decorated, so the external-link ``marker`` is dropped from labels.
    """
    label = str(token["name"])
    if marker:
        label = label.replace(marker, "").strip()
    return TocEntry(
        level=int(token["level"]),
        anchor=str(token["id"]),
        label=label,
        children=[_toc_entry(child, marker) for child in token.get("children", [])],
    )


__all__ = ["HtmlContentRenderer"]
