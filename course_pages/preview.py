"""Render a single course page into a standalone HTML preview.

The preview runs one content page through the same markdown pipeline the site
uses (heading ids, course link rewriting, external link decoration) and wraps
it with the site chrome: title, favicon, logo, social links, the
autogenerated sidebar with previous/next links, and the page's table of
contents. It is meant for checking a page's links and navigation locally.

>>> from pathlib import Path
>>> from course_pages.config import load_site_config
>>> from course_pages.preview import PagePreviewBuilder
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> builder = PagePreviewBuilder(site, Path("content"))  # doctest: +SKIP
>>> builder.run(Path("content/labs/week1.md"), Path("build/week1.html"))  # doctest: +SKIP
PosixPath('build/week1.html')
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .content import load_content_page
from .generator import HtmlContentRenderer
from .sidebar import build_sidebar, page_href, page_neighbours

if typ.TYPE_CHECKING:
    from .config import SiteConfig


class PagePreviewBuilder:
    """Render one content page with the site's navigation and metadata."""

    def __init__(
        self,
        site_config: SiteConfig,
        content_root: Path,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the preview builder.

        Parameters
        ----------
        site_config : SiteConfig
            Parsed site configuration (see
            :func:`course_pages.config.load_site_config`).
        content_root : Path
            Directory containing the per-section content folders.
        templates_dir : Path, optional
            Directory containing the Jinja templates. Defaults to the
            ``course_pages/templates`` directory when ``None``.
        """
        self.site_config = site_config
        self.content_root = content_root
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("page.jinja")
        self.renderer = HtmlContentRenderer(site_config)

    def run(self, page_path: Path, output_path: Path) -> Path:
        """Render ``page_path`` into ``output_path`` and return the written path."""
        page = load_content_page(page_path, self.content_root)
        rendered = self.renderer.render(page.body)
        sidebar = build_sidebar(self.site_config, self.content_root)
        page_url = page_href(page, self.site_config)
        previous_entry, next_entry = page_neighbours(sidebar, page_url)
        updated_at = None
        if self.site_config.last_updated:
            updated_at = dt.datetime.fromtimestamp(page_path.stat().st_mtime, dt.UTC)

        context = {
            "site": self.site_config,
            "page": page,
            "page_url": page_url,
            "html_title": f"{page.title} | {self.site_config.title}",
            "favicon_url": self.site_config.asset_url(self.site_config.favicon),
            "logo_url": self.site_config.asset_url(self.site_config.logo),
            "sidebar": sidebar,
            "previous_entry": previous_entry,
            "next_entry": next_entry,
            "content_html": rendered.html,
            "toc": rendered.toc,
            "pygments_css": self.renderer.stylesheet,
            "updated_at": updated_at,
        }
        html = self.template.render(**context)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        return output_path


__all__ = ["PagePreviewBuilder"]
