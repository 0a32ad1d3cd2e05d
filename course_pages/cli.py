"""Cyclopts CLI entrypoint for checking and previewing the course site.

The ``course-pages`` console script defined here validates ``site.yaml``,
prints the sidebar autogenerated from the content directories, shows how
individual repository links are rewritten, and renders a single content page
to a standalone HTML preview.

Examples
--------
Print the rewritten form of a repository link:

>>> from course_pages.cli import app
>>> app.run(
...     ["rewrite", "https://github.com/paquettm/420-302-VA_A25/blob/main/LABS/week1.md"]
... )  # doctest: +SKIP
https://github.com/paquettm/420-302-VA_A25/blob/main/LABS/week1.md -> /420-302-VA_A25/labs/week1/

Render a page preview into a custom location:

>>> app.run(
...     ["render", "content/labs/week1.md", "--output", "build/week1.html"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_site_config
from .generator import rewrite_href
from .preview import PagePreviewBuilder
from .sidebar import build_sidebar

if typ.TYPE_CHECKING:
    from .generator import SidebarGroup

DEFAULT_CONFIG = Path("config/site.yaml")
DEFAULT_CONTENT_DIR = Path("content")
DEFAULT_BUILD_DIR = Path("build")

app = App(name="course-pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
]
ContentDirOption = typ.Annotated[
    Path, Parameter(help="Content root directory", env_var="INPUT_CONTENT_DIR")
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _sidebar_lines(group: SidebarGroup, depth: int = 0) -> list[str]:
    indent = "  " * depth
    lines = [f"{indent}{group.label} ({group.directory})"]
    lines.extend(f"{indent}  - {entry.label}: {entry.href}" for entry in group.entries)
    for nested in group.groups:
        lines.extend(_sidebar_lines(nested, depth + 1))
    return lines


@app.command(help="Validate the site configuration and summarize it.")
def check(*, config: ConfigOption = DEFAULT_CONFIG) -> None:
    """Load ``config`` and print the resolved site metadata and link rules.

    Raises
    ------
    SiteConfigError
        If the configuration is invalid.
    """
    site = load_site_config(config)
    print(f"title: {site.title}")
    print(f"url: {site.url}")
    print(f"base: {site.base}")
    print(f"sidebar: {', '.join(section.label for section in site.sidebar)}")
    for rule in site.links.rules:
        print(f"rule {rule.category}: {rule.source_prefix} -> {rule.target_prefix}")


@app.command(help="Print the sidebar autogenerated from the content directories.")
def sidebar(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    content_dir: ContentDirOption = DEFAULT_CONTENT_DIR,
    directory: typ.Annotated[
        str | None, Parameter(help="Only print the section for this directory")
    ] = None,
) -> None:
    """Print each sidebar group and its entries."""
    site = load_site_config(config)
    groups = build_sidebar(site, content_dir)
    if directory:
        wanted = site.get_section(directory.strip("/"))
        groups = [group for group in groups if group.directory == wanted.directory]
    for group in groups:
        for line in _sidebar_lines(group):
            print(line)


@app.command(help="Show how repository links are rewritten for the site.")
def rewrite(*urls: str, config: ConfigOption = DEFAULT_CONFIG) -> None:
    """Print ``source -> rewritten`` for every URL given."""
    links = load_site_config(config).links
    for url in urls:
        rewritten = rewrite_href(
            url,
            links.rules,
            project_id=links.project_id,
            normalize_unmatched=links.normalize_unmatched,
        )
        print(f"{url} -> {rewritten}")


@app.command(help="Render one content page to a standalone HTML preview.")
def render(
    page: Path,
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    content_dir: ContentDirOption = DEFAULT_CONTENT_DIR,
    output: typ.Annotated[
        Path | None, Parameter(help="Where to write the HTML preview")
    ] = None,
) -> None:
    """Render ``page`` through the site pipeline and write it to disk.

    Parameters
    ----------
    page : Path
        Markdown file inside ``content_dir``.
    config : Path, optional
        Path to the site configuration (overridable via ``INPUT_CONFIG``).
    content_dir : Path, optional
        Content root used for slugs and the sidebar.
    output : Path or None, optional
        Output file; defaults to ``build/<page stem>.html``.
    """
    site = load_site_config(config)
    target = output or DEFAULT_BUILD_DIR / f"{page.stem}.html"
    written = PagePreviewBuilder(site, content_dir).run(page, target)
    print(f"wrote {_format_path(written)}")


def main() -> None:
    """Invoke the Cyclopts application behind the ``course-pages`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
