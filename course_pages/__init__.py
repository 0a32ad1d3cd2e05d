"""Configuration and markdown tooling for the 420-302-VA course site.

This package holds the site metadata and sidebar layout, the markdown link
rewriter that maps course repository URLs onto published pages, and the
``course-pages`` CLI used to check the configuration and preview pages.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from course_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
