"""Build configuration and tooling for the blog.

This package holds the site's build declaration (plugins, passthrough copies,
template formats, filters), the style declaration for the utility stylesheet,
and the ``pages`` CLI that renders both.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from blog_pages import main
>>> main()  # doctest: +SKIP
>>> from blog_pages import app
>>> app.name[0]
'pages'
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
