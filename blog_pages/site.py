"""The blog's own build and style declarations.

``configure`` is the build entry point: it receives a
:class:`~blog_pages.config.BuildConfigBuilder` and declares plugins,
passthrough copies, template formats, and filters on it. ``default_style``
returns the matching style declaration for the stylesheet builder.
"""

from __future__ import annotations

import typing as typ
from types import MappingProxyType

from ._constants import DEFAULT_TEMPLATE_FORMATS
from .config.models import DesignTokenSet, RawBreakpoint, StyleConfig
from .plugins import SYNTAX_HIGHLIGHT
from .social import social

if typ.TYPE_CHECKING:
    from .config.builder import BuildConfigBuilder

PASSTHROUGH = {
    "assets": "assets",
    "_redirects": "_redirects",
    "node_modules/instant.page/instantpage.js": "assets/instantpage.js",
}


def configure(builder: BuildConfigBuilder) -> None:
    """Declare the blog build on ``builder``."""
    builder.add_plugin(SYNTAX_HIGHLIGHT)
    builder.add_passthrough_copy(PASSTHROUGH)
    builder.replace_template_formats(DEFAULT_TEMPLATE_FORMATS)
    builder.add_filter("social", social)


def default_style() -> StyleConfig:
    """Return the blog's style tokens: an off-white and a dark-mode screen."""
    return StyleConfig(
        extend=DesignTokenSet(
            colors=MappingProxyType({"white": "#F9F9F9"}),
            screens=MappingProxyType(
                {"dark": RawBreakpoint(raw="(prefers-color-scheme: dark)")}
            ),
        ),
    )


__all__ = ["PASSTHROUGH", "configure", "default_style"]
