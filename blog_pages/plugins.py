"""Named plugins that can be activated from a build declaration.

A plugin is a callable receiving the :class:`BuildConfigBuilder`; it registers
filters and toggles pipeline features the same way a site declaration does.
Plugins are looked up by name when the declaration refers to them as strings,
so a typo fails while the configuration is being assembled rather than halfway
through a build.
"""

from __future__ import annotations

import typing as typ

from markupsafe import Markup

from .config.models import SiteConfigError
from .generator.renderer import MarkdownRenderer

if typ.TYPE_CHECKING:
    from .config.builder import BuildConfigBuilder, Plugin

SYNTAX_HIGHLIGHT = "syntaxhighlight"


def syntax_highlight(builder: BuildConfigBuilder) -> None:
    """Highlight fenced markdown code and expose a ``highlight`` filter."""
    builder.set_markdown_highlighting(enabled=True)
    renderer = MarkdownRenderer(highlight_code=True)

    def _highlight(code: str, language: str | None = None) -> Markup:
        return Markup(renderer.highlight(str(code), language))  # noqa: S704

    builder.add_filter("highlight", _highlight)


syntax_highlight.plugin_name = SYNTAX_HIGHLIGHT  # type: ignore[attr-defined]

PLUGINS: dict[str, Plugin] = {
    SYNTAX_HIGHLIGHT: syntax_highlight,
}


def resolve_plugin(name: str) -> Plugin:
    """Return the plugin registered under ``name``.

    Raises
    ------
    SiteConfigError
        If no plugin is registered under ``name``.
    """
    try:
        return PLUGINS[name]
    except KeyError as exc:
        available = ", ".join(sorted(PLUGINS))
        msg = f"Unknown plugin '{name}'. Known plugins: {available}"
        raise SiteConfigError(msg) from exc


__all__ = ["PLUGINS", "SYNTAX_HIGHLIGHT", "resolve_plugin", "syntax_highlight"]
