"""Markdown rendering for posts and pages.

Posts are written in markdown with fenced code blocks. When the
``syntaxhighlight`` plugin is active, fences are highlighted with Pygments at
build time and each block carries a ``data-language`` attribute so layouts can
label it. Without the plugin fences render as plain ``<pre><code>``.
"""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

FENCE_LANGUAGE_PATTERN = re.compile(
    r"^[ ]{0,3}(?:`{3,}|~{3,})[ ]*([A-Za-z0-9_+#.-]+)?[^\n]*\n"
    r".*?^[ ]{0,3}(?:`{3,}|~{3,})[ ]*$",
    re.DOTALL | re.MULTILINE,
)
HIGHLIGHT_CSS_CLASS = "codehilite"
_BLOCK_OPEN_TAG = re.compile(rf'<div class="{HIGHLIGHT_CSS_CLASS}">')

MARKDOWN_EXTENSIONS: tuple[str, ...] = ("fenced_code", "tables", "sane_lists", "toc")


def _language_tag(language: str) -> str:
    safe = escape(language, quote=True)
    return f'<div class="{HIGHLIGHT_CSS_CLASS}" data-language="{safe}">'


class MarkdownRenderer:
    """Convert markdown to HTML, optionally highlighting fenced code.

    Parameters
    ----------
    pygments_style : str, optional
        Pygments style used for highlighted blocks and :attr:`stylesheet`.
    highlight_code : bool, optional
        Run fenced code through Pygments. Defaults to ``False``.
    """

    def __init__(
        self, pygments_style: str = "monokai", *, highlight_code: bool = False
    ) -> None:
        self.pygments_style = pygments_style
        self.highlight_code = highlight_code
        self._formatter = HtmlFormatter(
            style=pygments_style, cssclass=HIGHLIGHT_CSS_CLASS
        )
        self._markdown = Markdown(
            extensions=self._extensions(),
            extension_configs=self._extension_configs(),
        )

    def _extensions(self) -> list[str]:
        extensions = list(MARKDOWN_EXTENSIONS)
        if self.highlight_code:
            extensions.append("codehilite")
        return extensions

    def _extension_configs(self) -> dict[str, dict[str, typ.Any]]:
        if not self.highlight_code:
            return {}
        return {
            "codehilite": {
                "linenums": False,
                "guess_lang": False,
                "css_class": HIGHLIGHT_CSS_CLASS,
                "pygments_style": self.pygments_style,
            }
        }

    @property
    def stylesheet(self) -> str:
        """Return the Pygments CSS for highlighted blocks."""
        return self._formatter.get_style_defs(f".{HIGHLIGHT_CSS_CLASS}")

    def render(self, text: str) -> str:
        """Return ``text`` converted to HTML.

        The markdown instance is reset before each conversion so footnotes
        and heading ids do not leak between pages.
        """
        if not text.strip():
            return ""
        html = self._markdown.reset().convert(text)
        if not self.highlight_code:
            return html
        languages = [
            match.group(1) or "text" for match in FENCE_LANGUAGE_PATTERN.finditer(text)
        ]
        if not languages:
            return html
        remaining = iter(languages)
        return _BLOCK_OPEN_TAG.sub(
            lambda _match: _language_tag(next(remaining, "text")),
            html,
            len(languages),
        )

    def highlight(self, code: str, language: str | None = None) -> str:
        """Highlight a single snippet, falling back to plain text lexing.

        Unknown language names are not an error; they render as ``text`` but
        keep the requested name in ``data-language``.
        """
        name = language or "text"
        try:
            lexer = get_lexer_by_name(name)
        except ClassNotFound:
            lexer = get_lexer_by_name("text")
        html = highlight(code, lexer, self._formatter)
        return _BLOCK_OPEN_TAG.sub(lambda _match: _language_tag(name), html, 1)


__all__ = ["HIGHLIGHT_CSS_CLASS", "MarkdownRenderer"]
