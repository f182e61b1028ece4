"""Generate utility CSS from the blog's style declaration.

:class:`UtilityStylesheetBuilder` layers the declared tokens over a small base
theme and emits color utilities (``text-*``, ``bg-*``, ``border-*``) plus one
responsive variant block per screen. Width screens become
``@media (min-width: ...)``; raw screens are copied into the ``@media``
prelude untouched, which is how ``dark:`` utilities end up behind
``@media (prefers-color-scheme: dark)``.

When the declaration names a content scope, candidate class names are
extracted from the matching files and only utilities that occur there are
written.

Examples
--------
>>> from blog_pages.site import default_style
>>> from blog_pages.stylesheet import UtilityStylesheetBuilder
>>> css = UtilityStylesheetBuilder(default_style()).render()
>>> "@media (prefers-color-scheme: dark)" in css
True
"""

from __future__ import annotations

import dataclasses as dc
import glob
import json
import re
import typing as typ
from pathlib import Path

from .config.models import RawBreakpoint, StyleConfig, WidthBreakpoint

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config.models import Breakpoint

BASE_COLORS: dict[str, str] = {
    "transparent": "transparent",
    "black": "#000",
    "white": "#fff",
    "gray-100": "#f7fafc",
    "gray-200": "#edf2f7",
    "gray-300": "#e2e8f0",
    "gray-400": "#cbd5e0",
    "gray-500": "#a0aec0",
    "gray-600": "#718096",
    "gray-700": "#4a5568",
    "gray-800": "#2d3748",
    "gray-900": "#1a202c",
}

BASE_SCREENS: dict[str, Breakpoint] = {
    "sm": WidthBreakpoint(width="640px"),
    "md": WidthBreakpoint(width="768px"),
    "lg": WidthBreakpoint(width="1024px"),
    "xl": WidthBreakpoint(width="1280px"),
}

COLOR_PROPERTIES: dict[str, str] = {
    "text": "color",
    "bg": "background-color",
    "border": "border-color",
}

CLASS_CANDIDATE_PATTERN = re.compile(r"[A-Za-z0-9_\-/:.]+(?<!:)")
_CSS_ESCAPE_PATTERN = re.compile(r"([:/.])")


@dc.dataclass(frozen=True, slots=True)
class Utility:
    """A single utility class and the declaration it applies."""

    class_name: str
    css_property: str
    value: str

    def render(self, prefix: str = "", indent: str = "") -> str:
        """Return the CSS rule, optionally as a ``prefix:`` variant."""
        name = f"{prefix}:{self.class_name}" if prefix else self.class_name
        selector = "." + _CSS_ESCAPE_PATTERN.sub(r"\\\1", name)
        return f"{indent}{selector} {{ {self.css_property}: {self.value}; }}"


class UtilityStylesheetBuilder:
    """Render a stylesheet from a :class:`StyleConfig`."""

    def __init__(self, style: StyleConfig, *, root: Path | None = None) -> None:
        """Bind the builder to ``style``.

        Parameters
        ----------
        style : StyleConfig
            Parsed style declaration.
        root : Path, optional
            Directory the content globs are relative to; defaults to the
            current working directory.
        """
        self.style = style
        self.root = root or Path.cwd()

    @property
    def colors(self) -> dict[str, str]:
        """Return the base palette with the declared colors layered on top."""
        return {**BASE_COLORS, **self.style.extend.colors}

    @property
    def screens(self) -> dict[str, Breakpoint]:
        """Return the base screens with the declared screens layered on top."""
        return {**BASE_SCREENS, **self.style.extend.screens}

    @staticmethod
    def media_query(breakpoint: Breakpoint) -> str:
        """Return the ``@media`` prelude for ``breakpoint``."""
        match breakpoint:
            case RawBreakpoint(raw=raw):
                return raw
            case WidthBreakpoint(width=width):
                return f"(min-width: {width})"
        msg = f"Unsupported breakpoint {breakpoint!r}"
        raise TypeError(msg)

    def utilities(self) -> list[Utility]:
        """Return every color utility in palette order."""
        return [
            Utility(f"{prefix}-{name}", css_property, value)
            for name, value in self.colors.items()
            for prefix, css_property in COLOR_PROPERTIES.items()
        ]

    def scan_used_classes(self) -> set[str] | None:
        """Return candidate class names found in the content scope.

        Returns ``None`` when the declaration has no content scope, meaning
        every utility is kept.
        """
        if self.style.content is None:
            return None
        found: set[str] = set()
        for pattern in self.style.content:
            matches = glob.glob(pattern, root_dir=self.root, recursive=True)
            for match in sorted(matches):
                path = self.root / match
                if not path.is_file():
                    continue
                text = path.read_text(encoding="utf-8", errors="ignore")
                found.update(CLASS_CANDIDATE_PATTERN.findall(text))
        return found

    def render(self, used_classes: cabc.Set[str] | None = None) -> str:
        """Render the stylesheet.

        Parameters
        ----------
        used_classes : Set[str], optional
            Class names to keep. When omitted the content scope is scanned;
            without a content scope nothing is purged.

        Returns
        -------
        str
            CSS text ending with a newline.
        """
        keep = used_classes if used_classes is not None else self.scan_used_classes()
        utilities = self.utilities()

        blocks: list[str] = [self._render_custom_properties()]
        base_rules = [
            utility.render()
            for utility in utilities
            if keep is None or utility.class_name in keep
        ]
        if base_rules:
            blocks.append("\n".join(base_rules))

        for screen, breakpoint in self.screens.items():
            rules = [
                utility.render(prefix=screen, indent="  ")
                for utility in utilities
                if keep is None or f"{screen}:{utility.class_name}" in keep
            ]
            if not rules:
                continue
            body = "\n".join(rules)
            blocks.append(f"@media {self.media_query(breakpoint)} {{\n{body}\n}}")
        return "\n\n".join(blocks) + "\n"

    def _render_custom_properties(self) -> str:
        lines = [f"  --color-{name}: {value};" for name, value in self.colors.items()]
        return ":root {\n" + "\n".join(lines) + "\n}"


def export_tailwind_config(style: StyleConfig) -> str:
    """Return ``style`` as a ``tailwind.config.js`` module.

    Raw screens keep their ``{"raw": ...}`` shape; a missing content scope is
    left out so Tailwind keeps every utility.
    """
    screens: dict[str, typ.Any] = {}
    for name, breakpoint in style.extend.screens.items():
        match breakpoint:
            case RawBreakpoint(raw=raw):
                screens[name] = {"raw": raw}
            case WidthBreakpoint(width=width):
                screens[name] = width
    payload: dict[str, typ.Any] = {}
    if style.content is not None:
        payload["purge"] = list(style.content)
    payload["theme"] = {
        "extend": {"screens": screens, "colors": dict(style.extend.colors)}
    }
    return f"module.exports = {json.dumps(payload, indent=2)};\n"


__all__ = [
    "BASE_COLORS",
    "BASE_SCREENS",
    "UtilityStylesheetBuilder",
    "Utility",
    "export_tailwind_config",
]
