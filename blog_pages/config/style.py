"""Parse the utility-CSS style declaration into a :class:`StyleConfig`.

The declaration mirrors the familiar ``tailwind.config.js`` shape::

    content:            # optional; ``purge`` is accepted as a legacy alias
      - ./*.njk
    theme:
      extend:
        colors:
          white: "#F9F9F9"
        screens:
          tablet: 640px
          dark:
            raw: "(prefers-color-scheme: dark)"

Only ``theme.extend`` is supported: tokens are layered over the base theme,
never replacing it.
"""

from __future__ import annotations

import collections.abc as cabc
import re
import typing as typ
from types import MappingProxyType

from .helpers import _mapping, _read_yaml_mapping, _string_list
from .models import (
    Breakpoint,
    DesignTokenSet,
    RawBreakpoint,
    SiteConfigError,
    StyleConfig,
    WidthBreakpoint,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

BARE_NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?")


def load_style_config(path: Path) -> StyleConfig:
    """Load the YAML style declaration at ``path``.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If colors or screens are malformed.
    """
    return build_style_config(_read_yaml_mapping(path))


def build_style_config(raw: cabc.Mapping[str, typ.Any]) -> StyleConfig:
    """Build a :class:`StyleConfig` from an already parsed declaration."""
    theme = _mapping(raw.get("theme"), field="theme")
    extend = _mapping(theme.get("extend"), field="theme.extend")
    colors = _build_colors(_mapping(extend.get("colors"), field="colors"))
    screens = _build_screens(_mapping(extend.get("screens"), field="screens"))

    content_raw = raw["content"] if "content" in raw else raw.get("purge")
    content: tuple[str, ...] | None = None
    if content_raw is not None:
        content = tuple(_string_list(content_raw, field="content"))

    return StyleConfig(
        extend=DesignTokenSet(
            colors=MappingProxyType(colors), screens=MappingProxyType(screens)
        ),
        content=content,
    )


def parse_breakpoint(name: str, value: object) -> Breakpoint:
    """Return the breakpoint described by ``value``.

    A scalar is a minimum width; a mapping with a ``raw`` key is a media query
    emitted verbatim.
    """
    match value:
        case bool():
            msg = f"Screen '{name}' must be a width or a mapping with 'raw'."
            raise SiteConfigError(msg)
        case str() | int() | float():
            width = _css_length(value)
            if not width:
                msg = f"Screen '{name}' must not be empty."
                raise SiteConfigError(msg)
            return WidthBreakpoint(width=width)
        case cabc.Mapping() if "raw" in value:
            return RawBreakpoint(raw=str(value["raw"]))
        case cabc.Mapping() if "min" in value:
            return WidthBreakpoint(width=_css_length(value["min"]))
        case _:
            msg = f"Screen '{name}' must be a width or a mapping with 'raw'."
            raise SiteConfigError(msg)


def _css_length(value: object) -> str:
    """Return ``value`` as a CSS length, reading bare numbers as pixels."""
    text = str(value).strip()
    if BARE_NUMBER_PATTERN.fullmatch(text):
        return f"{text}px"
    return text


def _build_colors(payload: cabc.Mapping[str, typ.Any]) -> dict[str, str]:
    colors: dict[str, str] = {}
    for name, value in payload.items():
        if isinstance(value, cabc.Mapping):
            for shade, shade_value in value.items():
                key = f"{name}-{shade}"
                colors[key] = _color_value(key, shade_value)
        else:
            colors[str(name)] = _color_value(str(name), value)
    return colors


def _color_value(name: str, value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        msg = f"Color '{name}' must be a non-empty string."
        raise SiteConfigError(msg)
    return value.strip()


def _build_screens(payload: cabc.Mapping[str, typ.Any]) -> dict[str, Breakpoint]:
    return {
        str(name): parse_breakpoint(str(name), value) for name, value in payload.items()
    }


__all__ = ["build_style_config", "load_style_config", "parse_breakpoint"]
