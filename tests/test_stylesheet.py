"""Unit tests for the style declaration and the utility stylesheet builder."""

from __future__ import annotations

import json
from pathlib import Path
from textwrap import dedent

import pytest

from blog_pages.config import (
    RawBreakpoint,
    SiteConfigError,
    StyleConfig,
    WidthBreakpoint,
    build_style_config,
    load_style_config,
)
from blog_pages.site import default_style
from blog_pages.stylesheet import UtilityStylesheetBuilder, export_tailwind_config

TAILWIND_PREFIX = "module.exports = "


def _rule_lines(css: str) -> list[str]:
    return [line.strip() for line in css.splitlines()]


def test_raw_screen_is_emitted_verbatim() -> None:
    css = UtilityStylesheetBuilder(default_style()).render()
    assert "@media (prefers-color-scheme: dark) {" in css
    assert ".dark\\:text-white { color: #F9F9F9; }" in _rule_lines(css)


def test_extend_colors_keep_base_palette() -> None:
    builder = UtilityStylesheetBuilder(default_style())
    assert builder.colors["white"] == "#F9F9F9"
    assert builder.colors["black"] == "#000"
    lines = _rule_lines(builder.render())
    assert ".text-white { color: #F9F9F9; }" in lines
    assert ".text-white { color: #fff; }" not in lines
    assert ".bg-gray-900 { background-color: #1a202c; }" in lines


def test_width_screens_use_min_width() -> None:
    assert (
        UtilityStylesheetBuilder.media_query(WidthBreakpoint(width="640px"))
        == "(min-width: 640px)"
    )
    assert (
        UtilityStylesheetBuilder.media_query(RawBreakpoint(raw="print"))
        == "print"
    )


def test_content_scope_purges_unused_utilities(tmp_path: Path) -> None:
    (tmp_path / "index.html").write_text(
        '<p class="text-white dark:bg-black">Hi</p>', encoding="utf-8"
    )
    style = StyleConfig(extend=default_style().extend, content=("*.html",))
    builder = UtilityStylesheetBuilder(style, root=tmp_path)
    assert {"text-white", "dark:bg-black"} <= builder.scan_used_classes()

    lines = _rule_lines(builder.render())
    assert ".text-white { color: #F9F9F9; }" in lines
    assert ".dark\\:bg-black { background-color: #000; }" in lines
    assert not any(line.startswith(".bg-black ") for line in lines)
    assert "@media (min-width: 640px) {" not in lines


def test_without_content_scope_nothing_is_purged() -> None:
    builder = UtilityStylesheetBuilder(default_style())
    assert builder.scan_used_classes() is None
    assert "@media (min-width: 640px) {" in _rule_lines(builder.render())


def test_load_style_config_reads_yaml(tmp_path: Path) -> None:
    path = tmp_path / "style.yaml"
    path.write_text(
        dedent(
            """
            purge:
              - ./*.njk
              - ./_includes/*.njk
            theme:
              extend:
                screens:
                  tablet: 640px
                  dark:
                    raw: "(prefers-color-scheme: dark)"
                colors:
                  white: "#F9F9F9"
                  brand:
                    500: "#3182ce"
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    style = load_style_config(path)
    assert style.content == ("./*.njk", "./_includes/*.njk")
    assert style.extend.screens["tablet"] == WidthBreakpoint(width="640px")
    assert style.extend.screens["dark"] == RawBreakpoint(
        raw="(prefers-color-scheme: dark)"
    )
    assert style.extend.colors == {"white": "#F9F9F9", "brand-500": "#3182ce"}


def test_repository_style_config_matches_default() -> None:
    path = Path(__file__).resolve().parents[1] / "config" / "style.yaml"
    assert load_style_config(path) == default_style()


def test_malformed_screen_is_rejected() -> None:
    raw = {"theme": {"extend": {"screens": {"dark": ["prefers-color-scheme"]}}}}
    with pytest.raises(SiteConfigError, match="Screen 'dark'"):
        build_style_config(raw)


def test_non_string_color_is_rejected() -> None:
    with pytest.raises(SiteConfigError, match="Color 'white'"):
        build_style_config({"theme": {"extend": {"colors": {"white": None}}}})


def test_export_tailwind_config_keeps_raw_screens() -> None:
    text = export_tailwind_config(default_style())
    assert text.startswith(TAILWIND_PREFIX)
    payload = json.loads(text[len(TAILWIND_PREFIX) :].rstrip().rstrip(";"))
    assert "purge" not in payload
    assert payload["theme"]["extend"]["screens"] == {
        "dark": {"raw": "(prefers-color-scheme: dark)"}
    }
    assert payload["theme"]["extend"]["colors"] == {"white": "#F9F9F9"}


@pytest.mark.parametrize(
    ("value", "expected"),
    [(640, "640px"), ("768", "768px"), ("48em", "48em"), ({"min": 1024}, "1024px")],
)
def test_bare_number_screens_become_pixels(value: object, expected: str) -> None:
    raw = {"theme": {"extend": {"screens": {"tablet": value}}}}
    breakpoint = build_style_config(raw).extend.screens["tablet"]
    assert breakpoint == WidthBreakpoint(width=expected)
    assert UtilityStylesheetBuilder.media_query(breakpoint) == (
        f"(min-width: {expected})"
    )


def test_boolean_screen_is_rejected() -> None:
    raw = {"theme": {"extend": {"screens": {"tablet": True}}}}
    with pytest.raises(SiteConfigError, match="Screen 'tablet'"):
        build_style_config(raw)
