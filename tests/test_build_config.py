"""Unit tests for assembling and freezing the build configuration.

These tests exercise :class:`blog_pages.config.BuildConfigBuilder` and the
blog's own :func:`blog_pages.site.configure` declaration: passthrough rules
accumulate across call shapes, the template-format set is replaced rather
than merged, filters resolve last-registration-wins, plugins fail fast, and
the frozen :class:`BuildConfig` cannot be changed afterwards.
"""

from __future__ import annotations

import dataclasses as dc

import pytest

from blog_pages.config import (
    BuildConfig,
    BuildConfigBuilder,
    PassthroughRule,
    SiteConfigError,
)
from blog_pages.plugins import SYNTAX_HIGHLIGHT
from blog_pages.site import PASSTHROUGH, configure
from blog_pages.social import social


def test_batch_passthrough_matches_single_declarations() -> None:
    """The batch mapping form should equal the union of single declarations."""
    batch = BuildConfigBuilder()
    batch.add_passthrough_copy(
        {"assets": "assets", "_redirects": "_redirects", "vendor/x.js": "js/x.js"}
    )

    singles = BuildConfigBuilder()
    singles.add_passthrough_as("vendor/x.js", "js/x.js")
    singles.add_passthrough("_redirects")
    singles.add_passthrough("assets")

    assert set(batch.freeze().passthrough) == set(singles.freeze().passthrough)


def test_passthrough_declarations_accumulate() -> None:
    """Later declarations add rules and only override exact-key collisions."""
    builder = BuildConfigBuilder()
    builder.add_passthrough_copy({"assets": "assets", "fonts": "fonts"})
    builder.add_passthrough_copy({"assets": "static"})
    config = builder.freeze()
    assert config.passthrough_map == {"assets": "static", "fonts": "fonts"}


def test_passthrough_patterns_are_normalized() -> None:
    """Leading ``./`` and trailing slashes should not create distinct rules."""
    builder = BuildConfigBuilder()
    builder.add_passthrough("./assets/")
    builder.add_passthrough("assets")
    assert builder.freeze().passthrough == (PassthroughRule("assets", "assets"),)


def test_passthrough_rejects_non_mapping() -> None:
    builder = BuildConfigBuilder()
    with pytest.raises(SiteConfigError):
        builder.add_passthrough_copy(["assets"])  # type: ignore[arg-type]


def test_template_formats_are_replaced_not_merged() -> None:
    """Setting the formats twice should leave only the second set."""
    builder = BuildConfigBuilder()
    builder.replace_template_formats(["md", "njk"])
    builder.replace_template_formats(["md", "jpg", "png", "njk"])
    assert builder.freeze().template_formats == frozenset({"md", "jpg", "png", "njk"})


def test_template_formats_accept_comma_separated_string() -> None:
    builder = BuildConfigBuilder()
    builder.replace_template_formats(".MD, njk,,html")
    assert builder.template_formats == frozenset({"md", "njk", "html"})


def test_last_registered_filter_wins() -> None:
    builder = BuildConfigBuilder()
    builder.add_filter("shout", str.upper)
    builder.add_filter("shout", str.title)
    config = builder.freeze()
    assert config.filters["shout"]("hello there") == "Hello There"


def test_unknown_plugin_fails_fast() -> None:
    builder = BuildConfigBuilder()
    with pytest.raises(SiteConfigError, match="Unknown plugin 'sparkles'"):
        builder.add_plugin("sparkles")


def test_callable_plugin_receives_builder() -> None:
    """A plugin callable should be recorded by name and run against the builder."""

    def add_greeting(builder: BuildConfigBuilder) -> None:
        builder.add_global_data("greeting", "hi")

    builder = BuildConfigBuilder()
    builder.add_plugin(add_greeting)
    config = builder.freeze()
    assert config.plugin_names == ["add_greeting"]
    assert config.global_data["greeting"] == "hi"


def test_frozen_config_is_immutable() -> None:
    builder = BuildConfigBuilder()
    builder.add_filter("social", social)
    config = builder.freeze()
    with pytest.raises(dc.FrozenInstanceError):
        config.template_formats = frozenset({"md"})  # type: ignore[misc]
    with pytest.raises(TypeError):
        config.filters["other"] = str  # type: ignore[index]


def test_builder_rejects_changes_after_freeze() -> None:
    builder = BuildConfigBuilder()
    builder.freeze()
    with pytest.raises(SiteConfigError, match="frozen"):
        builder.add_passthrough("assets")


def test_site_configure_declares_the_blog_build() -> None:
    """The blog declaration should wire highlighting, assets, and ``social``."""
    builder = BuildConfigBuilder()
    configure(builder)
    config = builder.freeze()

    assert isinstance(config, BuildConfig)
    assert config.plugin_names == [SYNTAX_HIGHLIGHT]
    assert config.markdown_highlighting is True
    assert config.passthrough_map == PASSTHROUGH
    assert config.template_formats == frozenset({"md", "njk", "html"})
    assert config.filters["social"] is social
    assert "highlight" in config.filters


def test_highlight_filter_marks_language() -> None:
    builder = BuildConfigBuilder()
    builder.add_plugin(SYNTAX_HIGHLIGHT)
    html = builder.freeze().filters["highlight"]("x = 1", "python")
    assert 'data-language="python"' in html
