"""Assemble a :class:`BuildConfig` through explicit declaration steps.

A :class:`BuildConfigBuilder` is threaded through each declaration (the site's
``configure`` function, plugins, the YAML loader) and frozen once all of them
have run. Only the frozen value reaches the site builder, so no declaration
can change the pipeline after the build starts.

Examples
--------
>>> from blog_pages.config.builder import BuildConfigBuilder
>>> builder = BuildConfigBuilder()
>>> builder.add_passthrough_copy({"assets": "assets", "_redirects": "_redirects"})
>>> builder.replace_template_formats(["md", "njk"])
>>> config = builder.freeze()
>>> sorted(config.template_formats)
['md', 'njk']
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path
from types import MappingProxyType

from .models import (
    BuildConfig,
    PassthroughRule,
    PluginRegistration,
    SiteConfigError,
    TemplateFilter,
)

Plugin = typ.Callable[["BuildConfigBuilder"], None]


class BuildConfigBuilder:
    """Collect build declarations and freeze them into a :class:`BuildConfig`."""

    def __init__(self) -> None:
        self._plugins: list[PluginRegistration] = []
        self._passthrough: dict[str, str] = {}
        self._template_formats: frozenset[str] = frozenset()
        self._filters: dict[str, TemplateFilter] = {}
        self._global_data: dict[str, typ.Any] = {}
        self._input_dir = Path()
        self._output_dir = Path("_site")
        self._includes_dir = Path("_includes")
        self._markdown_highlighting = False
        self._pygments_style = "monokai"
        self._frozen = False

    def add_plugin(self, plugin: str | Plugin) -> None:
        """Activate ``plugin`` by registry name or as a callable.

        Parameters
        ----------
        plugin : str or callable
            Name of a plugin known to :mod:`blog_pages.plugins`, or a callable
            receiving this builder.

        Raises
        ------
        SiteConfigError
            If ``plugin`` names a plugin that is not registered.
        """
        self._check_open()
        if isinstance(plugin, str):
            from blog_pages.plugins import resolve_plugin

            name = plugin
            install = resolve_plugin(name)
        else:
            install = plugin
            name = getattr(plugin, "plugin_name", None) or getattr(
                plugin, "__name__", type(plugin).__name__
            )
        self._plugins.append(PluginRegistration(name=name))
        install(self)

    def add_passthrough_copy(self, mapping: cabc.Mapping[str, str]) -> None:
        """Register passthrough rules mapping source patterns to destinations.

        Rules accumulate across calls; re-declaring a source replaces only its
        destination.

        Raises
        ------
        SiteConfigError
            If ``mapping`` is not a mapping of non-empty strings.
        """
        self._check_open()
        if not isinstance(mapping, cabc.Mapping):
            msg = "Passthrough copy expects a mapping of source to destination."
            raise SiteConfigError(msg)
        for source, destination in mapping.items():
            source_text = _normalize_pattern(source, field="source")
            destination_text = _normalize_pattern(destination, field="destination")
            self._passthrough[source_text] = destination_text

    def add_passthrough(self, source: str) -> None:
        """Copy ``source`` to the same relative path in the output."""
        self.add_passthrough_copy({source: source})

    def add_passthrough_as(self, source: str, destination: str) -> None:
        """Copy ``source`` to ``destination`` in the output."""
        self.add_passthrough_copy({source: destination})

    def replace_template_formats(self, formats: str | cabc.Iterable[str]) -> None:
        """Replace the whole template-format set with ``formats``.

        Earlier calls are discarded rather than merged. ``formats`` may be an
        iterable of extensions or a comma-separated string.
        """
        self._check_open()
        items = formats.split(",") if isinstance(formats, str) else formats
        normalized: set[str] = set()
        for item in items:
            extension = str(item).strip().lstrip(".").lower()
            if extension:
                normalized.add(extension)
        self._template_formats = frozenset(normalized)

    def add_filter(self, name: str, function: TemplateFilter) -> None:
        """Expose ``function`` to templates as ``name``; later names win."""
        self._check_open()
        if not callable(function):
            msg = f"Filter '{name}' must be callable."
            raise SiteConfigError(msg)
        self._filters[name] = function

    def add_global_data(self, key: str, value: typ.Any) -> None:  # noqa: ANN401
        """Make ``value`` available to every template as ``key``."""
        self._check_open()
        self._global_data[key] = value

    def set_directories(
        self,
        *,
        input_dir: Path | str | None = None,
        output_dir: Path | str | None = None,
        includes_dir: Path | str | None = None,
    ) -> None:
        """Override the input, output, or includes directory."""
        self._check_open()
        if input_dir is not None:
            self._input_dir = Path(input_dir)
        if output_dir is not None:
            self._output_dir = Path(output_dir)
        if includes_dir is not None:
            self._includes_dir = Path(includes_dir)

    def set_markdown_highlighting(self, *, enabled: bool = True) -> None:
        """Toggle Pygments highlighting for fenced code in markdown."""
        self._check_open()
        self._markdown_highlighting = enabled

    def set_pygments_style(self, style: str) -> None:
        """Select the Pygments style used for highlighted code."""
        self._check_open()
        self._pygments_style = style

    @property
    def template_formats(self) -> frozenset[str]:
        """Return the currently effective template-format set."""
        return self._template_formats

    def freeze(self) -> BuildConfig:
        """Return the immutable :class:`BuildConfig` and close the builder."""
        self._check_open()
        self._frozen = True
        return BuildConfig(
            plugins=tuple(self._plugins),
            passthrough=tuple(
                PassthroughRule(source=source, destination=destination)
                for source, destination in self._passthrough.items()
            ),
            template_formats=self._template_formats,
            filters=MappingProxyType(dict(self._filters)),
            global_data=MappingProxyType(dict(self._global_data)),
            input_dir=self._input_dir,
            output_dir=self._output_dir,
            includes_dir=self._includes_dir,
            markdown_highlighting=self._markdown_highlighting,
            pygments_style=self._pygments_style,
        )

    def _check_open(self) -> None:
        if self._frozen:
            msg = "Build configuration is frozen; create a new builder."
            raise SiteConfigError(msg)


def _normalize_pattern(value: object, *, field: str) -> str:
    """Return ``value`` as a relative POSIX pattern or raise SiteConfigError."""
    if not isinstance(value, str | Path):
        msg = f"Passthrough {field} must be a string, got {type(value).__name__}."
        raise SiteConfigError(msg)
    text = str(value).strip().replace("\\", "/")
    while text.startswith("./"):
        text = text[2:]
    text = text.rstrip("/")
    if not text:
        msg = f"Passthrough {field} must not be empty."
        raise SiteConfigError(msg)
    return text


__all__ = ["BuildConfigBuilder", "Plugin"]
