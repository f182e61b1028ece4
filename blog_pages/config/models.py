"""Typed dataclasses describing blog build and style configuration."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path
from types import MappingProxyType

TemplateFilter = typ.Callable[..., typ.Any]


class SiteConfigError(ValueError):
    """Raised when the build or style configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class PluginRegistration:
    """A plugin activated in the rendering pipeline, in registration order."""

    name: str


@dc.dataclass(frozen=True, slots=True)
class PassthroughRule:
    """Copy ``source`` (file, directory, or glob) to ``destination`` unchanged."""

    source: str
    destination: str


@dc.dataclass(frozen=True, slots=True)
class BuildConfig:
    """Frozen build declaration handed to :class:`~blog_pages.generator.SiteBuilder`.

    Attributes
    ----------
    plugins : tuple[PluginRegistration, ...]
        Activated plugins in the order they were registered.
    passthrough : tuple[PassthroughRule, ...]
        Passthrough rules; each source pattern appears at most once.
    template_formats : frozenset[str]
        Extensions (without the leading dot) the pipeline processes.
    filters : Mapping[str, TemplateFilter]
        Template filters exposed to every rendered template.
    global_data : Mapping[str, Any]
        Values available to every template by key.
    input_dir, output_dir, includes_dir : Path
        Source root, output root, and layout directory (relative to the input
        root when not absolute).
    markdown_highlighting : bool
        Whether fenced code in markdown is rendered through Pygments.
    pygments_style : str
        Pygments style used for highlighted blocks and the ``pygments_css``
        template variable.
    """

    plugins: tuple[PluginRegistration, ...] = ()
    passthrough: tuple[PassthroughRule, ...] = ()
    template_formats: frozenset[str] = frozenset()
    filters: typ.Mapping[str, TemplateFilter] = dc.field(
        default_factory=lambda: MappingProxyType({})
    )
    global_data: typ.Mapping[str, typ.Any] = dc.field(
        default_factory=lambda: MappingProxyType({})
    )
    input_dir: Path = Path()
    output_dir: Path = Path("_site")
    includes_dir: Path = Path("_includes")
    markdown_highlighting: bool = False
    pygments_style: str = "monokai"

    @property
    def passthrough_map(self) -> dict[str, str]:
        """Return the passthrough rules as a source-to-destination mapping."""
        return {rule.source: rule.destination for rule in self.passthrough}

    @property
    def plugin_names(self) -> list[str]:
        """Return the names of the registered plugins in activation order."""
        return [plugin.name for plugin in self.plugins]

    @property
    def includes_path(self) -> Path:
        """Return the includes directory resolved against the input root."""
        if self.includes_dir.is_absolute():
            return self.includes_dir
        return self.input_dir / self.includes_dir


@dc.dataclass(frozen=True, slots=True)
class WidthBreakpoint:
    """Breakpoint that activates at a minimum viewport width."""

    width: str


@dc.dataclass(frozen=True, slots=True)
class RawBreakpoint:
    """Breakpoint whose media query is emitted verbatim."""

    raw: str


Breakpoint = WidthBreakpoint | RawBreakpoint


@dc.dataclass(frozen=True, slots=True)
class DesignTokenSet:
    """Named colors and breakpoints layered over the generator's base theme."""

    colors: typ.Mapping[str, str] = dc.field(
        default_factory=lambda: MappingProxyType({})
    )
    screens: typ.Mapping[str, Breakpoint] = dc.field(
        default_factory=lambda: MappingProxyType({})
    )


@dc.dataclass(frozen=True, slots=True)
class StyleConfig:
    """Style declaration consumed by the utility stylesheet builder.

    ``content`` limits the class-usage scan to matching files; ``None`` means
    nothing is purged.
    """

    extend: DesignTokenSet = dc.field(default_factory=DesignTokenSet)
    content: tuple[str, ...] | None = None


__all__ = [
    "Breakpoint",
    "BuildConfig",
    "DesignTokenSet",
    "PassthroughRule",
    "PluginRegistration",
    "RawBreakpoint",
    "SiteConfigError",
    "StyleConfig",
    "TemplateFilter",
    "WidthBreakpoint",
]
