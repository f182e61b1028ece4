"""Build and style configuration for the blog.

This subpackage turns the site's declarations into frozen values the rest of
the package consumes. Build declarations flow through a
:class:`BuildConfigBuilder` (from Python via :func:`blog_pages.site.configure`
or from YAML via :func:`load_build_config`) and are frozen into a
:class:`BuildConfig`; the style declaration is parsed into a
:class:`StyleConfig` by :func:`load_style_config`.

Examples
--------
>>> from pathlib import Path
>>> from blog_pages.config import load_build_config, load_style_config
>>> build = load_build_config(Path("config/build.yaml"))  # doctest: +SKIP
>>> sorted(build.template_formats)  # doctest: +SKIP
['html', 'md', 'njk']
>>> style = load_style_config(Path("config/style.yaml"))  # doctest: +SKIP
>>> style.extend.screens["dark"]  # doctest: +SKIP
RawBreakpoint(raw='(prefers-color-scheme: dark)')
"""

from .builder import BuildConfigBuilder, Plugin
from .loader import apply_build_declaration, load_build_config
from .models import (
    Breakpoint,
    BuildConfig,
    DesignTokenSet,
    PassthroughRule,
    PluginRegistration,
    RawBreakpoint,
    SiteConfigError,
    StyleConfig,
    TemplateFilter,
    WidthBreakpoint,
)
from .style import build_style_config, load_style_config, parse_breakpoint

__all__ = [
    "Breakpoint",
    "BuildConfig",
    "BuildConfigBuilder",
    "DesignTokenSet",
    "PassthroughRule",
    "Plugin",
    "PluginRegistration",
    "RawBreakpoint",
    "SiteConfigError",
    "StyleConfig",
    "TemplateFilter",
    "WidthBreakpoint",
    "apply_build_declaration",
    "build_style_config",
    "load_build_config",
    "load_style_config",
    "parse_breakpoint",
]
