"""Utilities for scanning, rendering, and writing the blog site."""

from .models import BuildResult, SourcePage
from .passthrough import PassthroughCopy, resolve_passthrough
from .renderer import MarkdownRenderer
from .site_builder import LayoutError, SiteBuilder

__all__ = [
    "BuildResult",
    "LayoutError",
    "MarkdownRenderer",
    "PassthroughCopy",
    "SiteBuilder",
    "SourcePage",
    "resolve_passthrough",
]
