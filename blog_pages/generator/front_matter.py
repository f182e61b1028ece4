"""Split YAML front matter from template sources."""

from __future__ import annotations

import typing as typ

import frontmatter
import yaml

from blog_pages.config import SiteConfigError

_YAML_HANDLER = frontmatter.YAMLHandler()


def split_front_matter(text: str) -> tuple[dict[str, typ.Any], str]:
    """Return ``(data, body)`` for a template that may start with front matter.

    ``frontmatter.loads`` silently drops metadata that is not a mapping, so the
    YAML handler is driven directly to report that case.

    Raises
    ------
    SiteConfigError
        If the front matter block is not valid YAML or not a mapping.
    """
    if not _YAML_HANDLER.detect(text):
        return {}, text
    try:
        raw_front_matter, body = _YAML_HANDLER.split(text)
    except ValueError:
        return {}, text
    try:
        loaded = _YAML_HANDLER.load(raw_front_matter)
    except yaml.YAMLError as exc:
        msg = f"Front matter is not valid YAML: {exc}"
        raise SiteConfigError(msg) from exc
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        msg = "Front matter must be a YAML mapping."
        raise SiteConfigError(msg)
    return dict(loaded), body.lstrip("\r\n")


__all__ = ["split_front_matter"]
