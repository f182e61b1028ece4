"""Utility helpers shared by the blog configuration loaders."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from ruamel.yaml import YAML

from .models import SiteConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path


def _read_yaml_mapping(path: Path) -> dict[str, typ.Any]:
    """Load ``path`` as YAML 1.2 and return its top-level mapping.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return dict(loaded)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _string_list(value: object, *, field: str) -> list[str]:
    """Normalize a string or list of scalars into a list of non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [segment.strip() for segment in value.split(",") if segment.strip()]
    if isinstance(value, list):
        normalized: list[str] = []
        for segment in value:
            text = str(segment).strip()
            if text:
                normalized.append(text)
        return normalized
    msg = f"'{field}' must be a string or a list of strings."
    raise SiteConfigError(msg)


def _mapping(value: object, *, field: str) -> cabc.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating ``None`` as empty."""
    if value is None:
        return {}
    if not isinstance(value, cabc.Mapping):
        msg = f"'{field}' must be a mapping."
        raise SiteConfigError(msg)
    return value


__all__ = ["_mapping", "_optional_str", "_read_yaml_mapping", "_string_list"]
