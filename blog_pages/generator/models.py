"""Shared dataclasses used by the site build pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path  # noqa: TC003 - used for runtime type metadata


@dc.dataclass(slots=True)
class SourcePage:
    """A template discovered during the scan, before rendering.

    Attributes
    ----------
    input_path : Path
        Template location on disk.
    relative_path : str
        POSIX path of the template relative to the input root.
    extension : str
        Lowercase extension without the leading dot.
    data : dict[str, Any]
        Front matter values.
    body : str
        Template source with the front matter removed.
    output_path : Path or None
        Destination file, or ``None`` when ``permalink: false`` suppresses it.
    url : str or None
        Site-relative URL of the rendered page.
    """

    input_path: Path
    relative_path: str
    extension: str
    data: dict[str, typ.Any]
    body: str
    output_path: Path | None
    url: str | None

    @property
    def file_slug(self) -> str:
        """Return the template's file stem, or its folder name for ``index``."""
        stem = self.input_path.stem
        if stem == "index" and "/" in self.relative_path:
            return self.input_path.parent.name
        return stem

    @property
    def tags(self) -> list[str]:
        """Return the front matter tags as a list of strings."""
        raw = self.data.get("tags")
        if isinstance(raw, str):
            return [raw]
        if isinstance(raw, list):
            return [str(tag) for tag in raw]
        return []

    def as_context(self) -> dict[str, typ.Any]:
        """Return the ``page`` variable exposed to templates."""
        return {
            "url": self.url,
            "input_path": self.relative_path,
            "output_path": str(self.output_path) if self.output_path else None,
            "file_slug": self.file_slug,
            "date": self.data.get("date"),
        }


@dc.dataclass(slots=True)
class BuildResult:
    """Files written by a site build."""

    rendered: list[Path] = dc.field(default_factory=list)
    copied: list[Path] = dc.field(default_factory=list)

    @property
    def written(self) -> list[Path]:
        """Return every written path, rendered pages first."""
        return [*self.rendered, *self.copied]


__all__ = ["BuildResult", "SourcePage"]
