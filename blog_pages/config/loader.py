"""Load build configuration YAML into a frozen :class:`BuildConfig`."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from blog_pages.filters import FILTERS

from .builder import BuildConfigBuilder
from .helpers import _mapping, _optional_str, _read_yaml_mapping, _string_list
from .models import BuildConfig, SiteConfigError


def load_build_config(
    path: Path,
    *,
    input_dir: Path | None = None,
    output_dir: Path | None = None,
) -> BuildConfig:
    """Load the YAML build declaration and freeze it.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML build file (for example, ``build.yaml``).
    input_dir : Path, optional
        Override for the declared input directory.
    output_dir : Path, optional
        Override for the declared output directory.

    Returns
    -------
    BuildConfig
        Frozen configuration with plugins, passthrough rules, template formats,
        filters, and global data applied in that order.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a plugin or filter name is unknown or a section has the wrong shape.

    Examples
    --------
    >>> from pathlib import Path
    >>> from blog_pages.config import load_build_config
    >>> config = load_build_config(Path("config/build.yaml"))  # doctest: +SKIP
    >>> config.plugin_names  # doctest: +SKIP
    ['syntaxhighlight']
    """
    raw = _read_yaml_mapping(path)
    builder = BuildConfigBuilder()
    apply_build_declaration(builder, raw)
    builder.set_directories(input_dir=input_dir, output_dir=output_dir)
    return builder.freeze()


def apply_build_declaration(
    builder: BuildConfigBuilder, raw: cabc.Mapping[str, typ.Any]
) -> None:
    """Apply a parsed YAML build declaration to ``builder``.

    ``extends_default: true`` runs :func:`blog_pages.site.configure` first so a
    file only needs to declare what differs from the site's own setup.
    """
    if raw.get("extends_default"):
        from blog_pages.site import configure

        configure(builder)

    builder.set_directories(
        input_dir=_optional_str(raw.get("input_dir")),
        output_dir=_optional_str(raw.get("output_dir")),
        includes_dir=_optional_str(raw.get("includes_dir")),
    )
    pygments_style = _optional_str(raw.get("pygments_style"))
    if pygments_style:
        builder.set_pygments_style(pygments_style)

    for plugin in _string_list(raw.get("plugins"), field="plugins"):
        builder.add_plugin(plugin)

    builder.add_passthrough_copy(_passthrough_mapping(raw.get("passthrough")))

    if "template_formats" in raw:
        builder.replace_template_formats(
            _string_list(raw.get("template_formats"), field="template_formats")
        )

    for name, filter_name in _filter_names(raw.get("filters")).items():
        builder.add_filter(name, _resolve_filter(filter_name))

    for key, value in _mapping(raw.get("data"), field="data").items():
        builder.add_global_data(str(key), value)


def _passthrough_mapping(value: object) -> dict[str, str]:
    """Flatten the accepted passthrough shapes into one source-to-destination map.

    A mapping is used as-is. A list may mix bare strings (copied to the same
    path) and single-entry mappings (renamed copies).
    """
    if value is None:
        return {}
    if isinstance(value, cabc.Mapping):
        return {str(src): str(dest) for src, dest in value.items()}
    if isinstance(value, list):
        merged: dict[str, str] = {}
        for entry in value:
            match entry:
                case str():
                    merged[entry] = entry
                case cabc.Mapping():
                    merged.update({str(k): str(v) for k, v in entry.items()})
                case _:
                    msg = "Passthrough entries must be strings or mappings."
                    raise SiteConfigError(msg)
        return merged
    msg = "'passthrough' must be a mapping or a list."
    raise SiteConfigError(msg)


def _filter_names(value: object) -> dict[str, str]:
    """Return template filter names mapped to registry names."""
    if isinstance(value, cabc.Mapping):
        return {str(name): str(target) for name, target in value.items()}
    return {name: name for name in _string_list(value, field="filters")}


def _resolve_filter(name: str) -> typ.Callable[..., typ.Any]:
    try:
        return FILTERS[name]
    except KeyError as exc:
        available = ", ".join(sorted(FILTERS))
        msg = f"Unknown filter '{name}'. Known filters: {available}"
        raise SiteConfigError(msg) from exc


__all__ = ["apply_build_declaration", "load_build_config"]
