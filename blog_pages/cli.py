"""Cyclopts CLI entrypoint for building the blog and its stylesheet.

The ``pages`` console script defined here renders the site from its build
declaration, writes the utility stylesheet (or a ``tailwind.config.js``
module) from the style declaration, and prints share-card URLs for checking
post metadata. Typical usage is ``pages build`` followed by ``pages style``
locally or in CI.

Examples
--------
Build the site with the packaged declaration:

>>> from blog_pages.cli import main
>>> main()  # doctest: +SKIP

Build from a YAML declaration into a custom directory:

>>> from blog_pages.cli import app
>>> app(
...     ["build", "--config", "config/build.yaml", "--output-dir", "dist"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import (
    BuildConfig,
    BuildConfigBuilder,
    StyleConfig,
    load_build_config,
    load_style_config,
)
from .generator import SiteBuilder
from .site import configure, default_style
from .social import social as build_social_url
from .stylesheet import UtilityStylesheetBuilder, export_tailwind_config

DEFAULT_BUILD_CONFIG = Path("config/build.yaml")
DEFAULT_STYLE_CONFIG = Path("config/style.yaml")
DEFAULT_STYLESHEET = Path("_site/assets/site.css")

app = App(name="pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def resolve_build_config(
    config: Path | None,
    *,
    input_dir: Path | None = None,
    output_dir: Path | None = None,
) -> BuildConfig:
    """Return the frozen build configuration the CLI should use.

    An explicit ``config`` path is always loaded. Otherwise
    ``config/build.yaml`` is used when present, and the packaged
    :func:`~blog_pages.site.configure` declaration when it is not.
    """
    path = config or (DEFAULT_BUILD_CONFIG if DEFAULT_BUILD_CONFIG.exists() else None)
    if path is not None:
        return load_build_config(path, input_dir=input_dir, output_dir=output_dir)
    builder = BuildConfigBuilder()
    configure(builder)
    builder.set_directories(input_dir=input_dir, output_dir=output_dir)
    return builder.freeze()


def resolve_style_config(config: Path | None) -> StyleConfig:
    """Return the style declaration from ``config`` or the packaged default."""
    path = config or (DEFAULT_STYLE_CONFIG if DEFAULT_STYLE_CONFIG.exists() else None)
    if path is not None:
        return load_style_config(path)
    return default_style()


@app.command(help="Render templates and copy passthrough assets into the output.")
def build(
    *,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to build config", env_var="INPUT_CONFIG")
    ] = None,
    input_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the input folder", env_var="INPUT_INPUT_DIR"),
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
) -> None:
    """Build the site described by the build declaration.

    Parameters
    ----------
    config : Path or None, optional
        Path to a YAML build declaration (overridable via ``INPUT_CONFIG``).
        Defaults to ``config/build.yaml`` when present, otherwise the packaged
        declaration.
    input_dir : Path or None, optional
        Override the declared input directory.
    output_dir : Path or None, optional
        Override the declared output directory.

    Returns
    -------
    None
        Writes the output tree and prints every written path.

    Raises
    ------
    SiteConfigError
        If the declaration names an unknown plugin or filter or is malformed.
    """
    build_config = resolve_build_config(
        config, input_dir=input_dir, output_dir=output_dir
    )
    result = SiteBuilder(build_config).run()
    for path in result.rendered:
        print(f"wrote {_format_path(path)}")
    for path in result.copied:
        print(f"copied {_format_path(path)}")


@app.command(help="Write the utility stylesheet or a Tailwind config module.")
def style(
    *,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to style config", env_var="INPUT_STYLE_CONFIG"),
    ] = None,
    output: typ.Annotated[
        Path, Parameter(help="Where to write the result", env_var="INPUT_OUTPUT")
    ] = DEFAULT_STYLESHEET,
    output_format: typ.Annotated[
        typ.Literal["css", "tailwind"],
        Parameter(name="--format", help="Emit CSS or a tailwind.config.js module"),
    ] = "css",
    root: typ.Annotated[
        Path | None, Parameter(help="Directory the content globs are relative to")
    ] = None,
) -> None:
    """Render the style declaration to ``output``.

    Parameters
    ----------
    config : Path or None, optional
        Path to a YAML style declaration; defaults to ``config/style.yaml``
        when present, otherwise the packaged declaration.
    output : Path, optional
        Destination file; defaults to ``_site/assets/site.css``.
    output_format : {"css", "tailwind"}, optional
        ``css`` renders utilities directly; ``tailwind`` writes the declaration
        as a ``tailwind.config.js`` module for the Tailwind CLI.
    root : Path or None, optional
        Directory the content scope globs are relative to.
    """
    style_config = resolve_style_config(config)
    if output_format == "tailwind":
        text = export_tailwind_config(style_config)
    else:
        text = UtilityStylesheetBuilder(style_config, root=root).render()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    print(f"wrote {_format_path(output)}")


@app.command(help="Print the social share-card URL for a title and description.")
def social(title: str, description: str) -> None:
    """Print the share-card URL for ``title`` and ``description``."""
    print(build_social_url(title, description))


def main() -> None:
    """Invoke the Cyclopts application that powers the `pages` console command.

    Parameters
    ----------
    None

    Returns
    -------
    None
        This function executes for its side effects of parsing CLI arguments
        and running the requested subcommand.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
