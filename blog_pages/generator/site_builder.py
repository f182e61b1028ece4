"""Run a frozen :class:`~blog_pages.config.BuildConfig` against a source tree.

The build mirrors the usual static-site flow: scan the input directory for
files whose extension is in the template-format set, render markdown and Jinja
templates through their layouts, copy passthrough assets, and write the output
tree. Extensions in the template-format set that have no rendering engine
(``jpg``, ``png``, ...) are copied verbatim; everything else is ignored unless
a passthrough rule names it.

Markdown bodies are rendered as Jinja templates before conversion, so filters
such as ``social`` work inside posts. Two outputs that land on the same path
raise :class:`~blog_pages.config.SiteConfigError`, whether they are rendered
pages or copies.

Example
-------
>>> from pathlib import Path
>>> from blog_pages.config import BuildConfigBuilder
>>> from blog_pages.generator import SiteBuilder
>>> from blog_pages.site import configure
>>> builder = BuildConfigBuilder()
>>> configure(builder)
>>> builder.set_directories(input_dir=Path("site"), output_dir=Path("dist"))
>>> SiteBuilder(builder.freeze()).run()  # doctest: +SKIP
BuildResult(rendered=[PosixPath("dist/index.html"), ...], copied=[...])
"""

from __future__ import annotations

import datetime as dt
import os
import shutil
import typing as typ
from pathlib import Path, PurePosixPath

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from blog_pages._constants import IGNORED_DIRECTORIES, RENDERED_FORMATS
from blog_pages.config import BuildConfig, SiteConfigError

from .front_matter import split_front_matter
from .models import BuildResult, SourcePage
from .passthrough import PassthroughCopy, copy_passthrough, resolve_passthrough
from .renderer import MarkdownRenderer


class LayoutError(RuntimeError):
    """Raised when a layout cannot be found or layouts form a cycle."""


class SiteBuilder:
    """Render templates and copy passthrough assets for one build."""

    def __init__(self, config: BuildConfig) -> None:
        """Prepare the Jinja environment and markdown renderer for ``config``.

        Parameters
        ----------
        config : BuildConfig
            Frozen declaration produced by
            :meth:`~blog_pages.config.BuildConfigBuilder.freeze`.
        """
        self.config = config
        self.input_dir = config.input_dir
        self.output_dir = config.output_dir
        self.includes_dir = config.includes_path
        self.renderer = MarkdownRenderer(
            config.pygments_style, highlight_code=config.markdown_highlighting
        )
        self.env = Environment(
            loader=FileSystemLoader([str(self.includes_dir), str(self.input_dir)]),
            autoescape=select_autoescape(["html", "xml", "njk", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters.update(config.filters)

    def run(self) -> BuildResult:
        """Scan, render, copy, and write the site.

        Returns
        -------
        BuildResult
            Rendered pages and copied files, each in output order.

        Raises
        ------
        SiteConfigError
            If front matter is malformed or two outputs claim one path.
        LayoutError
            If a referenced layout is missing or layouts refer to each other.
        """
        copies = resolve_passthrough(
            self.config.passthrough,
            self.input_dir,
            self.output_dir,
            exclude=(self.includes_dir,),
        )
        claimed = {item.source.resolve() for item in copies}
        pages, verbatim = self._scan(claimed)
        self._check_copy_targets(pages, verbatim, copies)
        collections = self._build_collections(pages)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        result = BuildResult()
        for page in pages:
            if page.output_path is None:
                continue
            html = self._render_page(page, collections)
            page.output_path.parent.mkdir(parents=True, exist_ok=True)
            page.output_path.write_text(html, encoding="utf-8")
            result.rendered.append(page.output_path)

        for source in verbatim:
            destination = self._verbatim_destination(source)
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, destination)
            result.copied.append(destination)

        result.copied.extend(copy_passthrough(copies))
        return result

    def _verbatim_destination(self, source: Path) -> Path:
        return self.output_dir / source.relative_to(self.input_dir)

    def _check_copy_targets(
        self,
        pages: list[SourcePage],
        verbatim: list[Path],
        copies: list[PassthroughCopy],
    ) -> None:
        """Reject copies that would overwrite a rendered page or each other."""
        targets: dict[Path, str] = {
            page.output_path: page.relative_path
            for page in pages
            if page.output_path is not None
        }
        sources = [
            (self._verbatim_destination(source), source) for source in verbatim
        ]
        sources.extend((item.destination, item.source) for item in copies)
        for destination, source in sources:
            origin = source.relative_to(self.input_dir).as_posix()
            previous = targets.get(destination)
            if previous is not None:
                msg = f"'{previous}' and '{origin}' both write to '{destination}'."
                raise SiteConfigError(msg)
            targets[destination] = origin

    def _scan(self, claimed: set[Path]) -> tuple[list[SourcePage], list[Path]]:
        """Return renderable pages and verbatim files in the template-format set."""
        pages: list[SourcePage] = []
        verbatim: list[Path] = []
        outputs: dict[Path, str] = {}
        for path in self._iter_source_files():
            extension = path.suffix.lstrip(".").lower()
            if extension not in self.config.template_formats:
                continue
            if path.resolve() in claimed:
                continue
            if extension not in RENDERED_FORMATS:
                verbatim.append(path)
                continue
            page = self._load_page(path, extension)
            if page.output_path is not None:
                previous = outputs.get(page.output_path)
                if previous is not None:
                    msg = (
                        f"Templates '{previous}' and '{page.relative_path}' both "
                        f"write to '{page.output_path}'."
                    )
                    raise SiteConfigError(msg)
                outputs[page.output_path] = page.relative_path
            pages.append(page)
        return pages, verbatim

    def _iter_source_files(self) -> typ.Iterator[Path]:
        output_root = self.output_dir.resolve()
        includes_root = self.includes_dir.resolve()
        for root, dirnames, filenames in os.walk(self.input_dir):
            root_path = Path(root)
            dirnames[:] = sorted(
                name
                for name in dirnames
                if not name.startswith(".")
                and name not in IGNORED_DIRECTORIES
                and (root_path / name).resolve() not in (output_root, includes_root)
            )
            for filename in sorted(filenames):
                if filename.startswith("."):
                    continue
                yield root_path / filename

    def _load_page(self, path: Path, extension: str) -> SourcePage:
        relative = path.relative_to(self.input_dir).as_posix()
        data, body = split_front_matter(path.read_text(encoding="utf-8"))
        output_path, url = self._resolve_permalink(relative, data.get("permalink"))
        return SourcePage(
            input_path=path,
            relative_path=relative,
            extension=extension,
            data=data,
            body=body,
            output_path=output_path,
            url=url,
        )

    def _resolve_permalink(
        self, relative: str, permalink: object
    ) -> tuple[Path | None, str | None]:
        """Return the output path and URL for a template.

        ``permalink: false`` suppresses output. Without a permalink,
        ``about.md`` is written to ``about/index.html`` and ``index.njk`` to
        ``index.html``.
        """
        if permalink is False:
            return None, None
        if isinstance(permalink, str) and permalink.strip():
            target = permalink.strip().lstrip("/")
            if not target or target.endswith("/"):
                target = f"{target}index.html"
            url_path = PurePosixPath(target)
        else:
            source = PurePosixPath(relative)
            if source.stem == "index":
                url_path = source.parent / "index.html"
            else:
                url_path = source.parent / source.stem / "index.html"
        url = "/" + url_path.as_posix()
        if url_path.name == "index.html":
            url = url[: -len("index.html")]
        return self.output_dir / Path(url_path), url

    def _build_collections(
        self, pages: list[SourcePage]
    ) -> dict[str, list[dict[str, typ.Any]]]:
        """Group rendered pages into ``all`` plus one collection per tag."""
        ordered = sorted(pages, key=_collection_sort_key)
        collections: dict[str, list[dict[str, typ.Any]]] = {"all": []}
        for page in ordered:
            if page.output_path is None:
                continue
            entry = {**page.as_context(), "data": page.data}
            collections["all"].append(entry)
            for tag in page.tags:
                collections.setdefault(tag, []).append(entry)
        return collections

    def _render_page(
        self, page: SourcePage, collections: dict[str, list[dict[str, typ.Any]]]
    ) -> str:
        """Render ``page`` and its layouts; markdown is templated before conversion."""
        context: dict[str, typ.Any] = {
            **self.config.global_data,
            **page.data,
            "page": page.as_context(),
            "collections": collections,
            "pygments_css": Markup(self.renderer.stylesheet),  # noqa: S704
        }
        body = self.env.from_string(page.body).render(**context)
        if page.extension == "md":
            body = self.renderer.render(body)
        content = Markup(body)  # noqa: S704
        html = self._apply_layouts(page.data.get("layout"), content, context)
        if not html.endswith("\n"):
            html += "\n"
        return html

    def _apply_layouts(
        self, layout: object, content: Markup, context: dict[str, typ.Any]
    ) -> str:
        """Wrap ``content`` in ``layout`` and any layouts it declares in turn."""
        seen: set[str] = set()
        while isinstance(layout, str) and layout:
            if layout in seen:
                msg = f"Layout '{layout}' includes itself."
                raise LayoutError(msg)
            seen.add(layout)
            layout_path = self._find_layout(layout)
            data, body = split_front_matter(layout_path.read_text(encoding="utf-8"))
            context = {**data, **context, "content": content}
            content = Markup(self.env.from_string(body).render(**context))  # noqa: S704
            layout = data.get("layout")
        return str(content)

    def _find_layout(self, name: str) -> Path:
        candidate = self.includes_dir / name
        if candidate.is_file():
            return candidate
        for extension in sorted(RENDERED_FORMATS):
            with_suffix = self.includes_dir / f"{name}.{extension}"
            if with_suffix.is_file():
                return with_suffix
        msg = f"Layout '{name}' not found in '{self.includes_dir}'."
        raise LayoutError(msg)


def _collection_sort_key(page: SourcePage) -> tuple[str, str]:
    value = page.data.get("date")
    if isinstance(value, dt.datetime | dt.date):
        stamp = value.isoformat()
    elif isinstance(value, str):
        stamp = value
    else:
        stamp = ""
    return stamp, page.relative_path


__all__ = ["LayoutError", "SiteBuilder"]
