"""Resolve passthrough rules into concrete file copies.

Each rule names a file, a directory, or a glob relative to the input root.
When several rules cover the same file, the most specific one decides where it
lands: an exact file rule beats a glob, a glob beats a directory, and a deeper
directory beats a shallower one. Rules of equal rank fall back to declaration
order, so the later declaration wins.
"""

from __future__ import annotations

import dataclasses as dc
import glob
import shutil
import typing as typ
from pathlib import Path, PurePosixPath

from blog_pages._constants import IGNORED_DIRECTORIES

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from blog_pages.config import PassthroughRule

GLOB_CHARACTERS = frozenset("*?[")

_FILE_RANK = 3
_GLOB_RANK = 2
_DIRECTORY_RANK = 1


@dc.dataclass(frozen=True, slots=True)
class PassthroughCopy:
    """A single file copy produced by resolving the passthrough rules."""

    source: Path
    destination: Path
    rule: PassthroughRule


@dc.dataclass(slots=True)
class _Candidate:
    destination: PurePosixPath
    rule: PassthroughRule
    specificity: tuple[int, int, int]


def is_glob(pattern: str) -> bool:
    """Return ``True`` when ``pattern`` contains glob metacharacters."""
    return any(char in GLOB_CHARACTERS for char in pattern)


def resolve_passthrough(
    rules: cabc.Sequence[PassthroughRule],
    input_dir: Path,
    output_dir: Path,
    *,
    exclude: cabc.Iterable[Path] = (),
) -> list[PassthroughCopy]:
    """Expand ``rules`` into file copies, keeping the most specific rule per file.

    Parameters
    ----------
    rules : Sequence[PassthroughRule]
        Rules in declaration order.
    input_dir : Path
        Root that rule sources are relative to.
    output_dir : Path
        Root that rule destinations are relative to. Glob rules never match
        files below it.
    exclude : Iterable[Path], optional
        Further directories glob rules must not match, such as the includes
        directory. Directories named in ``IGNORED_DIRECTORIES`` are always
        skipped by glob rules.

    Returns
    -------
    list[PassthroughCopy]
        One entry per source file, sorted by source path. Sources that match
        nothing are skipped.
    """
    excluded = (output_dir.resolve(), *(path.resolve() for path in exclude))
    chosen: dict[PurePosixPath, _Candidate] = {}
    for order, rule in enumerate(rules):
        for relative_source, destination, rank, depth in _expand_rule(
            rule, input_dir, excluded
        ):
            candidate = _Candidate(
                destination=destination, rule=rule, specificity=(rank, depth, order)
            )
            current = chosen.get(relative_source)
            if current is None or candidate.specificity > current.specificity:
                chosen[relative_source] = candidate

    return [
        PassthroughCopy(
            source=input_dir / Path(relative_source),
            destination=output_dir / Path(candidate.destination),
            rule=candidate.rule,
        )
        for relative_source, candidate in sorted(chosen.items())
    ]


def copy_passthrough(copies: cabc.Iterable[PassthroughCopy]) -> list[Path]:
    """Copy each resolved file into place and return the written paths."""
    written: list[Path] = []
    for item in copies:
        item.destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(item.source, item.destination)
        written.append(item.destination)
    return written


def _expand_rule(
    rule: PassthroughRule, input_dir: Path, excluded: tuple[Path, ...]
) -> cabc.Iterator[tuple[PurePosixPath, PurePosixPath, int, int]]:
    """Yield ``(source, destination, rank, depth)`` for files matched by ``rule``."""
    destination_root = PurePosixPath(rule.destination)
    if is_glob(rule.source):
        base = _glob_base(rule.source)
        depth = len(base.parts)
        matches = glob.glob(rule.source, root_dir=input_dir, recursive=True)
        for match in sorted(matches):
            relative = PurePosixPath(Path(match).as_posix())
            path = input_dir / Path(relative)
            if _is_excluded(path, relative.relative_to(base), excluded):
                continue
            if path.is_dir():
                for child in _walk_files(path):
                    child_relative = _relative_posix(child, input_dir)
                    if _is_excluded(
                        child, child_relative.relative_to(base), excluded
                    ):
                        continue
                    yield (
                        child_relative,
                        destination_root / child_relative.relative_to(base),
                        _GLOB_RANK,
                        depth,
                    )
            elif path.is_file():
                yield (
                    relative,
                    destination_root / relative.relative_to(base),
                    _GLOB_RANK,
                    depth,
                )
        return

    relative_source = PurePosixPath(rule.source)
    path = input_dir / Path(relative_source)
    if path.is_file():
        yield relative_source, destination_root, _FILE_RANK, len(relative_source.parts)
    elif path.is_dir():
        depth = len(relative_source.parts)
        for child in _walk_files(path):
            child_relative = _relative_posix(child, input_dir)
            yield (
                child_relative,
                destination_root / child_relative.relative_to(relative_source),
                _DIRECTORY_RANK,
                depth,
            )


def _glob_base(pattern: str) -> PurePosixPath:
    """Return the literal directory prefix that precedes the first glob segment."""
    literal: list[str] = []
    for part in PurePosixPath(pattern).parts[:-1]:
        if is_glob(part):
            break
        literal.append(part)
    return PurePosixPath(*literal) if literal else PurePosixPath()


def _is_excluded(
    path: Path, relative: PurePosixPath, excluded: tuple[Path, ...]
) -> bool:
    """Return ``True`` when a glob match lies in a tree globs must not reach.

    ``relative`` is the part of the match below the literal glob prefix, so a
    pattern that names ``node_modules`` itself still matches inside it.
    """
    if any(part in IGNORED_DIRECTORIES for part in relative.parts):
        return True
    resolved = path.resolve()
    return any(resolved.is_relative_to(root) for root in excluded)


def _walk_files(root: Path) -> list[Path]:
    return sorted(path for path in root.rglob("*") if path.is_file())


def _relative_posix(path: Path, root: Path) -> PurePosixPath:
    return PurePosixPath(path.relative_to(root).as_posix())


__all__ = [
    "PassthroughCopy",
    "copy_passthrough",
    "is_glob",
    "resolve_passthrough",
]
