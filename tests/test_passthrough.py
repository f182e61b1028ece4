"""Unit tests for resolving passthrough rules into file copies.

The fixtures build a small source tree under ``tmp_path``; each test declares
rules and checks where :func:`resolve_passthrough` sends every file when rules
overlap.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from blog_pages.config import PassthroughRule
from blog_pages.generator.passthrough import (
    copy_passthrough,
    is_glob,
    resolve_passthrough,
)


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Create a source tree with nested assets and a redirects file."""
    root = tmp_path / "site"
    (root / "assets" / "css").mkdir(parents=True)
    (root / "assets" / "img").mkdir(parents=True)
    (root / "assets" / "css" / "site.css").write_text("body{}", encoding="utf-8")
    (root / "assets" / "img" / "logo.png").write_bytes(b"\x89PNG")
    (root / "assets" / "img" / "hero.jpg").write_bytes(b"\xff\xd8")
    (root / "_redirects").write_text("/old /new 301\n", encoding="utf-8")
    return root


def _destinations(copies: list, root: Path) -> dict[str, str]:
    return {
        item.source.relative_to(root).as_posix(): item.destination.as_posix()
        for item in copies
    }


def test_directory_and_file_rules_expand_to_files(source_tree: Path) -> None:
    rules = [
        PassthroughRule("assets", "assets"),
        PassthroughRule("_redirects", "_redirects"),
    ]
    copies = resolve_passthrough(rules, source_tree, Path("out"))
    assert _destinations(copies, source_tree) == {
        "_redirects": "out/_redirects",
        "assets/css/site.css": "out/assets/css/site.css",
        "assets/img/hero.jpg": "out/assets/img/hero.jpg",
        "assets/img/logo.png": "out/assets/img/logo.png",
    }


def test_file_rule_supersedes_directory_rule(source_tree: Path) -> None:
    """A file named by its own rule should not also be copied by its directory."""
    rules = [
        PassthroughRule("assets/img/logo.png", "brand/logo.png"),
        PassthroughRule("assets", "static"),
    ]
    copies = resolve_passthrough(rules, source_tree, Path("out"))
    destinations = _destinations(copies, source_tree)
    assert destinations["assets/img/logo.png"] == "out/brand/logo.png"
    assert destinations["assets/css/site.css"] == "out/static/css/site.css"
    assert len(copies) == 3


def test_deeper_directory_rule_wins(source_tree: Path) -> None:
    rules = [
        PassthroughRule("assets/img", "images"),
        PassthroughRule("assets", "static"),
    ]
    destinations = _destinations(
        resolve_passthrough(rules, source_tree, Path("out")), source_tree
    )
    assert destinations["assets/img/logo.png"] == "out/images/logo.png"
    assert destinations["assets/css/site.css"] == "out/static/css/site.css"


def test_glob_rule_beats_directory_rule(source_tree: Path) -> None:
    rules = [
        PassthroughRule("assets", "assets"),
        PassthroughRule("assets/**/*.png", "png"),
    ]
    destinations = _destinations(
        resolve_passthrough(rules, source_tree, Path("out")), source_tree
    )
    assert destinations["assets/img/logo.png"] == "out/png/img/logo.png"
    assert destinations["assets/img/hero.jpg"] == "out/assets/img/hero.jpg"


def test_missing_sources_are_skipped(source_tree: Path) -> None:
    rules = [PassthroughRule("node_modules/instant.page/instantpage.js", "a.js")]
    assert resolve_passthrough(rules, source_tree, Path("out")) == []


def test_copy_passthrough_writes_identical_files(
    source_tree: Path, tmp_path: Path
) -> None:
    output = tmp_path / "out"
    rules = [PassthroughRule("_redirects", "_redirects")]
    written = copy_passthrough(resolve_passthrough(rules, source_tree, output))
    assert written == [output / "_redirects"]
    assert written[0].read_text(encoding="utf-8") == "/old /new 301\n"


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [("assets", False), ("*.png", True), ("img/[ab].png", True), ("a?.js", True)],
)
def test_is_glob(pattern: str, expected: bool) -> None:  # noqa: FBT001
    assert is_glob(pattern) is expected


def test_glob_rules_skip_output_and_ignored_directories(source_tree: Path) -> None:
    """Globs must not reach the output tree, excluded trees, or node_modules."""
    for directory in ("_site/img", "_includes", "node_modules/pkg"):
        (source_tree / directory).mkdir(parents=True)
        (source_tree / directory / "stale.png").write_bytes(b"\x89PNG")
    rules = [PassthroughRule("**/*.png", "png")]
    copies = resolve_passthrough(
        rules,
        source_tree,
        source_tree / "_site",
        exclude=(source_tree / "_includes",),
    )
    assert list(_destinations(copies, source_tree)) == ["assets/img/logo.png"]


def test_explicit_rules_still_reach_ignored_directories(source_tree: Path) -> None:
    (source_tree / "node_modules" / "pkg").mkdir(parents=True)
    (source_tree / "node_modules" / "pkg" / "page.js").write_text(
        "//", encoding="utf-8"
    )
    rules = [
        PassthroughRule("node_modules/pkg/page.js", "assets/page.js"),
        PassthroughRule("node_modules/pkg/*.js", "vendor"),
    ]
    destinations = _destinations(
        resolve_passthrough(rules, source_tree, Path("out")), source_tree
    )
    assert destinations == {"node_modules/pkg/page.js": "out/assets/page.js"}
