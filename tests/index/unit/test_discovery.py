"""Unit tests for source discovery (discovery/scanner.py).

Tests cover:
- Default include/exclude globs
- Directory pruning (vendor, node_modules, test directories)
- Ignore files inside the scanned tree
- Deterministic ordering
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from archscan.index._internal.discovery import SourceEnumerator

WriteTree = Callable[[Path, dict[str, str]], Path]


class TestSourceEnumerator:
    """Tests for SourceEnumerator."""

    def test_finds_all_dialects(self, temp_dir: Path, write_tree: WriteTree) -> None:
        write_tree(
            temp_dir,
            {
                "src/Core/Foo.php": "<?php",
                "src/Administration/app.js": "",
                "src/Storefront/main.ts": "",
            },
        )

        paths = list(SourceEnumerator(temp_dir))

        assert paths == [
            "src/Administration/app.js",
            "src/Core/Foo.php",
            "src/Storefront/main.ts",
        ]

    def test_skips_unknown_extensions(self, temp_dir: Path, write_tree: WriteTree) -> None:
        write_tree(temp_dir, {"README.md": "", "composer.json": "{}", "Foo.php": "<?php"})

        assert list(SourceEnumerator(temp_dir)) == ["Foo.php"]

    def test_unknown_extension_not_yielded_even_if_included(
        self, temp_dir: Path, write_tree: WriteTree
    ) -> None:
        write_tree(temp_dir, {"notes.md": "", "a.ts": ""})

        paths = list(SourceEnumerator(temp_dir, include_globs=["*"]))

        assert paths == ["a.ts"]

    def test_excludes_spec_files(self, temp_dir: Path, write_tree: WriteTree) -> None:
        write_tree(temp_dir, {"app/cart.ts": "", "app/cart.spec.ts": "", "app/x.spec.js": ""})

        paths = list(SourceEnumerator(temp_dir, exclude_globs=["**/*.spec.js", "**/*.spec.ts"]))

        assert paths == ["app/cart.ts"]

    def test_prunes_dependency_and_test_dirs(self, temp_dir: Path, write_tree: WriteTree) -> None:
        write_tree(
            temp_dir,
            {
                "src/Foo.php": "<?php",
                "vendor/acme/Lib.php": "<?php",
                "node_modules/pkg/index.js": "",
                "src/Tests/FooTest.php": "<?php",
                "src/test/helper.ts": "",
                ".git/hooks/pre-commit.js": "",
            },
        )

        assert list(SourceEnumerator(temp_dir)) == ["src/Foo.php"]

    def test_include_globs_restrict(self, temp_dir: Path, write_tree: WriteTree) -> None:
        write_tree(temp_dir, {"a/Foo.php": "<?php", "b/app.js": ""})

        paths = list(SourceEnumerator(temp_dir, include_globs=["**/*.php"]))

        assert paths == ["a/Foo.php"]

    def test_honors_ignore_file(self, temp_dir: Path, write_tree: WriteTree) -> None:
        write_tree(
            temp_dir,
            {
                ".archscanignore": "generated/\n*.min.js\n",
                "generated/Proxy.php": "<?php",
                "app/lib.min.js": "",
                "app/lib.js": "",
            },
        )

        assert list(SourceEnumerator(temp_dir)) == ["app/lib.js"]

    def test_gitignore_can_be_disabled(self, temp_dir: Path, write_tree: WriteTree) -> None:
        write_tree(temp_dir, {".gitignore": "public/\n", "public/app.js": "", "src/a.ts": ""})

        respected = list(SourceEnumerator(temp_dir, respect_gitignore=True))
        disregarded = list(SourceEnumerator(temp_dir, respect_gitignore=False))

        assert respected == ["src/a.ts"]
        assert disregarded == ["public/app.js", "src/a.ts"]

    def test_vendor_opt_in(self, temp_dir: Path, write_tree: WriteTree) -> None:
        write_tree(temp_dir, {".archscanignore": "!vendor/\n", "vendor/acme/Lib.php": "<?php"})

        assert list(SourceEnumerator(temp_dir)) == ["vendor/acme/Lib.php"]

    def test_empty_root(self, temp_dir: Path) -> None:
        assert list(SourceEnumerator(temp_dir)) == []

    def test_accepts(self, temp_dir: Path) -> None:
        enumerator = SourceEnumerator(temp_dir, exclude_globs=["**/*.spec.ts"])

        assert enumerator.accepts("src/Foo.php")
        assert not enumerator.accepts("src/foo.spec.ts")
        assert not enumerator.accepts("src/foo.md")
