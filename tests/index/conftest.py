"""Shared fixtures for index tests."""

from __future__ import annotations

import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from archscan.config.models import ArchScanConfig, OutputConfig
from archscan.index._internal.parsing import DialectParser


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory(ignore_cleanup_errors=True) as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def parser() -> DialectParser:
    return DialectParser()


@pytest.fixture
def write_tree() -> Callable[[Path, dict[str, str]], Path]:
    """Write {relative_path: content} under a root and return the root."""

    def _write(root: Path, files: dict[str, str]) -> Path:
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return root

    return _write


@pytest.fixture
def scan_config(temp_dir: Path) -> ArchScanConfig:
    """Config writing its cache/report under a private output directory."""
    return ArchScanConfig(output=OutputConfig(directory=str(temp_dir / "out")))


@pytest.fixture
def sample_php_class() -> str:
    return """<?php declare(strict_types=1);

namespace Foo\\Bar;

use Shopware\\Core\\Framework\\Log\\Package;

#[Package('checkout')]
final class Baz
{
    public function run(): void
    {
    }
}
"""


@pytest.fixture
def sample_internal_php_class() -> str:
    return """<?php

namespace Shopware\\Core\\Content\\Product;

/**
 * @internal
 */
#[Package('inventory')]
class ProductLoader
{
}
"""


@pytest.fixture
def sample_script() -> str:
    return """/* @sw-package storefront */

export default class PluginManager {
    register(name) {
        return name;
    }
}
"""
