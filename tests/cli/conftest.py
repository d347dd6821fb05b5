"""Shared fixtures for CLI tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Run every command from an empty working directory with no user config."""
    work_dir = tmp_path / "work"
    work_dir.mkdir()
    monkeypatch.chdir(work_dir)
    for key in list(os.environ):
        if key.upper().startswith("ARCHSCAN__"):
            monkeypatch.delenv(key)
    with patch("archscan.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "no-global.yaml"):
        yield work_dir
    # The CLI points log handlers at the runner's streams; drop them afterwards
    logging.getLogger().handlers.clear()


@pytest.fixture
def shop_root(tmp_path: Path) -> Path:
    root = tmp_path / "shop"
    files = {
        "src/Core/Checkout/Cart.php": (
            "<?php\nnamespace Shopware\\Core\\Checkout;\n\n"
            "#[Package('checkout')]\nfinal class Cart {}\n"
        ),
        "src/Core/Checkout/Order.php": (
            "<?php\nnamespace Shopware\\Core\\Checkout;\n\n"
            "#[Package('checkout')]\nclass Order {}\n"
        ),
        "src/Storefront/app/main.js": "/* @sw-package storefront */\nexport default {};\n",
    }
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root
