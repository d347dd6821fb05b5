"""Tests for CLI clear command.

Covers:
- clear_cache() function
- Confirmation prompt behavior
- clear command wiring (--output-dir, --yes)
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from archscan.cli.clear import clear_cache
from archscan.cli.main import cli

runner = CliRunner()


def _make_cache(directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    cache_path = directory / "scan-cache.json"
    cache_path.write_text('{"format": 1, "cacheKey": "k", "definitions": []}')
    return cache_path


class TestClearCacheNothingToRemove:
    """Tests when there's nothing to clear."""

    def test_returns_false_when_nothing_to_clear(self, tmp_path: Path) -> None:
        assert clear_cache(tmp_path / "scan-cache.json", yes=True) is False


class TestClearCache:
    def test_removes_cache_with_yes(self, tmp_path: Path) -> None:
        cache_path = _make_cache(tmp_path / "out")

        assert clear_cache(cache_path, yes=True) is True
        assert not cache_path.exists()

    def test_leaves_other_files(self, tmp_path: Path) -> None:
        cache_path = _make_cache(tmp_path / "out")
        report = tmp_path / "out" / "sw-architecture-report.html"
        report.write_text("<html></html>")

        clear_cache(cache_path, yes=True)

        assert report.exists()

    def test_prompt_confirmed(self, tmp_path: Path) -> None:
        cache_path = _make_cache(tmp_path / "out")

        with patch("archscan.cli.clear.questionary.confirm") as mock_confirm:
            mock_confirm.return_value.ask.return_value = True
            result = clear_cache(cache_path)

        assert result is True
        mock_confirm.assert_called_once()
        assert not cache_path.exists()

    def test_prompt_cancelled(self, tmp_path: Path) -> None:
        cache_path = _make_cache(tmp_path / "out")

        with patch("archscan.cli.clear.questionary.confirm") as mock_confirm:
            # ask() returns None on Ctrl-C
            mock_confirm.return_value.ask.return_value = None
            result = clear_cache(cache_path)

        assert result is False
        assert cache_path.exists()


class TestClearCommand:
    def test_clear_default_output_dir(self, isolated_cwd: Path) -> None:
        cache_path = _make_cache(isolated_cwd / "out")

        result = runner.invoke(cli, ["clear", "--yes"])

        assert result.exit_code == 0, result.output
        assert not cache_path.exists()

    def test_clear_custom_output_dir(self, tmp_path: Path) -> None:
        cache_path = _make_cache(tmp_path / "elsewhere")

        result = runner.invoke(cli, ["clear", "-y", "-o", str(tmp_path / "elsewhere")])

        assert result.exit_code == 0, result.output
        assert not cache_path.exists()

    def test_clear_nothing(self) -> None:
        result = runner.invoke(cli, ["clear", "--yes"])

        assert result.exit_code == 0
        assert "Nothing to clear" in result.output

    def test_scan_after_clear_rescans(self, shop_root: Path) -> None:
        runner.invoke(cli, ["scan", str(shop_root)])
        runner.invoke(cli, ["clear", "--yes"])

        result = runner.invoke(cli, ["scan", str(shop_root)])

        assert result.exit_code == 0, result.output
        assert "Found cached scan results" not in result.output
