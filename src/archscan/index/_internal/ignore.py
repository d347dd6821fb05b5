"""Shared ignore/exclude pattern matching with tiered architecture.

Tiered Architecture:
- HARDCODED_DIRS: Always excluded, cannot be overridden (VCS internals)
- DEFAULT_PRUNABLE_DIRS + test dirs: Excluded by default, user can opt-in via !pattern
- .archscanignore / .gitignore patterns: gitignore syntax, nested files apply
  relative to their own directory

Matching uses pathspec's GitIgnoreSpec, so negation, anchoring, ``**`` and
trailing-slash directory patterns follow git's rules.
"""

from __future__ import annotations

import os
from pathlib import Path

from pathspec import GitIgnoreSpec

from archscan.config.constants import IGNORE_FILE_NAME
from archscan.core.excludes import PRUNABLE_DIRS, is_default_prunable, is_hardcoded_dir

__all__ = ["IgnoreChecker"]


def _prefix_pattern(pattern: str, prefix: str) -> str:
    """Rewrite a pattern from a nested ignore file so it applies from the root."""
    if not prefix:
        return pattern
    if pattern.startswith("/"):
        return f"/{prefix}{pattern}"
    if "/" in pattern.rstrip("/"):
        return f"/{prefix}/{pattern}"
    return f"/{prefix}/**/{pattern}"


class IgnoreChecker:
    """Checks if paths should be ignored based on tiered patterns.

    Example:
        # User adds "!vendor/" to .archscanignore
        checker.should_prune_dir("vendor")        # False (opted-in)
        checker.should_prune_dir(".git")          # True (hardcoded)
        checker.should_prune_dir("node_modules")  # True (default)
    """

    def __init__(self, root: Path, *, respect_gitignore: bool = False) -> None:
        self._patterns: list[str] = []
        self._negated_dirs: set[str] = set()
        self._ignore_paths: list[Path] = []
        self._load_recursive(root, respect_gitignore=respect_gitignore)
        self._spec = GitIgnoreSpec.from_lines(self._patterns)

    @property
    def ignore_paths(self) -> list[Path]:
        """All ignore files that were loaded."""
        return self._ignore_paths.copy()

    @property
    def negated_dirs(self) -> frozenset[str]:
        """Directory names negated at the root level ("!vendor/")."""
        return frozenset(self._negated_dirs)

    def should_prune_dir(self, dirname: str) -> bool:
        """Check if a directory should be skipped during traversal.

        Args:
            dirname: Directory name (not path), e.g. "node_modules", "Tests"
        """
        if is_hardcoded_dir(dirname):
            return True
        if is_default_prunable(dirname):
            return dirname not in self._negated_dirs
        return False

    def is_excluded_rel(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """Check a root-relative path against the loaded ignore patterns."""
        rel_posix = rel_path.replace("\\", "/")
        if is_dir and not rel_posix.endswith("/"):
            rel_posix += "/"
        return self._spec.match_file(rel_posix)

    def _load_recursive(self, root: Path, *, respect_gitignore: bool) -> None:
        names = [IGNORE_FILE_NAME]
        if respect_gitignore:
            names.insert(0, ".gitignore")

        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in PRUNABLE_DIRS)
            rel_dir = Path(dirpath).relative_to(root).as_posix()
            prefix = "" if rel_dir == "." else rel_dir
            for name in names:
                if name in filenames:
                    ignore_path = Path(dirpath) / name
                    self._load_ignore_file(ignore_path, prefix=prefix)
                    self._ignore_paths.append(ignore_path)

    def _load_ignore_file(self, path: Path, prefix: str = "") -> None:
        """Load patterns from an ignore file.

        Root-level negations of plain directory names ("!vendor/") also
        lift the default pruning of that directory.
        """
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            return

        for raw in content.splitlines():
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            is_negation = line.startswith("!")
            body = line[1:] if is_negation else line

            if is_negation and not prefix:
                dir_name = body.strip("/")
                if dir_name and "/" not in dir_name and "*" not in dir_name:
                    self._negated_dirs.add(dir_name)

            pattern = _prefix_pattern(body, prefix)
            self._patterns.append(f"!{pattern}" if is_negation else pattern)
