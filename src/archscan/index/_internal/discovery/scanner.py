"""Source file discovery.

Walks a scan root and yields the scan-relative paths of every file that
should be parsed:

1. Directories are pruned by name (VCS, dependency/vendor, module caches,
   test directories) and by the tree's own ignore files.
2. Files must match an include glob and no exclude glob.
3. Files with an extension no dialect handles are never yielded, even if an
   include glob matches them.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import structlog
from pathspec import GitIgnoreSpec

from archscan.index._internal.ignore import IgnoreChecker
from archscan.index._internal.parsing import dialect_for_path

log = structlog.get_logger(__name__)


@dataclass
class SourceEnumerator:
    """Enumerates candidate source paths under a root."""

    root: Path
    include_globs: Sequence[str] = ("**/*.php", "**/*.js", "**/*.ts")
    exclude_globs: Sequence[str] = ()
    respect_gitignore: bool = True
    _include: GitIgnoreSpec = field(init=False, repr=False)
    _exclude: GitIgnoreSpec = field(init=False, repr=False)
    _ignore: IgnoreChecker = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._include = GitIgnoreSpec.from_lines(self.include_globs)
        self._exclude = GitIgnoreSpec.from_lines(self.exclude_globs)
        self._ignore = IgnoreChecker(self.root, respect_gitignore=self.respect_gitignore)
        if self._ignore.ignore_paths:
            log.debug(
                "ignore_files_loaded",
                files=[p.relative_to(self.root).as_posix() for p in self._ignore.ignore_paths],
                unpruned_dirs=sorted(self._ignore.negated_dirs),
            )

    def __iter__(self) -> Iterator[str]:
        return self.enumerate()

    def enumerate(self) -> Iterator[str]:
        """Yield scan-relative POSIX paths, in sorted walk order."""
        for dirpath, dirnames, filenames in os.walk(self.root):
            rel_dir = Path(dirpath).relative_to(self.root).as_posix()
            prefix = "" if rel_dir == "." else f"{rel_dir}/"

            dirnames[:] = sorted(
                d
                for d in dirnames
                if not self._ignore.should_prune_dir(d)
                and not self._ignore.is_excluded_rel(f"{prefix}{d}", is_dir=True)
            )

            for filename in sorted(filenames):
                rel_path = f"{prefix}{filename}"
                if self.accepts(rel_path):
                    yield rel_path

    def accepts(self, rel_path: str) -> bool:
        """Whether a file path (not a directory) survives the file-level filters."""
        if dialect_for_path(rel_path) is None:
            return False
        if not self._include.match_file(rel_path):
            return False
        if self._exclude.match_file(rel_path):
            log.debug("file_excluded", path=rel_path, reason="exclude_glob")
            return False
        if self._ignore.is_excluded_rel(rel_path):
            log.debug("file_excluded", path=rel_path, reason="ignore_file")
            return False
        return True
