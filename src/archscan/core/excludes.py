"""Canonical exclude patterns with tiered architecture.

Tier 0 (HARDCODED_DIRS): Never traversed, not user-configurable.
    - VCS internals

Tier 1 (DEFAULT_PRUNABLE_DIRS): Excluded by default, user can override with
    "!dirname" in an .archscanignore file.
    - Dependency/vendor directories, module caches, build outputs

Tier 1 also covers test directories (TEST_DIR_NAMES), matched
case-insensitively so "Test", "tests" and "TESTS" all prune.
"""

from __future__ import annotations

# =============================================================================
# Tier 0: HARDCODED - Never traverse, not user-configurable
# =============================================================================

HARDCODED_DIRS: frozenset[str] = frozenset(
    (
        # VCS internals
        ".git",
        ".svn",
        ".hg",
        ".bzr",
    )
)

# =============================================================================
# Tier 1: DEFAULT_PRUNABLE - Excluded by default, user can override
# =============================================================================

DEFAULT_PRUNABLE_DIRS: frozenset[str] = frozenset(
    (
        # -------------------------------------------------------------------------
        # Dependencies / vendored code
        # -------------------------------------------------------------------------
        "node_modules",
        "vendor",
        "bower_components",
        # -------------------------------------------------------------------------
        # Module and package-manager caches
        # -------------------------------------------------------------------------
        ".npm",
        ".yarn",
        ".pnpm-store",
        ".cache",
        ".turbo",
        ".next",
        ".nuxt",
        ".phpunit.cache",
        ".php-cs-fixer.cache",
        # -------------------------------------------------------------------------
        # IDE/Editor directories
        # -------------------------------------------------------------------------
        ".idea",
        ".vscode",
    )
)

TEST_DIR_NAMES: frozenset[str] = frozenset(("test", "tests"))

PRUNABLE_DIRS: frozenset[str] = HARDCODED_DIRS | DEFAULT_PRUNABLE_DIRS


def is_hardcoded_dir(dirname: str) -> bool:
    """Check if directory is hardcoded (never traversable, not overridable)."""
    return dirname in HARDCODED_DIRS


def is_default_prunable(dirname: str) -> bool:
    """Check if directory is prunable by default (but user can override)."""
    return dirname in DEFAULT_PRUNABLE_DIRS or is_test_dir(dirname)


def is_test_dir(dirname: str) -> bool:
    return dirname.lower() in TEST_DIR_NAMES
