"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.

For configurable values, see models.py.
"""

TOOL_VERSION = "0.1.0"
"""Tool version. Part of the cache key, so a new release rescans."""

CACHE_FORMAT_VERSION = 1
"""Version of the on-disk cache envelope layout."""

IGNORE_FILE_NAME = ".archscanignore"
"""Per-directory ignore file (gitignore syntax) honored during discovery."""

PROJECT_CONFIG_NAME = "archscan.yaml"
"""Project config file, looked up in the working directory."""

UNKNOWN_DOMAIN = "unknown"
"""Bucket name for records without a domain tag."""

NAMESPACE_SEPARATOR = "\\"
"""Separator between namespace and class name in a qualified key."""
