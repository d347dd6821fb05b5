"""Source file discovery."""

from archscan.index._internal.discovery.scanner import SourceEnumerator

__all__ = [
    "SourceEnumerator",
]
