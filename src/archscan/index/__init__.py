"""Index module - definition fact extraction and aggregation.

This module provides:
- Discovery: enumerate PHP / JS / TS sources under a root
- Extraction: tree-sitter queries reduced to DefinitionRecords
- Stores: FactStore (by qualified key) and UsageIndex (by referenced name)
- Cache: JSON envelope that short-circuits repeated scans
- Views: domain buckets, namespace listing, usage frequency

Public API is in `archscan.index.ops` (get_scan_data, Scanner, ScanResult).
Internal implementations are in `archscan.index._internal/`.
"""

from archscan.index.cache import CachedScan, ScanCache, compute_cache_key
from archscan.index.models import DefinitionRecord, Dialect, FactStore, ScanStats, UsageIndex
from archscan.index.ops import Scanner, ScanResult, get_scan_data
from archscan.index.views import (
    DomainBucket,
    UsageEntry,
    domain_buckets,
    resolve_usage,
    sorted_by_namespace,
    usage_frequency,
)

__all__ = [
    # Public API (ops.py)
    "Scanner",
    "ScanResult",
    "get_scan_data",
    # Models
    "DefinitionRecord",
    "Dialect",
    "FactStore",
    "ScanStats",
    "UsageIndex",
    # Cache
    "CachedScan",
    "ScanCache",
    "compute_cache_key",
    # Views
    "DomainBucket",
    "UsageEntry",
    "domain_buckets",
    "resolve_usage",
    "sorted_by_namespace",
    "usage_frequency",
]
