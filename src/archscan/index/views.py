"""Report-ready views over a completed FactStore.

All functions are pure: they never mutate the stores they read.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from archscan.config.constants import NAMESPACE_SEPARATOR, UNKNOWN_DOMAIN
from archscan.index.models import DefinitionRecord, FactStore, UsageIndex


@dataclass(frozen=True)
class DomainBucket:
    domain: str
    count: int
    percentage: float  # share of all records, 0-100


@dataclass(frozen=True)
class UsageEntry:
    name: str  # as written at the use site
    count: int
    files: list[str] = field(default_factory=list)
    definition: DefinitionRecord | None = None


def domain_buckets(store: FactStore) -> list[DomainBucket]:
    """Group records by domain, largest group first.

    Records without a domain land in the ``unknown`` bucket. Percentages
    add up to 100 for any non-empty store.
    """
    total = len(store)
    if total == 0:
        return []

    counts = Counter(record.domain or UNKNOWN_DOMAIN for record in store.records())
    buckets = [
        DomainBucket(domain=domain, count=count, percentage=count * 100.0 / total)
        for domain, count in counts.items()
    ]
    buckets.sort(key=lambda b: (-b.count, b.domain))
    return buckets


def sorted_by_namespace(store: FactStore) -> list[DefinitionRecord]:
    """All records ordered by namespace (file name for scripts), case-insensitive.

    Keeping a namespace's classes adjacent makes domain drift inside one
    namespace visible at a glance.
    """
    return sorted(
        store.records(),
        key=lambda r: (r.sort_key.casefold(), (r.class_name or "").casefold(), r.qualified_key),
    )


def resolve_usage(name: str, store: FactStore) -> DefinitionRecord | None:
    """Find the record a referenced name points at, by exact qualified key.

    Only a single leading separator (fully qualified ``\\Foo\\Bar``) is
    dropped. Unqualified or alias-relative names are not resolved.
    """
    record = store.get(name)
    if record is None and name.startswith(NAMESPACE_SEPARATOR):
        record = store.get(name[len(NAMESPACE_SEPARATOR) :])
    return record


def usage_frequency(usages: UsageIndex, store: FactStore) -> list[UsageEntry]:
    """Referenced names by descending reference count."""
    entries = [
        UsageEntry(
            name=name,
            count=len(files),
            files=files,
            definition=resolve_usage(name, store),
        )
        for name, files in usages.items()
    ]
    entries.sort(key=lambda e: (-e.count, e.name))
    return entries
