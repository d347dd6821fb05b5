"""Records and in-memory stores produced by a scan.

A scan produces one DefinitionRecord per class declaration (PHP) or per
file (JS/TS, which has no class concept here). Records are collected in a
FactStore keyed by qualified key; qualified-name references are collected
separately in a UsageIndex.

Both stores are owned by exactly one scan invocation. Nothing here is
thread-safe: the scanner feeds them from a single thread.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Dialect(str, Enum):
    """Source dialects handled by the scanner."""

    PHP = "php"  # class-based, attribute-bearing
    SCRIPT = "script"  # JavaScript / TypeScript front-end code


class DefinitionRecord(BaseModel):
    """Normalized facts about one declaration (or one script file).

    Serialized with camelCase aliases (``qualifiedKey``, ``isInternal``, ...)
    so cache files keep a stable, language-neutral shape.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    qualified_key: str
    namespace: str | None = None
    class_name: str | None = None
    file_name: str
    domain: str | None = None
    is_internal: bool = False
    is_final: bool | None = None

    @field_validator("domain", mode="before")
    @classmethod
    def _empty_domain_is_absent(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def _namespace_requires_class_name(self) -> DefinitionRecord:
        if self.namespace is not None and not self.class_name:
            raise ValueError(f"record {self.qualified_key!r} has a namespace but no class name")
        return self

    @property
    def sort_key(self) -> str:
        """Namespace when present, file name otherwise."""
        return self.namespace if self.namespace is not None else self.file_name


@dataclass
class FactStore:
    """Mapping of qualified key to DefinitionRecord. Last write wins."""

    _records: dict[str, DefinitionRecord] = field(default_factory=dict)

    @classmethod
    def from_records(cls, records: Iterable[DefinitionRecord]) -> FactStore:
        store = cls()
        for record in records:
            store.insert(record)
        return store

    def insert(self, record: DefinitionRecord) -> DefinitionRecord | None:
        """Insert or overwrite. Returns the record that was replaced, if any."""
        previous = self._records.get(record.qualified_key)
        self._records[record.qualified_key] = record
        return previous

    def get(self, key: str) -> DefinitionRecord | None:
        return self._records.get(key)

    def records(self) -> list[DefinitionRecord]:
        return list(self._records.values())

    def items(self) -> list[tuple[str, DefinitionRecord]]:
        return list(self._records.items())

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)


@dataclass
class UsageIndex:
    """Referenced type name -> file paths that reference it.

    Names are kept as written at the use site. A file appears once per
    reference, so repeated uses in one file count repeatedly.
    """

    _usages: dict[str, list[str]] = field(default_factory=dict)

    def add(self, name: str, file_name: str) -> None:
        self._usages.setdefault(name, []).append(file_name)

    def extend(self, names: Iterable[str], file_name: str) -> None:
        for name in names:
            self.add(name, file_name)

    def files_for(self, name: str) -> list[str]:
        return list(self._usages.get(name, ()))

    def count(self, name: str) -> int:
        return len(self._usages.get(name, ()))

    def items(self) -> list[tuple[str, list[str]]]:
        return [(name, list(files)) for name, files in self._usages.items()]

    def __contains__(self, name: object) -> bool:
        return name in self._usages

    def __len__(self) -> int:
        return len(self._usages)


@dataclass
class ScanStats:
    """Counters reported at the end of a fresh scan."""

    files_enumerated: int = 0
    php_files: int = 0
    script_files: int = 0
    records: int = 0
    elapsed_sec: float = 0.0
    read_failed_paths: list[str] = field(default_factory=list)

    @property
    def read_failures(self) -> int:
        return len(self.read_failed_paths)

    @property
    def files_scanned(self) -> int:
        return self.php_files + self.script_files
