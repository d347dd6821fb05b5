"""On-disk persistence of scan results.

The cache is a single JSON envelope::

    {
      "format": 1,
      "cacheKey": "<sha256>",
      "definitions": [[qualifiedKey, record], ...],
      "usages": [[name, [file, ...]], ...]        # only with usage tracking
    }

A readable envelope whose cache key matches the current scan replaces the
scan entirely: no source file is read. The key covers the resolved scan
root, the tool version and the usage-tracking flag. File contents are not
part of it, so deleting the cache file is the way to pick up source edits.
"""

from __future__ import annotations

import contextlib
import hashlib
import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from archscan.config.constants import CACHE_FORMAT_VERSION, TOOL_VERSION
from archscan.core.errors import CacheError
from archscan.index.models import DefinitionRecord, FactStore, UsageIndex

log = structlog.get_logger(__name__)


def compute_cache_key(root: Path, *, track_usages: bool) -> str:
    """Identify a scan configuration: resolved root + tool version + usage flag."""
    hasher = hashlib.sha256()
    hasher.update(str(root.resolve()).encode())
    hasher.update(b"\0")
    hasher.update(TOOL_VERSION.encode())
    hasher.update(b"\0")
    hasher.update(b"usages" if track_usages else b"definitions")
    return hasher.hexdigest()


@dataclass
class CachedScan:
    """Stores reconstructed from a cache envelope."""

    definitions: FactStore
    usages: UsageIndex | None
    cache_key: str | None


def _encode(store: FactStore, usages: UsageIndex | None, cache_key: str) -> dict[str, Any]:
    envelope: dict[str, Any] = {
        "format": CACHE_FORMAT_VERSION,
        "cacheKey": cache_key,
        "definitions": [
            [key, record.model_dump(mode="json", by_alias=True)] for key, record in store.items()
        ],
    }
    if usages is not None:
        envelope["usages"] = [[name, files] for name, files in usages.items()]
    return envelope


def _decode(envelope: Any) -> CachedScan:
    """Rebuild stores from a parsed envelope. Raises ValueError on any shape problem."""
    if not isinstance(envelope, dict):
        raise ValueError("envelope is not an object")
    if envelope.get("format") != CACHE_FORMAT_VERSION:
        raise ValueError(f"unsupported cache format {envelope.get('format')!r}")

    store = FactStore()
    for entry in envelope.get("definitions", []):
        key, raw = entry
        record = DefinitionRecord.model_validate(raw)
        if record.qualified_key != key:
            raise ValueError(f"entry key {key!r} does not match record {record.qualified_key!r}")
        store.insert(record)

    usages: UsageIndex | None = None
    if "usages" in envelope:
        usages = UsageIndex()
        for name, files in envelope["usages"]:
            if not isinstance(name, str) or not isinstance(files, list):
                raise ValueError(f"malformed usage entry for {name!r}")
            for file_name in files:
                usages.add(name, str(file_name))

    cache_key = envelope.get("cacheKey")
    return CachedScan(definitions=store, usages=usages, cache_key=cache_key)


class ScanCache:
    """Load/save scan results at a fixed path."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self, cache_key: str | None = None) -> CachedScan | None:
        """Return cached stores, or None when the caller has to scan.

        Args:
            cache_key: Expected key. None accepts any readable cache.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            log.debug("cache_missing", path=str(self.path))
            return None
        except OSError as e:
            log.warning("cache_corrupt", **CacheError.corrupt(str(self.path), str(e)).to_dict())
            return None

        try:
            cached = _decode(json.loads(text))
        except (ValueError, TypeError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            log.warning("cache_corrupt", **CacheError.corrupt(str(self.path), str(e)).to_dict())
            return None

        if cache_key is not None and cached.cache_key != cache_key:
            err = CacheError.stale(str(self.path), cache_key, cached.cache_key)
            log.info("cache_stale", **err.to_dict())
            return None

        log.info(
            "cache_loaded",
            path=str(self.path),
            definitions=len(cached.definitions),
            usages=len(cached.usages) if cached.usages is not None else None,
        )
        return cached

    def save(self, store: FactStore, usages: UsageIndex | None, cache_key: str) -> None:
        """Write the envelope, replacing any existing file atomically.

        Raises:
            CacheError: The file could not be written.
        """
        payload = json.dumps(_encode(store, usages, cache_key))
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise CacheError.write_failed(str(self.path), str(e)) from e

        log.info("cache_saved", path=str(self.path), definitions=len(store))

    def clear(self) -> bool:
        """Delete the cache file. Returns False if there was nothing to delete."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        log.info("cache_cleared", path=str(self.path))
        return True
