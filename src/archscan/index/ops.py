"""High-level orchestration of a scan.

Pipeline: Cache -> Discovery -> Read (thread pool) -> Parse/Extract -> Cache

Concurrency model:
- File reads fan out on a bounded ThreadPoolExecutor.
- Parsing, extraction and store inserts run on the calling thread as reads
  complete (as_completed fan-in). The DialectParser and both stores are
  therefore only ever touched by one thread.
- A parse failure cancels every pending read and propagates; there are no
  partial results.

Every call builds its own FactStore and UsageIndex; nothing is shared
between invocations.
"""

from __future__ import annotations

import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path

import structlog

from archscan.config.models import ArchScanConfig
from archscan.core.errors import CacheError, ParseError, ReadError
from archscan.core.logging import log_error
from archscan.core.progress import progress
from archscan.index._internal.discovery import SourceEnumerator
from archscan.index._internal.extraction import BaseExtractor, get_extractor
from archscan.index._internal.parsing import DialectParser, dialect_for_path
from archscan.index.cache import ScanCache, compute_cache_key
from archscan.index.models import Dialect, FactStore, ScanStats, UsageIndex

log = structlog.get_logger(__name__)


@dataclass
class ScanResult:
    """Stores for one invocation, fresh or from cache."""

    definitions: FactStore
    usages: UsageIndex | None = None
    stats: ScanStats | None = None  # None when loaded from cache
    from_cache: bool = False


def _read_source(path: Path) -> bytes:
    return path.read_bytes()


class Scanner:
    """Walks a root and builds the stores for it."""

    def __init__(
        self,
        root: Path,
        config: ArchScanConfig,
        *,
        track_usages: bool | None = None,
    ) -> None:
        self.root = root
        self.config = config
        self.track_usages = config.scan.track_usages if track_usages is None else track_usages

    def _enumerate(self) -> list[str]:
        enumerator = SourceEnumerator(
            root=self.root,
            include_globs=self.config.scan.include_globs,
            exclude_globs=self.config.scan.exclude_globs,
            respect_gitignore=self.config.scan.respect_gitignore,
        )
        return list(enumerator)

    def scan(self) -> ScanResult:
        """Run a full scan.

        Raises:
            ParseError: A file could not be parsed. Fatal.
        """
        start = time.monotonic()
        log.info("scan_started", root=str(self.root), track_usages=self.track_usages)

        paths = self._enumerate()
        stats = ScanStats(files_enumerated=len(paths))

        parser = DialectParser(package_attribute=self.config.markers.package_attribute)
        extractors = {d: get_extractor(d, parser, self.config.markers) for d in Dialect}
        store = FactStore()
        usages = UsageIndex() if self.track_usages else None
        unreadable: list[ReadError] = []

        workers = self.config.scan.max_workers
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="archscan-read") as pool:
            futures: dict[Future[bytes], str] = {
                pool.submit(_read_source, self.root / rel): rel for rel in paths
            }
            try:
                for future in progress(as_completed(futures), desc="Parsing", total=len(futures)):
                    rel = futures.pop(future)
                    try:
                        content = future.result()
                    except OSError as e:
                        stats.read_failed_paths.append(rel)
                        unreadable.append(ReadError.failed(rel, str(e)))
                        continue
                    self._process(rel, content, parser, extractors, store, usages, stats)
            except ParseError:
                pool.shutdown(wait=False, cancel_futures=True)
                raise

        # Console logs are muted while the progress bar is live
        for err in unreadable:
            log_error(log, "file_read_failed", err)

        stats.records = len(store)
        stats.elapsed_sec = time.monotonic() - start
        log.info(
            "scan_completed",
            files=stats.files_scanned,
            php_files=stats.php_files,
            script_files=stats.script_files,
            read_failures=stats.read_failures,
            records=stats.records,
            elapsed_sec=round(stats.elapsed_sec, 3),
        )
        return ScanResult(definitions=store, usages=usages, stats=stats)

    def _process(
        self,
        rel: str,
        content: bytes,
        parser: DialectParser,
        extractors: dict[Dialect, BaseExtractor],
        store: FactStore,
        usages: UsageIndex | None,
        stats: ScanStats,
    ) -> None:
        dialect = dialect_for_path(rel)
        if dialect is None:
            raise ParseError.unsupported(rel)

        try:
            parsed = parser.parse(dialect, content, path=rel)
        except ParseError as e:
            log_error(log, "parse_failed", e)
            raise
        if parsed.error_count:
            log.debug("syntax_errors", path=rel, error_nodes=parsed.error_count)

        extractor = extractors[dialect]
        record = extractor.extract(parsed, rel)
        if record is not None:
            previous = store.insert(record)
            if previous is not None:
                log.debug(
                    "definition_replaced",
                    key=record.qualified_key,
                    previous_file=previous.file_name,
                    file=rel,
                )

        if usages is not None:
            usages.extend(extractor.extract_usages(parsed), rel)

        if dialect is Dialect.PHP:
            stats.php_files += 1
        else:
            stats.script_files += 1


def get_scan_data(
    root: Path,
    config: ArchScanConfig,
    *,
    use_cache: bool = True,
    track_usages: bool | None = None,
) -> ScanResult:
    """Return the stores for a root, from cache when possible.

    A matching cache short-circuits the scan before any source file is
    touched. After a fresh scan the cache is rewritten; a failed write is
    logged and does not fail the run.
    """
    track = config.scan.track_usages if track_usages is None else track_usages
    cache = ScanCache(config.output.cache_path)
    cache_key = compute_cache_key(root, track_usages=track)

    if use_cache:
        cached = cache.load(cache_key)
        if cached is not None:
            return ScanResult(definitions=cached.definitions, usages=cached.usages, from_cache=True)

    result = Scanner(root, config, track_usages=track).scan()

    try:
        cache.save(result.definitions, result.usages, cache_key)
    except CacheError as e:
        log_error(log, "cache_save_failed", e)

    return result
