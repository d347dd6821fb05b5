"""archscan scan command - scan a tree and write the HTML report."""

import json
from pathlib import Path

import click

from archscan.config.models import ArchScanConfig
from archscan.core.errors import ArchScanError
from archscan.core.logging import get_log_file_path
from archscan.core.progress import get_console, make_domain_table, pluralize, status
from archscan.index.ops import ScanResult, get_scan_data
from archscan.index.views import domain_buckets
from archscan.report import render_report, write_report


def with_output_dir(config: ArchScanConfig, output_dir: Path | None) -> ArchScanConfig:
    if output_dir is None:
        return config
    config.output = config.output.model_copy(update={"directory": str(output_dir)})
    return config


def _print_summary(result: ScanResult) -> None:
    if result.stats is not None:
        stats = result.stats
        status(f"Scanned {pluralize(stats.files_scanned, 'file')} in {stats.elapsed_sec:.1f}s")
        status(f"PHP files: {stats.php_files}", indent=2)
        status(f"JS/TS files: {stats.script_files}", indent=2)
        if stats.read_failures:
            status(f"{pluralize(stats.read_failures, 'file')} could not be read", style="warning")
            for path in stats.read_failed_paths:
                status(path, indent=4)
    status(f"Found {pluralize(len(result.definitions), 'definition')}")
    get_console().print(make_domain_table(domain_buckets(result.definitions)))


@click.command()
@click.argument(
    "root",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Where to write the cache and the report (default: ./out)",
)
@click.option("--no-cache", is_flag=True, help="Ignore an existing cache and rescan")
@click.option(
    "--usages/--no-usages",
    default=None,
    help="Track qualified-name references (default from config)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the domain summary as JSON")
@click.pass_context
def scan_command(
    ctx: click.Context,
    root: Path,
    output_dir: Path | None,
    no_cache: bool,
    usages: bool | None,
    as_json: bool,
) -> None:
    """Scan ROOT for PHP classes and JS/TS files and report their domains.

    Results are cached in the output directory. A later run for the same
    ROOT reuses the cache without reading any source file; pass --no-cache
    or run 'archscan clear' to rescan.
    """
    config = with_output_dir(ctx.obj["config"], output_dir)
    cache_path = config.output.cache_path

    if not as_json:
        status(f"Scanning {root}")
        if no_cache or not cache_path.exists():
            status("Scanning files, this might take a few seconds...")

    try:
        result = get_scan_data(root, config, use_cache=not no_cache, track_usages=usages)
    except ArchScanError as e:
        status(str(e), style="error")
        if log_path := get_log_file_path():
            status(f"Details: {log_path}", indent=2)
        raise click.ClickException(e.message) from e

    if result.from_cache and not as_json:
        status(
            "Found cached scan results. Remove this file if you want to rescan "
            f"source files: {cache_path}",
            style="warning",
        )

    html = render_report(result.definitions, result.usages, root=str(root))
    report_path = write_report(config.output.report_path, html)

    if as_json:
        buckets = domain_buckets(result.definitions)
        click.echo(
            json.dumps(
                {
                    "root": str(root),
                    "fromCache": result.from_cache,
                    "definitions": len(result.definitions),
                    "report": str(report_path),
                    "domains": [
                        {"domain": b.domain, "count": b.count, "percentage": b.percentage}
                        for b in buckets
                    ],
                },
                indent=2,
            )
        )
        return

    _print_summary(result)
    status(f"HTML report written to {report_path}", style="success")
