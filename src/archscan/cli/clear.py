"""archscan clear command - remove cached scan results."""

from pathlib import Path

import click
import questionary
from rich.console import Console

from archscan.cli.scan import with_output_dir
from archscan.index.cache import ScanCache


def clear_cache(cache_path: Path, *, yes: bool = False) -> bool:
    """Delete the scan cache so the next run rescans.

    Returns True if the cache was removed, False if cancelled or nothing to clear.
    """
    console = Console(stderr=True)
    cache = ScanCache(cache_path)

    if not cache.exists():
        console.print(f"[yellow]Nothing to clear[/yellow] - no cache at {cache_path}")
        return False

    if not yes:
        answer = questionary.confirm(
            f"Delete {cache_path}? The next scan will re-read every source file.",
            default=False,
        ).ask()
        if not answer:
            console.print("[dim]Cancelled[/dim]")
            return False

    try:
        cache.clear()
    except OSError as e:
        console.print(f"  [red]✗[/red] Failed to remove {cache_path}: {e}")
        return False

    console.print(f"  [green]✓[/green] Removed {cache_path}")
    return True


@click.command()
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Output directory holding the cache (default: ./out)",
)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def clear_command(ctx: click.Context, output_dir: Path | None, yes: bool) -> None:
    """Remove cached scan results, forcing the next scan to re-read sources."""
    config = with_output_dir(ctx.obj["config"], output_dir)
    cache_path = config.output.cache_path

    if not clear_cache(cache_path, yes=yes) and yes and cache_path.exists():
        raise click.ClickException(f"Failed to clear {cache_path}")
