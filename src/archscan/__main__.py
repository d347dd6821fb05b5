"""Entry point for ``python -m archscan``."""

from archscan.cli.main import cli

if __name__ == "__main__":
    cli()
