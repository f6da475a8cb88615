#!/usr/bin/env python3
"""
Main CLI entry point using Typer.
"""

import sys

import typer

from blocker.cli.commands import info, volume

app = typer.Typer(
    name="blocker",
    help="Blocker EBS volume plugin control tool",
    add_completion=False,
)

app.command(name="info")(info.info)
app.add_typer(volume.app, name="volume", help="Volume commands against a running plugin")


def main() -> int:
    """Main entry point."""
    try:
        app()
        return 0
    except KeyboardInterrupt:
        typer.echo("\nOperation cancelled by user", err=True)
        return 130
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
