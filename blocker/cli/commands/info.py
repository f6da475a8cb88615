"""
Host identity and configuration report.
"""

import typer

from blocker.lib.config import load_config
from blocker.lib.metadata import detect_host_identity


def info(
    detect: bool = typer.Option(True, "--detect/--no-detect", help="Query instance metadata (default: True)"),
):
    """
    Show effective configuration and the detected EC2 identity.
    """
    cfg = load_config()

    typer.echo("Configuration:")
    typer.echo(f"  Mount base        : {cfg.mount_base}")
    typer.echo(f"  Device slots      : {cfg.device_root}/sd[{cfg.device_letters}]")
    typer.echo(f"  Filesystem type   : {cfg.fs_type or 'auto'}")
    typer.echo(f"  Polling           : {cfg.poll_attempts} x {cfg.poll_interval}s")
    typer.echo(f"  API               : {cfg.api_host}:{cfg.api_port}")

    if not detect:
        return

    try:
        identity = detect_host_identity(cfg)
    except Exception as e:
        typer.echo(f"Error detecting EC2 information: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("EC2 information:")
    typer.echo(f"  InstanceId        : {identity.instance_id}")
    typer.echo(f"  Region            : {identity.region}")
    typer.echo(f"  Availability Zone : {identity.availability_zone}")
