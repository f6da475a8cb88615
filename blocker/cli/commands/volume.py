"""
Volume commands. These talk to a running plugin, which owns the volume state.
"""

from typing import Optional

import typer

from blocker.client import BlockerPluginClient
from blocker.lib.config import load_config

app = typer.Typer(help="Volume commands against a running plugin")


def _client(endpoint: Optional[str]) -> BlockerPluginClient:
    if not endpoint:
        cfg = load_config()
        endpoint = f"http://{cfg.api_host}:{cfg.api_port}"
    return BlockerPluginClient(endpoint)


EndpointOption = typer.Option(None, "--endpoint", help="Plugin URL (default: from config)")


@app.command()
def create(
    name: str = typer.Argument(..., help="EBS volume id"),
    endpoint: Optional[str] = EndpointOption,
):
    """
    Register a volume with the plugin.
    """
    try:
        with _client(endpoint) as client:
            client.create(name)
        typer.echo(f"Volume {name} registered")
    except Exception as e:
        typer.echo(f"Error creating volume: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def mount(
    name: str = typer.Argument(..., help="EBS volume id"),
    endpoint: Optional[str] = EndpointOption,
):
    """
    Attach and mount a registered volume.
    """
    try:
        typer.echo(f"Mounting volume: {name}")
        with _client(endpoint) as client:
            mount_path = client.mount(name)
        typer.echo(f"Volume {name} mounted at: {mount_path}")
    except Exception as e:
        typer.echo(f"Error mounting volume: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def path(
    name: str = typer.Argument(..., help="EBS volume id"),
    endpoint: Optional[str] = EndpointOption,
):
    """
    Print the mountpoint of a mounted volume.
    """
    try:
        with _client(endpoint) as client:
            typer.echo(client.path(name))
    except Exception as e:
        typer.echo(f"Error getting volume path: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def unmount(
    name: str = typer.Argument(..., help="EBS volume id"),
    endpoint: Optional[str] = EndpointOption,
):
    """
    Unmount and detach a volume; it stays registered.
    """
    try:
        with _client(endpoint) as client:
            client.unmount(name)
        typer.echo(f"Volume {name} unmounted")
    except Exception as e:
        typer.echo(f"Error unmounting volume: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def remove(
    name: str = typer.Argument(..., help="EBS volume id"),
    endpoint: Optional[str] = EndpointOption,
):
    """
    Unmount if needed and unregister a volume.
    """
    try:
        with _client(endpoint) as client:
            client.remove(name)
        typer.echo(f"Volume {name} removed")
    except Exception as e:
        typer.echo(f"Error removing volume: {e}", err=True)
        raise typer.Exit(1)


@app.command("list")
def list_volumes(endpoint: Optional[str] = EndpointOption):
    """
    List registered volumes.
    """
    try:
        with _client(endpoint) as client:
            volumes = client.list()

        if not volumes:
            typer.echo("No volumes registered")
            return

        typer.echo(f"{'NAME':<24} {'MOUNTPOINT'}")
        typer.echo("-" * 70)
        for vol in volumes:
            typer.echo(f"{vol.get('Name', ''):<24} {vol.get('Mountpoint') or '-'}")
    except Exception as e:
        typer.echo(f"Error listing volumes: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def get(
    name: str = typer.Argument(..., help="EBS volume id"),
    endpoint: Optional[str] = EndpointOption,
):
    """
    Show one registered volume.
    """
    try:
        with _client(endpoint) as client:
            vol = client.get(name)
        typer.echo(f"Name       : {vol.get('Name', name)}")
        typer.echo(f"Mountpoint : {vol.get('Mountpoint') or '-'}")
    except Exception as e:
        typer.echo(f"Error getting volume: {e}", err=True)
        raise typer.Exit(1)
