"""CLI commands for listing storage backends and engines."""

import click

from df_metrics.engines import list_runner_types
from df_metrics.storage import StorageBackend, list_supported_backends


@click.command("list-backends")
def list_backends():
    """List storage backends and whether they are implemented."""
    supported = set(list_supported_backends())

    click.echo("Storage Backends:")
    for backend in StorageBackend:
        status = "supported" if backend.value in supported else "not implemented"
        click.echo(f"  - {backend.value} ({status})")


@click.command("list-engines")
def list_engines():
    """List available query engines."""
    click.echo("Available Engines:")
    for engine in list_runner_types():
        click.echo(f"  - {engine}")
