"""Manifest edits via uv -- add, remove, update, tree."""

from __future__ import annotations

import click
from loguru import logger

from ..resolver import UvResolver

log = logger.bind(step="manage")

SYNC_HINT = "Run 'depsync sync' to update production artifacts"


def add_dependency(resolver: UvResolver, package: str, dev: bool = False) -> None:
    kind = "development dependency" if dev else "dependency"
    click.echo(f"Adding {kind}: {package}")
    resolver.add(package, dev=dev)
    log.info(f"Added {package} (dev={dev})")
    click.secho(f"Added {package}", fg="green")
    click.secho(SYNC_HINT, fg="yellow")


def remove_dependency(resolver: UvResolver, package: str) -> None:
    click.echo(f"Removing dependency: {package}")
    resolver.remove(package)
    log.info(f"Removed {package}")
    click.secho(f"Removed {package}", fg="green")
    click.secho(SYNC_HINT, fg="yellow")


def update_dependencies(resolver: UvResolver, package: str | None = None) -> None:
    """Upgrade one package, or all of them when package is None."""
    if package:
        click.echo(f"Updating dependency: {package}")
        resolver.upgrade(package)
        click.secho(f"Updated {package}", fg="green")
    else:
        click.echo("Updating all dependencies...")
        resolver.upgrade()
        click.secho("Updated all dependencies", fg="green")
    log.info(f"Upgraded {package or 'all packages'}")
    click.secho(SYNC_HINT, fg="yellow")


def show_tree(resolver: UvResolver) -> None:
    click.echo(resolver.tree(), nl=False)
