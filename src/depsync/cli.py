"""CLI entry point for depsync."""

import os
from pathlib import Path

import click
from loguru import logger

from .config import SyncConfig
from .errors import DepsyncError
from .ops.bootstrap import print_next_steps, setup_environment
from .ops.check import check_dependencies
from .ops.manage import (
    add_dependency,
    remove_dependency,
    show_tree,
    update_dependencies,
)
from .preconditions import check_project, check_resolver
from .resolver import UvResolver
from .runner import SyncRunner, print_summary

log = logger.bind(step="cli")


def _find_config_file(project_root: Path) -> Path | None:
    """Look for .env in the project root."""
    candidate = project_root / ".env"
    if candidate.is_file():
        return candidate
    return None


def _load_env_file(env_file: Path) -> None:
    """Load a shell-style .env file into os.environ (without overriding)."""
    for line in env_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        if "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        value = value.strip()
        # Strip quotes
        if (value.startswith('"') and value.endswith('"')) or (
            value.startswith("'") and value.endswith("'")
        ):
            value = value[1:-1]
        # Skip bash variable expansions like ${VAR:-default}
        if "${" in value:
            continue
        # Don't override existing env vars (CLI > env > file)
        if key not in os.environ:
            os.environ[key] = value


def _require_resolver(config: SyncConfig) -> UvResolver:
    """Manifest + uv preconditions for commands that call uv."""
    resolver = UvResolver(config)
    try:
        check_project(config)
        check_resolver(resolver)
    except DepsyncError as e:
        raise click.ClickException(str(e)) from e
    return resolver


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--project-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project directory containing pyproject.toml (default: current directory).",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to .env file.",
)
@click.pass_context
def main(
    ctx: click.Context,
    project_root: Path | None,
    verbose: bool,
    config_file: Path | None,
) -> None:
    """Manage uv dependencies and sync pip-compatible production requirements."""
    # .env is looked up in the project root: --project-root, then DEPSYNC_PROJECT_ROOT
    env_root = os.environ.get("DEPSYNC_PROJECT_ROOT")
    root = (project_root or (Path(env_root) if env_root else Path.cwd())).resolve()

    # Load .env into environment before SyncConfig reads env vars
    env_file = config_file or _find_config_file(root)
    if env_file and env_file.is_file():
        _load_env_file(env_file)

    # Pass CLI flags as kwargs to avoid env pollution
    config_kwargs: dict[str, bool | Path] = {}
    if project_root is not None:
        config_kwargs["project_root"] = root
    if verbose:
        config_kwargs["verbose"] = True

    config = SyncConfig(_env_file=None, **config_kwargs)  # type: ignore[arg-type]
    config = config.model_copy(update={"project_root": config.project_root.resolve()})
    config.setup_logging()
    if env_file:
        log.debug(f"Loaded env from {env_file}")
    log.debug(f"Project root: {config.project_root}")

    ctx.obj = config


@main.command()
@click.argument("package")
@click.pass_obj
def add(config: SyncConfig, package: str) -> None:
    """Add a new dependency (e.g. 'requests>=2.28.0')."""
    resolver = _require_resolver(config)
    try:
        add_dependency(resolver, package)
    except DepsyncError as e:
        raise click.ClickException(str(e)) from e


@main.command("add-dev")
@click.argument("package")
@click.pass_obj
def add_dev(config: SyncConfig, package: str) -> None:
    """Add a new development dependency."""
    resolver = _require_resolver(config)
    try:
        add_dependency(resolver, package, dev=True)
    except DepsyncError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.argument("package")
@click.pass_obj
def remove(config: SyncConfig, package: str) -> None:
    """Remove a dependency."""
    resolver = _require_resolver(config)
    try:
        remove_dependency(resolver, package)
    except DepsyncError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.argument("package", required=False)
@click.pass_obj
def update(config: SyncConfig, package: str | None) -> None:
    """Update dependencies (all, or a specific PACKAGE)."""
    resolver = _require_resolver(config)
    try:
        update_dependencies(resolver, package)
    except DepsyncError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.option(
    "--no-install-check",
    is_flag=True,
    help="Skip the dry-run install and only check requirements syntax.",
)
@click.option("--no-hashes", is_flag=True, help="Export without --hash lines.")
@click.pass_context
def sync(ctx: click.Context, no_install_check: bool, no_hashes: bool) -> None:
    """Sync production artifacts (requirements.txt, requirements-dev.txt, tree)."""
    config: SyncConfig = ctx.obj
    updates: dict[str, bool] = {}
    if no_install_check:
        updates["install_check"] = False
    if no_hashes:
        updates["export_hashes"] = False
    if updates:
        config = config.model_copy(update=updates)

    try:
        report = SyncRunner(config).run()
    except DepsyncError as e:
        raise click.ClickException(str(e)) from e

    print_summary(report, config)
    ctx.exit(report.exit_code)


@main.command()
@click.pass_obj
def tree(config: SyncConfig) -> None:
    """Show the dependency tree."""
    resolver = _require_resolver(config)
    try:
        show_tree(resolver)
    except DepsyncError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.pass_obj
def check(config: SyncConfig) -> None:
    """Check for dependency conflicts and stale production requirements."""
    resolver = _require_resolver(config)
    try:
        check_dependencies(config, resolver)
    except DepsyncError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.pass_obj
def setup(config: SyncConfig) -> None:
    """Set up the development environment (mise, uv venv, pre-commit)."""
    try:
        report = setup_environment(config, UvResolver(config))
    except DepsyncError as e:
        raise click.ClickException(str(e)) from e
    print_next_steps(report)


@main.command("help")
@click.pass_context
def help_(ctx: click.Context) -> None:
    """Show this help."""
    click.echo(ctx.parent.get_help() if ctx.parent else ctx.get_help())
