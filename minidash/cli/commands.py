"""CLI commands for minidash."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from minidash import __version__
from minidash.config.schema import Config

app = typer.Typer(
    name="minidash",
    help="minidash - live status dashboard for local minikube profiles",
    invoke_without_command=True,
)
console = Console()

_STATE_STYLES = {
    "Running": "green",
    "Configured": "green",
    "Misconfigured": "red",
    "Unknown": "yellow",
}


def version_callback(value: bool) -> None:
    if value:
        console.print(f"minidash v{__version__}")
        raise typer.Exit()


def _positive(value: Optional[float]) -> Optional[float]:
    if value is not None and value <= 0:
        raise typer.BadParameter("must be greater than 0")
    return value


def _load(config_path: Optional[Path]) -> Config:
    from minidash.config.loader import load_config

    return load_config(config_path)


def _build_registry(config: Config):
    from minidash.profiles.registry import ProfileRegistry
    from minidash.profiles.store import FileProfileStore, MinikubeCLIProfileStore, minikube_home

    if config.minikube.profile_source == "files":
        store = FileProfileStore(minikube_home(config.minikube.home))
    else:
        store = MinikubeCLIProfileStore(
            command=config.minikube.command,
            timeout_s=config.minikube.timeout_s,
        )
    return ProfileRegistry(store)


def _build_aggregator(config: Config):
    from minidash.status.aggregator import StatusAggregator
    from minidash.status.backend import MinikubeStatusBackend

    backend = MinikubeStatusBackend(
        command=config.minikube.command,
        timeout_s=config.minikube.timeout_s,
    )
    return StatusAggregator(backend)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: ~/.minidash/config.json).",
    ),
    refresh_interval: Optional[float] = typer.Option(
        None,
        "--refresh-interval",
        callback=_positive,
        help="Seconds between status checks of each profile.",
    ),
    poll_interval: Optional[float] = typer.Option(
        None,
        "--poll-interval",
        callback=_positive,
        help="Seconds between profile list polls.",
    ),
    columns: Optional[int] = typer.Option(
        None,
        "--columns",
        min=0,
        help="Panels per row (0 fits the terminal width).",
    ),
) -> None:
    """Launch the live profile dashboard (q or ctrl+c quits)."""
    del version
    ctx.obj = {"config_path": config_path}
    if ctx.invoked_subcommand is not None:
        return

    from minidash.errors import DashboardInitError
    from minidash.tui.app import run_dashboard
    from minidash.utils.log_setup import setup_logging

    config = _load(config_path)
    if refresh_interval is not None:
        config.dashboard.refresh_interval_s = refresh_interval
    if poll_interval is not None:
        config.dashboard.poll_interval_s = poll_interval
    if columns is not None:
        config.dashboard.max_cols = columns

    setup_logging(config, tui=True)
    registry = _build_registry(config)
    aggregator = _build_aggregator(config)

    try:
        code = run_dashboard(config, registry, aggregator.check_status)
    except DashboardInitError as exc:
        logger.error(f"Dashboard failed to start: {exc}")
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)
    logger.info(f"Dashboard exited with code {code}")
    raise typer.Exit(code)


def _styled(value: str) -> str:
    style = _STATE_STYLES.get(value)
    return f"[{style}]{value}[/{style}]" if style else value


@app.command()
def status(
    ctx: typer.Context,
    profiles: Optional[List[str]] = typer.Argument(
        None,
        help="Profiles to check (default: every valid profile).",
    ),
) -> None:
    """Print a one-shot status table; exit code is the OR of all failure flags."""
    from minidash.profiles.registry import normalize_profiles
    from minidash.utils.log_setup import setup_logging

    config = _load((ctx.obj or {}).get("config_path"))
    setup_logging(config, tui=False)

    names = normalize_profiles(profiles or []) or _build_registry(config).list_active_profiles()
    if not names:
        console.print("[yellow]No minikube profiles found.[/yellow]")
        raise typer.Exit()

    aggregator = _build_aggregator(config)
    table = Table(title="minikube profiles")
    for column in ("Profile", "Host", "Kubelet", "APIServer", "Kubeconfig", "Flags"):
        table.add_column(column)

    exit_code = 0
    for name in names:
        snap = aggregator.check_status(name)
        exit_code |= snap.exit_code
        table.add_row(
            name,
            _styled(snap.host.value),
            _styled(snap.kubelet.value),
            _styled(snap.apiserver.value),
            _styled(snap.kubeconfig.value),
            ", ".join(snap.flags.names()) or "[green]OK[/green]",
        )

    console.print(table)
    raise typer.Exit(exit_code)


@app.command()
def init(
    ctx: typer.Context,
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite existing config without prompt.",
    ),
) -> None:
    """Write a default config file."""
    from minidash.config.loader import get_config_path, save_config

    target = (ctx.obj or {}).get("config_path") or get_config_path()
    if target.exists() and not force:
        console.print(f"[yellow]Config already exists at {target}[/yellow]")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit()

    save_config(Config(), target)
    console.print(f"[green]OK[/green] Created config at {target}")
