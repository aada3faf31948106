"""Command-line entry point for KSTool."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from kstool.constants.defaults import LOG_FILE_NAME, SETTINGS_FILE_NAME
from kstool.constants.values import APP_NAME, APP_VERSION
from kstool.controllers.cluster.controller import ClusterClientError, ClusterController
from kstool.controllers.templates.controller import TemplateController
from kstool.controllers.templates.store import ConfigStore
from kstool.models.state.app_settings import AppSettings, ConfigError
from kstool.models.state.config_manager import ConfigManager
from kstool.utils.audit import configure_syslog

logger = logging.getLogger(__name__)

app = typer.Typer(help="KSTool - browse, create and manage Kubernetes batch jobs")
console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"{APP_NAME} {APP_VERSION}")
        raise typer.Exit


def load_settings(
    config_dir: Path | None = None,
    namespace: str | None = None,
    context: str | None = None,
    identity: str | None = None,
) -> AppSettings:
    """Load settings from disk and apply command-line overrides."""
    settings_path = (
        config_dir.expanduser() / SETTINGS_FILE_NAME if config_dir is not None else None
    )
    settings = ConfigManager.load(settings_path)

    overrides: dict[str, str] = {}
    if config_dir is not None:
        overrides["config_dir"] = str(config_dir)
    if namespace:
        overrides["namespace"] = namespace
    if context:
        overrides["context"] = context
    if identity:
        overrides["identity"] = identity
    if not overrides:
        return settings
    return AppSettings.model_validate({**settings.model_dump(), **overrides})


def configure_logging(settings: AppSettings, level: str) -> Path:
    """Send log records to a file; the TUI owns the terminal."""
    log_path = settings.config_path / LOG_FILE_NAME
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(log_path),
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    configure_syslog()
    return log_path


@app.command()
def main(
    namespace: Annotated[
        str | None, typer.Option("--namespace", "-n", help="Namespace to manage")
    ] = None,
    context: Annotated[
        str | None, typer.Option("--context", help="kubectl context to use")
    ] = None,
    identity: Annotated[
        str | None,
        typer.Option("--identity", help="User name checked against the owner label"),
    ] = None,
    config_dir: Annotated[
        Path | None,
        typer.Option("--config-dir", help="Configuration directory (default: ~/.kstool)"),
    ] = None,
    log_level: Annotated[
        str, typer.Option("--log-level", help="Log level for the log file")
    ] = "INFO",
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Start the jobs dashboard."""
    try:
        settings = load_settings(config_dir, namespace, context, identity)
    except (ConfigError, ValueError) as exc:
        console.print(f"[red]Invalid settings: {exc}[/red]")
        raise typer.Exit(1) from exc

    configure_logging(settings, log_level)
    logger.info(
        "Starting %s %s for %s in namespace %s",
        APP_NAME,
        APP_VERSION,
        settings.identity or "unknown user",
        settings.namespace,
    )

    cluster = ClusterController(
        namespace=settings.namespace,
        context=settings.context,
        request_timeout=settings.request_timeout,
        owner_label=settings.user_label,
    )
    try:
        snapshot = asyncio.run(cluster.fetch_snapshot())
    except ClusterClientError as exc:
        message = ClusterController._summarize_connection_error(exc)
        logger.error("Initial snapshot failed: %s", exc)
        console.print(f"[red]Cannot reach the cluster: {message}[/red]")
        raise typer.Exit(1) from exc

    templates = TemplateController(ConfigStore(settings.config_path), cluster)

    from kstool.app import KSToolApp

    KSToolApp(settings, cluster, templates, initial_snapshot=snapshot).run()
