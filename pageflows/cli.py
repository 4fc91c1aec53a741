"""Typer based command line entry points for pageflows."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from pageflows.browser import PlaywrightSession
from pageflows.config import load_session_settings
from pageflows.core.errors import PageflowsError
from pageflows.core.logger import get_logger
from pageflows.loader import load_workflow_set

app = typer.Typer(help="Inspect and run pageflows workflow sets.")


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")
    get_logger().setLevel(level_value)


@app.command("list")
def list_workflows(
    target: str = typer.Argument(..., help="Workflow set as package.module:ClassName."),
) -> None:
    """Print the workflows declared on a workflow set."""

    try:
        workflow_set = load_workflow_set(target)
    except PageflowsError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    for name in workflow_set.workflow_names():
        typer.echo(name)


@app.command("run")
def run_workflow(
    target: str = typer.Argument(..., help="Workflow set as package.module:ClassName."),
    name: str = typer.Argument(..., help="Workflow to run."),
    args: Optional[List[str]] = typer.Argument(None, help="Positional workflow arguments."),
    config: Optional[Path] = typer.Option(None, "--config", help="Session settings YAML."),
    profile: Optional[str] = typer.Option(None, "--profile", help="Profile inside the settings file."),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override the configured base URL."),
    headed: bool = typer.Option(False, "--headed", help="Show the browser window."),
) -> None:
    """Run one workflow in a fresh Playwright session."""

    logger = get_logger()
    try:
        workflow_set = load_workflow_set(target)
        workflow_set.get_workflow(name)
        settings = load_session_settings(config, profile=profile)
    except PageflowsError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    updates = {}
    if base_url:
        updates["base_url"] = base_url
    if headed:
        updates["headless"] = False
    if updates:
        settings = settings.model_copy(update=updates)

    try:
        with PlaywrightSession(settings) as session:
            result = getattr(workflow_set(session), name)(*(args or []))
    except Exception as exc:  # noqa: BLE001
        logger.error("Workflow %s.%s failed: %s", workflow_set.__name__, name, exc)
        typer.secho(f"Workflow {name} failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    logger.info("Workflow %s.%s finished", workflow_set.__name__, name)
    if result is not None:
        typer.echo(result)


if __name__ == "__main__":
    app()
