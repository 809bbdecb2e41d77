"""
Typer application for ``ortelius-cli``.

A single command: collect the evidence for the checkout in ``--workdir``
and submit it to the registry at ``--url``. Every flag can also be set
through an ``ORTELIUS_*`` environment variable, which is how CI jobs
usually pass the password.

Output contract:
    stdout  one ``KEY=<key>`` line per registry key received
    stderr  structured logs and error messages
    exit    0 submitted, 1 component version rejected, 2 bad arguments
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from ortelius_cli import __version__
from ortelius_cli.core.logging import configure_logging, get_logger
from ortelius_cli.core.settings import CollectorSettings
from ortelius_cli.evidence.assembler import EvidenceAssembler

app = typer.Typer(
    name="ortelius-cli",
    help="Collect build evidence for a component version and submit it to an Ortelius registry.",
    rich_markup_mode="rich",
    add_completion=False,
)

err_console = Console(stderr=True)
logger = get_logger(__name__)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        try:
            v = pkg_version("ortelius-cli")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"ortelius-cli {v}")
        raise typer.Exit()


# ── Command ──────────────────────────────────────────────────────────────


@app.command()
def submit(
    url: str = typer.Option(..., "--url", envvar="ORTELIUS_URL", help="Registry base URL."),
    user: str = typer.Option(..., "--user", envvar="ORTELIUS_USER", help="Submitting user id."),
    password: str = typer.Option(
        ..., "--pass", envvar="ORTELIUS_PASSWORD", help="Submitting user password.", show_default=False
    ),
    sbom: Path | None = typer.Option(
        None, "--sbom", envvar="ORTELIUS_SBOM", help="CycloneDX JSON SBOM file to submit."
    ),
    config_file: str = typer.Option(
        "component.toml", "--config-file", envvar="ORTELIUS_CONFIG_FILE", help="Component config file name."
    ),
    workdir: Path = typer.Option(
        Path("."),
        "--workdir",
        "-C",
        envvar="ORTELIUS_WORKDIR",
        file_okay=False,
        help="Checkout directory.",
    ),
    log_level: str = typer.Option("INFO", "--log-level", envvar="ORTELIUS_LOG_LEVEL"),
    log_format: str = typer.Option(
        "auto", "--log-format", envvar="ORTELIUS_LOG_FORMAT", help="auto, json or console."
    ),
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Submit the component version built from this checkout."""
    try:
        settings = CollectorSettings(
            url=url,
            user=user,
            password=password,
            sbom=sbom,
            config_file=config_file,
            workdir=workdir.resolve(),
            log_level=log_level,
            log_format=log_format,
        )
    except ValidationError as exc:
        err_console.print(f"[bold red]Error[/bold red]: {exc.errors()[0]['msg']}")
        raise typer.Exit(code=2) from exc

    configure_logging(level=settings.log_level, json_format=settings.json_logs())
    logger.info("collector_started", url=settings.url, workdir=str(settings.workdir))

    report = EvidenceAssembler(settings).run()
    for key in report.keys:
        typer.echo(f"KEY={key}")

    if not report.success:
        message = report.error.message if report.error else "component version not submitted"
        err_console.print(f"[bold red]Error[/bold red]: {message}")
        raise typer.Exit(code=1)


def main() -> None:
    app()
