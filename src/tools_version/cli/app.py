"""CLI entrypoint for :mod:`tools_version`.

``tools-version`` runs in exactly one of three modes:

- *(default)* print the manifest's tools version
- `--set VERSION` rewrite the directive to `VERSION`
- `--set-current` rewrite the directive to the current toolchain version (patch zeroed)
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError
from typer import BadParameter

from tools_version import __version__
from tools_version.application.service import DisplayResult, ToolsVersionService, resolve_mode
from tools_version.infrastructure.observability.context import create_command_logger_context
from tools_version.infrastructure.settings import Settings
from tools_version.models.errors import ConflictingModes, ToolsVersionError
from tools_version.models.version import format_version

app = typer.Typer(
    help="Manipulate the tools version of the current package.",
    add_completion=False,
    rich_markup_mode="markdown",
)


class LogFormat(str, Enum):
    """Supported log output formats."""

    text = "text"
    ndjson = "ndjson"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def resolve_log_level(log_level: Optional[str], default_level: int) -> int:
    """Resolve a string log level to a logging level constant."""
    if not log_level:
        return default_level

    mapping = logging.getLevelNamesMapping()
    resolved = mapping.get(str(log_level).upper())
    if isinstance(resolved, int):
        return resolved

    raise BadParameter(f"Invalid log level: {log_level}", param_hint="--log-level")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _fail(message: str) -> NoReturn:
    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------


@app.command()
def tools_version_command(
    package_path: Path = typer.Option(
        Path("."),
        "--package-path",
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Package root containing the manifest (defaults to the working directory).",
    ),
    set_value: Optional[str] = typer.Option(
        None,
        "--set",
        metavar="VERSION",
        help="Set tools version of package to the given value.",
    ),
    set_current: bool = typer.Option(
        False,
        "--set-current",
        help="Set tools version of package to the current tools version in use.",
    ),
    log_format: Optional[LogFormat] = typer.Option(
        None,
        "--log-format",
        case_sensitive=False,
        help="Log output format.",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        case_sensitive=False,
        help="Log level (debug, info, warning, error, critical).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the tools-version package version and exit.",
    ),
) -> None:
    """Display or set the tools version directive of a package manifest."""

    try:
        command = resolve_mode(set_value, set_current)
    except ConflictingModes as exc:
        raise BadParameter(str(exc), param_hint="--set / --set-current") from exc

    try:
        settings = Settings.load()
    except ValidationError as exc:
        _fail(f"invalid settings: {exc}")

    effective_log_format = log_format.value if log_format else settings.log_format
    effective_log_level = resolve_log_level(log_level, settings.log_level)

    with create_command_logger_context(log_format=effective_log_format, log_level=effective_log_level) as log_ctx:
        log_ctx.logger.event(
            "settings.effective",
            level=logging.DEBUG,
            data=settings.model_dump(mode="json"),
        )
        service = ToolsVersionService(
            current_version=settings.current_version,
            minimum_version=settings.minimum_version,
            manifest_name=settings.manifest_name,
            logger=log_ctx.logger,
        )
        try:
            result = service.run(command, package_path)
        except ToolsVersionError as exc:
            _fail(str(exc))

    if isinstance(result, DisplayResult):
        if result.version is None:
            typer.echo(f"no tools-version directive in {result.manifest_path}", err=True)
        else:
            typer.echo(format_version(result.version))


# ---------------------------------------------------------------------------
# Module entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    """Entrypoint used by console scripts and `python -m tools_version`."""
    app(prog_name="tools-version")


__all__ = ["app", "main"]
