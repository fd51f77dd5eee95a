"""
Root Typer application for the tempus CLI.

    tempus functions
    tempus now
    tempus call time::floor ts:2023-06-15T10:20:30Z dur:3600000000000
"""

from __future__ import annotations

import json

import typer
from rich.markup import escape
from typer import Typer

from tempus.cli.utils import err_console, output_result, output_table, parse_argument
from tempus.core.clock import FixedClock, reset_clock, set_clock
from tempus.core.errors import ConfigError
from tempus.core.logging import configure_logging
from tempus.core.settings import TempusSettings, get_settings
from tempus.core.timestamps import local_offset
from tempus.functions import registry

app = Typer(
    name="tempus",
    help="tempus — temporal value functions for query evaluation.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from tempus import __version__

        typer.echo(f"tempus {__version__}")
        raise typer.Exit()


def _setup(ctx: typer.Context, settings: TempusSettings) -> None:
    configure_logging(level=settings.log_level, json_format=settings.log_json)
    fixed = settings.fixed_now_nanos
    if fixed is not None:
        # Only the instant is pinned; time::timezone still reports the host offset
        token = set_clock(FixedClock(fixed, offset=local_offset()))
        ctx.call_on_close(lambda: reset_clock(token))


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """tempus CLI — evaluate and inspect time functions."""
    try:
        settings = get_settings()
    except ConfigError as e:
        err_console.print(f"[bold red]Error[/bold red] (ConfigError): {escape(e.message)}", highlight=False)
        raise typer.Exit(code=2) from e
    _setup(ctx, settings)


# ── Commands ─────────────────────────────────────────────────────────────


@app.command("functions")
def functions(
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List the registered functions."""
    specs = [registry.get_function(name) for name in registry.list_functions()]
    if json_out:
        payload = [
            {"name": s.name, "min_args": s.min_args, "max_args": s.max_args, "description": s.description}
            for s in specs
        ]
        typer.echo(json.dumps(payload))
        return
    rows = [[s.name, f"{s.min_args}..{s.max_args}", s.description] for s in specs]
    output_table("Functions", ["Name", "Arity", "Description"], rows)


@app.command("now")
def now(
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Print the current instant."""
    output_result(registry.call("time::now"), pattern=get_settings().format_pattern, as_json=json_out)


@app.command("call")
def call(
    name: str = typer.Argument(..., help="Function name, e.g. time::floor"),
    args: list[str] | None = typer.Argument(
        None,
        help="Arguments: ts:<iso8601>, dur:<nanos>, num:<n>, bool:<true|false>, none, or text",
    ),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Evaluate a function."""
    values = [parse_argument(raw) for raw in args or []]
    result = registry.call(name, *values)
    output_result(result, pattern=get_settings().format_pattern, as_json=json_out)
