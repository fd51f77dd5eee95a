"""
CLI utility helpers — argument typing and output formatting.
"""

from __future__ import annotations

import json
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tempus.core.errors import TempusError
from tempus.core.result import Result
from tempus.core.values import NONE, Bool, Duration, Number, Text, Timestamp, Value
from tempus.functions.format import render

console = Console()
err_console = Console(stderr=True)


# ── Argument typing ──────────────────────────────────────────────────────


def parse_argument(raw: str) -> Value:
    """
    Turn a command-line token into a typed value.

    ``ts:<iso8601>`` → Timestamp, ``dur:<nanoseconds>`` → Duration,
    ``num:<number>`` → Number, ``bool:true|false`` → Bool, ``none`` → NONE,
    anything else → Text.
    """
    prefix, sep, body = raw.partition(":")
    if not sep:
        return NONE if raw == "none" else Text(raw)
    try:
        match prefix:
            case "ts":
                return Timestamp.from_iso(body)
            case "dur":
                return Duration(int(body))
            case "num":
                return Number(float(body) if any(c in body for c in ".eE") else int(body))
            case "bool":
                if body not in ("true", "false"):
                    raise ValueError("expected 'true' or 'false'")
                return Bool(body == "true")
    except ValueError as e:
        raise typer.BadParameter(f"{raw!r}: {e}") from e
    return Text(raw)


# ── Output helpers ───────────────────────────────────────────────────────


def render_value(value: Value, pattern: str) -> str:
    """Text form of a value; timestamps use ``pattern``."""
    if isinstance(value, Timestamp):
        return render(value, pattern)
    return str(value)


def _to_json(value: Value, pattern: str) -> dict[str, Any]:
    payload: dict[str, Any] = {"type": type(value).__name__}
    if isinstance(value, Timestamp):
        payload["value"] = render(value, pattern)
        payload["nanos"] = value.nanos
    elif isinstance(value, Duration):
        payload["nanos"] = value.nanos
    elif isinstance(value, (Text, Number, Bool)):
        payload["value"] = value.value
    else:
        payload["value"] = None
    return payload


def output_result(
    result: Result[Value],
    *,
    pattern: str,
    as_json: bool = False,
) -> None:
    """Render a function result to the terminal; errors exit with code 1."""
    if result.is_err():
        err = result.error
        kind = type(err).__name__
        message = err.message if isinstance(err, TempusError) else str(err)
        if as_json:
            console.print_json(json.dumps(result.to_dict(), default=str))
        else:
            err_console.print(f"[bold red]Error[/bold red] ({kind}): {escape(message)}", highlight=False)
        raise typer.Exit(code=1)

    value = result.unwrap()
    if as_json:
        console.print_json(json.dumps(_to_json(value, pattern), default=str))
        return
    console.print(render_value(value, pattern), markup=False, highlight=False, soft_wrap=True)


def output_table(title: str, columns: list[str], rows: list[list[str]]) -> None:
    table = Table(title=title)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*row)
    console.print(table)
