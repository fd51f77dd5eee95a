"""
Tempus - temporal value functions for a query engine's expression evaluator.

Pure functions over UTC timestamps and durations:

- tempus.core: Values, clock, errors, Result, logging, settings
- tempus.functions: The ``time::*`` function library and its dispatch table
- tempus.cli: Typer command line for evaluating functions
"""

__version__ = "0.1.0"

from tempus.core.values import NONE, Absent, Bool, Duration, Number, Text, Timestamp, Value  # noqa: E402
from tempus.functions.registry import call, get_function, list_functions  # noqa: E402

__all__ = [
    "__version__",
    "NONE",
    "Absent",
    "Bool",
    "Duration",
    "Number",
    "Text",
    "Timestamp",
    "Value",
    "call",
    "get_function",
    "list_functions",
]
