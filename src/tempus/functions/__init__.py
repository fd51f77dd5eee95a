"""The ``time::*`` function library and the table that dispatches to it."""

from tempus.functions.registry import FunctionSpec, call, get_function, list_functions, register_function

__all__ = [
    "FunctionSpec",
    "call",
    "get_function",
    "list_functions",
    "register_function",
]
