"""Function table mapping query-language names to temporal functions.

Manifesto:
    The expression evaluator looks functions up by their query-language
    name (``time::floor``) and hands them a positional argument tuple. The
    registry owns the name and the arity; the functions own the semantics.

Tags:
    tempus, functions, registry, dispatch, lookup

Doc-Types:
    api-reference
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from tempus.core.errors import InvalidArgumentsError, InvalidFunctionError, categorize_error
from tempus.core.logging import LogContext, get_logger
from tempus.core.result import Err, Result

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class FunctionSpec:
    """A registered function with its accepted argument count."""

    name: str
    func: Callable[..., Result[Any]]
    min_args: int
    max_args: int
    description: str = ""

    def arity_message(self) -> str:
        if self.min_args == self.max_args:
            count = self.min_args
            return f"The function expects {count} argument{'' if count == 1 else 's'}."
        return f"The function expects between {self.min_args} and {self.max_args} arguments."


# Global function registry
_registry: dict[str, FunctionSpec] = {}
_loaded: bool = False


def register_function(
    name: str, min_args: int, max_args: int
) -> Callable[[Callable[..., Result[Any]]], Callable[..., Result[Any]]]:
    """Decorator to register a function under its query-language name."""

    def decorator(func: Callable[..., Result[Any]]) -> Callable[..., Result[Any]]:
        if name in _registry:
            raise ValueError(f"Function '{name}' is already registered")
        lines = (func.__doc__ or "").strip().splitlines()
        description = lines[0] if lines else ""
        _registry[name] = FunctionSpec(name, func, min_args, max_args, description)
        logger.debug("function_registered", name=name, min_args=min_args, max_args=max_args)
        return func

    return decorator


def _ensure_loaded() -> None:
    """Import the function modules so their decorators run."""
    global _loaded
    if not _loaded:
        import tempus.functions.time  # noqa: F401

        _loaded = True


def get_function(name: str) -> FunctionSpec:
    """Get a registered function by name."""
    _ensure_loaded()
    if name not in _registry:
        available = ", ".join(sorted(_registry))
        raise KeyError(f"Function '{name}' not found. Available: {available}")
    return _registry[name]


def list_functions() -> list[str]:
    """List all registered function names."""
    _ensure_loaded()
    return sorted(_registry.keys())


def call(name: str, *args: Any) -> Result[Any]:
    """
    Invoke a registered function with a positional argument tuple.

    Unknown names and wrong argument counts come back as ``Err``; everything
    else is decided by the function itself.
    """
    try:
        spec = get_function(name)
    except KeyError:
        logger.info("function_not_found", name=name)
        return Err(InvalidFunctionError(name))

    if not spec.min_args <= len(args) <= spec.max_args:
        logger.info("function_arity_mismatch", name=name, given=len(args))
        return Err(InvalidArgumentsError(name, spec.arity_message()))

    with LogContext(function=name):
        return spec.func(*args).inspect_err(_log_failure)


def _log_failure(error: Exception) -> None:
    logger.info("function_failed", category=categorize_error(error).value, error=str(error))


__all__ = [
    "FunctionSpec",
    "register_function",
    "get_function",
    "list_functions",
    "call",
]
