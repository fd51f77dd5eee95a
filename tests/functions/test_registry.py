"""
Tests for the function registry and ``call()`` dispatch.

Tests cover:
- The full set of time:: functions is registered
- Arity checks and their messages
- Unknown function names
- Registration rules
"""

import pytest

from tempus.core.errors import InvalidArgumentsError, InvalidFunctionError
from tempus.core.result import Ok
from tempus.core.values import NONE, Duration, Number, Text, Timestamp
from tempus.functions import registry
from tempus.functions.registry import FunctionSpec, call, get_function, list_functions, register_function

EXPECTED_NAMES = [
    "time::day",
    "time::floor",
    "time::format",
    "time::group",
    "time::hour",
    "time::minute",
    "time::month",
    "time::nano",
    "time::now",
    "time::round",
    "time::second",
    "time::timezone",
    "time::unix",
    "time::wday",
    "time::week",
    "time::yday",
    "time::year",
]


class TestRegistryContents:
    def test_all_functions_registered(self):
        assert list_functions() == EXPECTED_NAMES

    @pytest.mark.parametrize(
        "name,min_args,max_args",
        [
            ("time::year", 0, 1),
            ("time::yday", 0, 1),
            ("time::floor", 2, 2),
            ("time::round", 2, 2),
            ("time::group", 2, 2),
            ("time::format", 2, 2),
            ("time::now", 0, 0),
            ("time::timezone", 0, 0),
        ],
    )
    def test_arity(self, name, min_args, max_args):
        spec = get_function(name)
        assert (spec.min_args, spec.max_args) == (min_args, max_args)

    def test_description_from_docstring(self):
        assert get_function("time::now").description == "The current instant."

    def test_unknown_name_raises_key_error(self):
        with pytest.raises(KeyError, match="time::nope"):
            get_function("time::nope")


class TestArityMessage:
    def test_exact_plural(self):
        assert get_function("time::floor").arity_message() == "The function expects 2 arguments."

    def test_exact_zero(self):
        assert get_function("time::now").arity_message() == "The function expects 0 arguments."

    def test_exact_singular(self):
        spec = FunctionSpec("x", lambda v: Ok(v), 1, 1)
        assert spec.arity_message() == "The function expects 1 argument."

    def test_range(self):
        assert get_function("time::year").arity_message() == "The function expects between 0 and 1 arguments."


class TestCall:
    def test_dispatch(self, reference):
        assert call("time::year", reference) == Ok(Number(2023))

    def test_omitted_argument_uses_clock(self, fixed_clock):
        assert call("time::hour") == Ok(Number(10))

    def test_soft_null_passes_through(self):
        assert call("time::floor", Text("x"), Duration(1)) == Ok(NONE)

    def test_too_many_arguments(self, reference):
        result = call("time::year", reference, reference)
        assert result.is_err()
        error = result.error
        assert isinstance(error, InvalidArgumentsError)
        assert error.name == "time::year"
        assert str(error) == (
            "Incorrect arguments for function time::year(). "
            "The function expects between 0 and 1 arguments."
        )

    def test_too_few_arguments(self, reference):
        result = call("time::floor", reference)
        assert isinstance(result.error, InvalidArgumentsError)
        assert result.error.reason == "The function expects 2 arguments."

    def test_arguments_to_nullary(self):
        result = call("time::now", Timestamp(0))
        assert isinstance(result.error, InvalidArgumentsError)

    def test_unknown_function(self):
        result = call("time::fortnight")
        assert result.is_err()
        assert isinstance(result.error, InvalidFunctionError)
        assert str(result.error) == "There was a problem running the time::fortnight() function. No such function"

    def test_function_error_is_returned(self, reference):
        result = call("time::group", reference, Text("decade"))
        assert isinstance(result.error, InvalidArgumentsError)


class TestRegistration:
    @pytest.fixture
    def temporary_name(self):
        name = "test::echo"
        yield name
        registry._registry.pop(name, None)

    def test_register_and_call(self, temporary_name):
        @register_function(temporary_name, 1, 1)
        def echo(value):
            """Return the argument unchanged."""
            return Ok(value)

        assert call(temporary_name, Number(7)) == Ok(Number(7))
        assert get_function(temporary_name).description == "Return the argument unchanged."

    def test_missing_docstring(self, temporary_name):
        @register_function(temporary_name, 0, 0)
        def bare():
            return Ok(NONE)

        assert get_function(temporary_name).description == ""

    def test_duplicate_rejected(self):
        list_functions()
        with pytest.raises(ValueError, match="already registered"):

            @register_function("time::year", 0, 1)
            def other(value=None):
                return Ok(NONE)
