"""Unit testing quality of life and readability helpers for oops tests."""

import io
import re

import pytest

import oops


def params(names, **cases):
    """Simplified parametrize decorator for test cases.

    Args:
        names: Space or comma-separated string of parameter names
        **cases: Named test cases where key is the test ID and value is
                either a single argument or tuple of arguments

    Returns:
        pytest.mark.parametrize decorator with 'key' as first parameter

    Example:
        @params("code expected", add=("[5 + 3]", 8))
        def test_arithmetic(key, code, expected):
            assert oopstest.run_value(code) == expected
    """
    keys = list(cases)
    rows = []
    for k, v in cases.items():
        # If value is a tuple, unpack it; otherwise keep as single value
        if isinstance(v, tuple):
            rows.append((k, *v))
        else:
            rows.append((k, v))

    columns = names.replace(",", " ").split()
    columns.insert(0, "key")
    return pytest.mark.parametrize(columns, rows, ids=keys)


def run(code, interp=None, **bindings):
    """Run program text and return the Value or OopsError it ends with.

    Keyword arguments are bound as globals before the program runs.
    """
    interp = interp or oops.Interpreter(output=io.StringIO())
    for name, value in bindings.items():
        interp.globals.define(name, oops.Value(value))
    return interp.run(code, filename="<test>")


def run_value(code, interp=None, **bindings):
    """Run program text, fail on errors, and convert the result to python."""
    result = run(code, interp, **bindings)
    assert not isinstance(result, oops.OopsError), \
        f"Program failed, {result.kind}: {result.message}"
    return result.to_python()


def run_error(code, error_type=oops.OopsError, match=None, interp=None):
    """Run program text that must fail and return the error.

    Args:
        code: Program text
        error_type: Expected OopsError subclass
        match: Optional regex pattern to search for in the message
    """
    result = run(code, interp)
    assert isinstance(result, error_type), \
        f"Expected {error_type.__name__}, got {result!r}"
    if match and not re.search(match, result.message):
        pytest.fail(
            f"Error message doesn't match pattern '{match}':\n"
            f"  Message: {result.message}",
            pytrace=False
        )
    return result


def run_output(code):
    """Run program text and return what it printed."""
    output = io.StringIO()
    result = run(code, oops.Interpreter(output=output))
    assert not isinstance(result, oops.OopsError), \
        f"Program failed, {result.kind}: {result.message}"
    return output.getvalue()


def run_ast(node, interp=None):
    """Run a single ast node against an interpreter's global state."""
    interp = interp or oops.Interpreter(output=io.StringIO())
    return interp.execute(node)


USER_CLASS = """
[Class subclass name: #User fields: [#id]];
[User def: #set do: |id:| { @id = id }];
[User def: #id do: { @id }];
"""
