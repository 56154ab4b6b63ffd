import io

import pytest

import oops


@pytest.fixture
def output():
    """Stream that collects what programs print."""
    return io.StringIO()


@pytest.fixture
def interp(output):
    """Fresh interpreter writing to the `output` fixture."""
    return oops.Interpreter(output=output)
