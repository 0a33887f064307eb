import pytest

from keikaku.builtins import register
from keikaku.interpreter import Interpreter
from keikaku.types.environment import Environment


@pytest.fixture
def interp():
    """Fresh interpreter with the primitives bound."""
    return Interpreter()


@pytest.fixture
def env():
    """Fresh global environment with the primitives bound."""
    e = Environment()
    register(e)
    return e
