import pytest

from pebble.evaluation.evaluator import evaluate
from pebble.interpreter import Interpreter
from pebble.reader.parser import parse
from pebble.types.environment import Environment


@pytest.fixture
def env():
    """Fresh top-level environment for each test."""
    return Environment()


@pytest.fixture
def run(env):
    """Evaluate every form in a source string against `env`; returns the last result."""
    def _run(source):
        result = None
        for expr in parse(source):
            result = evaluate(expr, env)
        return result
    return _run


@pytest.fixture
def interp():
    return Interpreter()
