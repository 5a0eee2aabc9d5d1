import pytest

from lispi.builtins import register
from lispi.evaluation.evaluator import evaluate
from lispi.modules.loader import MemorySourceLoader
from lispi.reader import read_all
from lispi.runtime_context import RuntimeContext
from lispi.types.environment import Environment
from lispi.types.values import Nil


# Most evaluation tests read source text, evaluate every form against a fresh
# root environment (builtins registered) and look at the last value. The
# `run` fixture bundles that; tests that need the pieces use `env`/`context`.


@pytest.fixture
def env():
    """Fresh environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def loader():
    return MemorySourceLoader({})


@pytest.fixture
def context(loader):
    return RuntimeContext(loader=loader)


@pytest.fixture
def run(env, context):
    def _run(source):
        result = Nil
        for expr in read_all(source):
            result = evaluate(expr, env, context)
        return result
    return _run
