import pytest

from sharplisp.builtin.env_builtin import standard_library
from sharplisp.evaluation.evaluator import evaluate_root
from sharplisp.reader.lexer import tokenize
from sharplisp.reader.parser import parse
from sharplisp.types.scope import Scope
from sharplisp.types.values import FunctionValue, NIL


@pytest.fixture
def root():
    return standard_library()


@pytest.fixture
def scope(root):
    """A fresh top-level scope, as evaluate_root would create."""
    return root.child()


@pytest.fixture
def run():
    """Tokenize, parse and evaluate a whole program, returning one value per form."""
    def _run(source: str, root_scope: Scope | None = None):
        return evaluate_root(parse(tokenize(source)), root_scope)
    return _run


class Recorder:
    """A `tick` built-in that records each argument it is called with."""

    def __init__(self):
        self.calls = []

    def __call__(self, args, scope):
        self.calls.extend(args)
        return NIL


@pytest.fixture
def recorder(root):
    """Returns (recorder, scope) where `tick` is bound in a child of the standard library."""
    rec = Recorder()
    with_tick = root.child()
    with_tick.define("tick", FunctionValue("tick", rec))
    return rec, with_tick
