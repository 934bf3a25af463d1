# SharpLisp: a small Lisp with #(...) closures.
#
# Public surface:
# - tokenize(source)      -> lazy token strings
# - parse(tokens)         -> list of AST nodes
# - evaluate_root(forest) -> list of runtime values
# - Interpreter           -> session wrapper keeping `def` bindings across calls

import logging

from sharplisp.reader.lexer import tokenize
from sharplisp.reader.parser import parse
from sharplisp.evaluation.evaluator import evaluate, evaluate_root
from sharplisp.builtin.env_builtin import standard_library
from sharplisp.interpreter import Interpreter
from sharplisp.types.scope import Scope

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "tokenize",
    "parse",
    "evaluate",
    "evaluate_root",
    "standard_library",
    "Interpreter",
    "Scope",
]
