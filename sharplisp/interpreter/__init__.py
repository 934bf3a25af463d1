from __future__ import annotations

import logging
from typing import Optional

from sharplisp.builtin.env_builtin import standard_library
from sharplisp.evaluation.evaluator import evaluate_forest
from sharplisp.reader.lexer import tokenize
from sharplisp.reader.parser import parse
from sharplisp.types.scope import Scope
from sharplisp.types.values import Value, NIL

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating SharpLisp code.
    Keeps one session scope, a child of the standard library, across calls so
    names bound with `def` stay visible to later calls.
    """

    def __init__(self, root: Optional[Scope] = None):
        self.root: Scope = root if root is not None else standard_library()
        self.scope: Scope = self.root.child()

    def reset(self) -> None:
        """Drop every session binding."""
        self.scope = self.root.child()

    def run(self, code: str) -> list[Value]:
        """Evaluate every top-level form in `code`, returning one value per form."""
        forest = parse(tokenize(code))
        logger.debug("Running %d top-level forms", len(forest))
        return evaluate_forest(forest, self.scope)

    def eval(self, code: str) -> Value | list[Value]:
        results = self.run(code)
        if not results:
            return NIL
        if len(results) == 1:
            return results[0]
        return results
