from __future__ import annotations

import logging

from keikaku import LispValue
from keikaku.builtins import register
from keikaku.evaluation.evaluator import Evaluator
from keikaku.reader.parser import Located, read
from keikaku.types.environment import Environment
from keikaku.types.nil import Nil

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Reads and evaluates keikaku code.
    Maintains one global Environment across calls, so definitions persist.
    """

    def __init__(self, max_depth: int | None = None):
        self.env: Environment = Environment()
        register(self.env)
        self.evaluator = Evaluator(self.env, max_depth)

    def read(self, code: str, name: str = "<input>") -> list[Located]:
        return read(code, name)

    def eval_all(self, code: str, name: str = "<input>") -> list[LispValue]:
        """Parse all of `code`, then evaluate each top-level form in order."""
        exprs = self.read(code, name)
        logger.debug("%s: evaluating %d form(s)", name, len(exprs))
        return self.evaluator.eval_all(exprs)

    def eval(self, code: str, name: str = "<input>") -> LispValue:
        results = self.eval_all(code, name)
        if not results:
            return Nil
        if len(results) == 1:
            return results[0]
        return results

