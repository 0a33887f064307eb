"""Tree-walking evaluator for keikaku.

Reduces Located forms against an Environment. List forms are classified by
shape; every shape produces a value or raises a named EvalError.
Evaluation depth is bounded so runaway recursion fails with
RecursionTooDeep. Running out of Python stack first, under a large limit,
is reported the same way.
"""

from __future__ import annotations

import logging
from typing import Iterable

from keikaku import LispValue
from keikaku.builtins import register
from keikaku.config import get_max_eval_depth
from keikaku.errors import EmptyDef, InvalidForm, MalformedDef, NotAFunction, RecursionTooDeep
from keikaku.reader.parser import DefType, Located
from keikaku.reader.position import Span
from keikaku.types.environment import Environment
from keikaku.types.lambda_fn import Lambda
from keikaku.types.nil import Nil
from keikaku.types.primitive import PrimitiveOp
from keikaku.types.symbol import Symbol

logger = logging.getLogger(__name__)


class Evaluator:
    """
    Owns the global environment for one session and evaluates forms in it.
    """

    def __init__(self, env: Environment | None = None, max_depth: int | None = None):
        if env is None:
            env = Environment()
            register(env)
        self.env: Environment = env
        self.max_depth: int = max_depth if max_depth is not None else get_max_eval_depth()
        self.depth = 0

    def eval(self, expr: Located, env: Environment | None = None) -> LispValue:
        """Evaluate one form; `env` defaults to the global frame."""
        if env is None:
            env = self.env
        node, span = expr

        self.depth += 1
        try:
            if self.depth > self.max_depth:
                raise RecursionTooDeep(span, self.max_depth)

            match node:
                case list():
                    return self._eval_list(node, span, env)
                case DefType():
                    raise EmptyDef(span)
                case Symbol():
                    return env.lookup(node, span)
                case int():
                    return node
            raise InvalidForm(span, f"not a form: {node!r}")
        except RecursionError:
            # the Python stack ran out before max_depth was reached
            raise RecursionTooDeep(span, self.max_depth) from None
        finally:
            self.depth -= 1

    def eval_all(self, exprs: Iterable[Located]) -> list[LispValue]:
        return [self.eval(expr) for expr in exprs]

    def _eval_list(self, children: list[Located], span: Span, env: Environment) -> LispValue:
        match children:
            case []:
                return Nil

            case [Located(DefType(), def_span)]:
                raise EmptyDef(def_span)

            case [Located(DefType()), Located(Symbol() as name), value_expr]:
                value = self.eval(value_expr, env)
                logger.debug("def %s = %s", name, value)
                return env.define(name, value)

            case [Located(DefType()), *_]:
                raise MalformedDef(span)

            case [Located(Symbol() as name, head_span), *arg_exprs]:
                fn = env.lookup(name, head_span)
                if not isinstance(fn, (PrimitiveOp, Lambda)):
                    raise NotAFunction(head_span, name)

                # Left to right; the first failing argument aborts the call.
                args: list[tuple[LispValue, Span]] = []
                for arg_expr in arg_exprs:
                    args.append((self.eval(arg_expr, env), arg_expr.span))

                if isinstance(fn, PrimitiveOp):
                    return fn(span, args)
                return self._apply_lambda(fn, [value for value, _ in args], span)

            case [Located(_, head_span), *_]:
                raise InvalidForm(head_span)

            case _:
                raise InvalidForm(span, "list children must be located forms")

    def _apply_lambda(self, fn: Lambda, args: list[LispValue], span: Span) -> LispValue:
        local_env = fn.extend_env(args, span, self.env)
        result = Nil
        for form in fn.body:
            result = self.eval(form, local_env)
        return result


def evaluate(expr: Located, env: Environment, max_depth: int | None = None) -> LispValue:
    """Evaluate a single form against `env` with a throwaway Evaluator."""
    return Evaluator(env, max_depth).eval(expr)
