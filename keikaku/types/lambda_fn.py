"""Lambda function representation and argument binding."""

from __future__ import annotations

from io import StringIO

from keikaku import LispValue
from keikaku.errors import WrongArity
from keikaku.reader.parser import Located
from keikaku.reader.position import Span
from keikaku.types.environment import Environment
from keikaku.types.symbol import Symbol


class Lambda:
    """A user function: formal parameters, body forms and an optional captured env.

    Without a captured env the body runs in a frame whose parent is the
    global frame of the evaluator applying it.
    """

    __slots__ = ("formals", "body", "env")

    def __init__(
        self, formals: list[Symbol], body: list[Located], env: Environment | None = None
    ):
        self.formals: list[Symbol] = list(formals)
        self.body: list[Located] = list(body)
        self.env: Environment | None = env

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("#lambda(")
            buffer.write(" ".join(str(f) for f in self.formals))
            buffer.write(")#")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"Lambda({self.formals!r}, <{len(self.body)} form(s)>)"

    def extend_env(self, args: list[LispValue], span: Span, global_env: Environment) -> Environment:
        """
        Bind argument values to the formals in a fresh child frame.

        Raises WrongArity at `span` when the counts differ.
        """
        if len(args) != len(self.formals):
            raise WrongArity(
                span, f"expected {len(self.formals)} argument(s), got {len(args)}"
            )
        local_env = Environment(outer=self.env if self.env is not None else global_env)
        for name, value in zip(self.formals, args):
            local_env.define(name, value)
        return local_env
