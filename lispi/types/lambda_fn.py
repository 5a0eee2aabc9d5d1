"""Closure representation and argument binding for lispi."""

from __future__ import annotations

from io import StringIO

from lispi.errors import LispiArityError
from lispi.types.environment import Environment
from lispi.types.expr import Expr
from lispi.types.values import Value


class Lambda(Value):
    """A first-class function with formal parameters, body, and closure env."""

    __slots__ = ("formals", "body", "env", "name")
    type_name = "function"

    def __init__(
        self,
        formals: tuple[str, ...],
        body: tuple[Expr, ...],
        env: Environment,
        name: str | None = None,
    ):
        self.formals: tuple[str, ...] = tuple(formals)
        self.body: tuple[Expr, ...] = tuple(body)
        # Shared with the defining scope; outlives the frame that built it
        self.env: Environment = env
        self.name = name

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<lambda")
            if self.name:
                buffer.write(f" {self.name}")
            buffer.write(" (")
            buffer.write(" ".join(self.formals))
            buffer.write(")>")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)

    def extend_env(self, args: list[Value]) -> Environment:
        """
        Bind the given argument values to this lambda's formal parameters and
        return a new child of the captured environment for evaluating the body.
        """
        if len(args) != len(self.formals):
            label = self.name or "lambda"
            raise LispiArityError(
                f"{label} expects {len(self.formals)} argument(s), got {len(args)}"
            )
        new_env = self.env.child()
        for formal, arg in zip(self.formals, args):
            new_env.define(formal, arg)
        return new_env
