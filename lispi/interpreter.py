from __future__ import annotations
import logging
from typing import Optional

from lispi import LispValue
from lispi.builtins import register
from lispi.evaluation.evaluator import evaluate
from lispi.modules.loader import FileSourceLoader, SourceLoader
from lispi.modules.registry import ModuleRegistry
from lispi.reader.lexer import tokenize
from lispi.reader.parser import Parser
from lispi.runtime_context import RuntimeContext
from lispi.types.environment import Environment
from lispi.types.values import Nil

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating lispi code.
    Maintains a root Environment and a RuntimeContext (module registry and
    source loader) across calls.
    """

    def __init__(
        self,
        loader: Optional[SourceLoader] = None,
        prelude: Optional[str] = None,
        *,
        registry: Optional[ModuleRegistry] = None,
    ):
        self.env: Environment = Environment()
        register(self.env)

        self.context = RuntimeContext(
            registry=registry,
            loader=loader if loader is not None else FileSourceLoader(),
        )

        if prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        for expr in Parser(tokenize(code)).parse_all():
            evaluate(expr, self.env, self.context)

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code`; returns the last value, or nil."""
        forms = Parser(tokenize(code)).parse_all()
        logger.debug("Evaluating %d form(s)", len(forms))
        result: LispValue = Nil
        for expr in forms:
            result = evaluate(expr, self.env, self.context)
        return result
