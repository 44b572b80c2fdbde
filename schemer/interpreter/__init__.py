from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional

from schemer import SchemeValue
from schemer.builtin.env_builtin import register
from schemer.config import get_prelude_path
from schemer.errors import SchemeError
from schemer.evaluation.evaluator import Evaluator
from schemer.evaluation.special_forms import SPECIAL_FORMS
from schemer.reader.parser import Reader
from schemer.types.environment import Environment
from schemer.types.nil import Nil

logger = logging.getLogger(__name__)

SCRIPT_BLOCK_RE = re.compile(
    r"<script\s+language\s*=\s*[\"']scheme[\"']\s*>(.*?)</script\s*>",
    re.IGNORECASE | re.DOTALL,
)


@dataclass(frozen=True)
class Output:
    """One record produced by `Interpreter.repl`: a printed value or an error message."""

    text: str
    kind: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.kind == "error"


class Interpreter:
    """
    Orchestrates reading and evaluating schemer code.
    Each instance owns its global Environment and Evaluator, so interpreters
    are independent of one another.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        host_namespace: Optional[Mapping[str, Any]] = None,
    ):
        self.env: Environment = Environment()
        register(self.env)
        self.evaluator = Evaluator(SPECIAL_FORMS, self.env, host_namespace)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            path = get_prelude_path()
            if path.is_file():
                self.eval_prelude(path.read_text(encoding='utf-8'))
            else:
                logger.warning("Prelude %s not found; starting without it", path)
        elif prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        self.load(code)

    def load(self, code: str) -> None:
        """
        Batch entry point: evaluate every top-level form in the global
        environment and discard the results. The first error aborts the
        remaining forms and propagates.
        """
        for expr in Reader(code).read_all():
            logger.debug("Loading %s", expr)
            self.evaluator.evaluate(expr, self.env)

    def eval(self, code: str) -> SchemeValue:
        """Evaluate every top-level form and return the last value (Nil if none)."""
        result: SchemeValue = Nil
        for expr in Reader(code).read_all():
            result = self.evaluator.evaluate(expr, self.env)
        return result

    def repl(self, line: str) -> list[Output]:
        """
        Interactive entry point: one record per top-level form. A failing form
        (including one that fails to read) yields an error record and the
        following forms on the line are still evaluated.
        """
        outputs: list[Output] = []
        reader = Reader(line)
        while True:
            try:
                expr = reader.read_next()
                if expr is None:
                    break
                logger.debug("Evaluating %s", expr)
                value = self.evaluator.evaluate(expr, self.env)
                text = str(value)
            except SchemeError as exc:
                logger.debug("Error in repl form: %s", exc)
                outputs.append(Output(str(exc), "error"))
                continue
            except RecursionError:
                logger.debug("Recursion limit exceeded in repl form")
                outputs.append(Output("Maximum recursion depth exceeded", "error"))
                continue
            outputs.append(Output(text))
        return outputs

    def load_document(self, text: str) -> None:
        """Load the concatenated `<script language="scheme">` blocks of a document."""
        blocks = SCRIPT_BLOCK_RE.findall(text)
        logger.debug("Found %d scheme script block(s)", len(blocks))
        self.load("\n".join(blocks))
