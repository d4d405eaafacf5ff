from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from quill import QuillValue
from quill.evaluation.evaluator import evaluate
from quill.reader.parser import parse_expression, parse_program
from quill.types.environment import Environment
from quill.types.nodes import FunctionTypeDeclaration, TopLevelStatement
from quill.types.numeric import render

logger = logging.getLogger(__name__)


class Interpreter:
    """
    A Quill session.
    Program sources are read once, in order, into a single sealed environment;
    each call to `eval` is then an independent request against it.
    """

    def __init__(self, *sources: str, strict: bool = False):
        self.statements: list[TopLevelStatement] = []
        for source in sources:
            self.statements.extend(parse_program(source, strict=strict))
        self.env: Environment = Environment.from_statements(self.statements)
        # declared types are kept for display only
        self.declarations: dict[str, FunctionTypeDeclaration] = {
            s.name: s for s in self.statements if isinstance(s, FunctionTypeDeclaration)
        }

    @classmethod
    def from_paths(cls, paths: Iterable[Path | str], strict: bool = False) -> Interpreter:
        sources = []
        for path in paths:
            logger.debug("loading program %s", path)
            sources.append(Path(path).read_text(encoding="utf-8"))
        return cls(*sources, strict=strict)

    def eval(self, code: str) -> QuillValue:
        """Parse and evaluate one expression."""
        expr = parse_expression(code)
        logger.debug("evaluating %r", expr)
        return evaluate(expr, self.env)

    def eval_to_text(self, code: str) -> str:
        return render(self.eval(code))

    def declaration(self, name: str) -> Optional[FunctionTypeDeclaration]:
        return self.declarations.get(name)
