from __future__ import annotations

"""
Static indexer for Quill programs; nothing is evaluated.

The document is read with the real program parser, so the index agrees with
what the interpreter would load:
- definitions: name(params) = body, last one wins as in the interpreter
- declarations: name : domain -> codomain
- problems: unread program text, redefinitions, declarations without a
  definition, repeated parameter names
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from quill.reader.parser import read_program
from quill.types.nodes import FunctionDefinition, FunctionTypeDeclaration

ERROR = "error"
WARNING = "warning"
INFORMATION = "information"


@dataclass
class SymbolDef:
    name: str
    parameters: Tuple[str, ...]
    line: int
    col: int

    @property
    def label(self) -> str:
        return f"{self.name}({', '.join(self.parameters)})"


@dataclass
class Problem:
    message: str
    severity: str  # ERROR | WARNING | INFORMATION
    line: int
    col: int
    length: int = 1


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    declarations: Dict[str, FunctionTypeDeclaration] = field(default_factory=dict)
    problems: List[Problem] = field(default_factory=list)

    def describe(self, name: str) -> Optional[str]:
        """Hover text for a defined or declared name."""
        sdef = self.symbols.get(name)
        decl = self.declarations.get(name)
        if sdef is None and decl is None:
            return None
        parts = []
        if decl is not None:
            parts.append(str(decl))
        if sdef is not None:
            parts.append(f"{sdef.label} (defined at {sdef.line + 1}:{sdef.col + 1})")
        return "\n".join(parts)


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    statements, err = read_program(text)

    for statement in statements:
        line, col = _position_from_offset(text, statement.position)
        if isinstance(statement, FunctionTypeDeclaration):
            idx.declarations[statement.name] = statement
            continue
        if isinstance(statement, FunctionDefinition):
            if statement.name in idx.symbols:
                idx.problems.append(
                    Problem(
                        f"'{statement.name}' is redefined; this definition replaces the earlier one",
                        INFORMATION, line, col, len(statement.name),
                    )
                )
            repeated = sorted({p for p in statement.parameters if statement.parameters.count(p) > 1})
            for name in repeated:
                idx.problems.append(
                    Problem(
                        f"parameter '{name}' appears more than once in '{statement.name}'; the last argument wins",
                        WARNING, line, col, len(statement.name),
                    )
                )
            idx.symbols[statement.name] = SymbolDef(statement.name, statement.parameters, line, col)

    for name, decl in idx.declarations.items():
        if name not in idx.symbols:
            line, col = _position_from_offset(text, decl.position)
            idx.problems.append(
                Problem(f"'{name}' is declared but never defined", INFORMATION, line, col, len(name))
            )

    if err is not None:
        line, col = _position_from_offset(text, min(err.position, len(text)))
        idx.problems.append(Problem(f"program stops here: {err}", ERROR, line, col))

    return idx
