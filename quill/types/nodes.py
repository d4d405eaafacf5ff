"""Syntax trees produced by the reader.

Nodes are frozen dataclasses; every child node is owned by exactly one parent,
and argument/parameter lists are tuples so a tree is immutable once built.
Statements remember the character offset they were read from so that editor
tooling can point back into the source; the offset takes no part in equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Tuple, Union


# -------------------------------
# Types
# -------------------------------
@dataclass(frozen=True)
class Named:
    """A nominal type. Documentary only: never compared against runtime values."""
    name: str

    def __str__(self) -> str:
        return self.name


# -------------------------------
# Expressions
# -------------------------------
@dataclass(frozen=True)
class Integer:
    value: int


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class Negate:
    operand: Expression


@dataclass(frozen=True)
class BinaryOperation:
    left: Expression
    right: Expression

    symbol: ClassVar[str] = "?"


@dataclass(frozen=True)
class Add(BinaryOperation):
    symbol: ClassVar[str] = "+"


@dataclass(frozen=True)
class Subtract(BinaryOperation):
    symbol: ClassVar[str] = "-"


@dataclass(frozen=True)
class Multiply(BinaryOperation):
    symbol: ClassVar[str] = "*"


@dataclass(frozen=True)
class Divide(BinaryOperation):
    symbol: ClassVar[str] = "/"


@dataclass(frozen=True)
class Power(BinaryOperation):
    symbol: ClassVar[str] = "^"


@dataclass(frozen=True)
class ApplyFunction:
    function: Expression
    arguments: Tuple[Expression, ...] = ()


Expression = Union[Integer, Variable, Negate, BinaryOperation, ApplyFunction]


# -------------------------------
# Top-level statements
# -------------------------------
@dataclass(frozen=True)
class FunctionTypeDeclaration:
    name: str
    domain: Named
    codomain: Named
    position: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return f"{self.name} : {self.domain} -> {self.codomain}"


@dataclass(frozen=True)
class FunctionDefinition:
    name: str
    parameters: Tuple[str, ...]
    body: Expression
    position: int = field(default=0, compare=False)


TopLevelStatement = Union[FunctionTypeDeclaration, FunctionDefinition]
