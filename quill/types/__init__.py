from quill.types.environment import Environment
from quill.types.function import Function
from quill.types.nodes import (
    Add,
    ApplyFunction,
    BinaryOperation,
    Divide,
    Expression,
    FunctionDefinition,
    FunctionTypeDeclaration,
    Integer,
    Multiply,
    Named,
    Negate,
    Power,
    Subtract,
    TopLevelStatement,
    Variable,
)

__all__ = [
    "Add",
    "ApplyFunction",
    "BinaryOperation",
    "Divide",
    "Environment",
    "Expression",
    "Function",
    "FunctionDefinition",
    "FunctionTypeDeclaration",
    "Integer",
    "Multiply",
    "Named",
    "Negate",
    "Power",
    "Subtract",
    "TopLevelStatement",
    "Variable",
]
