"""Core evaluator for Quill.

A pure recursive walk over an expression tree. The environment is only read;
function calls evaluate their bodies in overlays (see quill.evaluation.apply).
Errors surface as QuillRuntimeError subclasses. Recursion depth is bounded only
by the Python stack, so a runaway recursive definition ends in RecursionError.
"""

from __future__ import annotations

from quill import QuillValue
from quill.evaluation.apply import apply
from quill.evaluation.arithmetic import BINARY_OPERATORS, negate
from quill.types.environment import Environment
from quill.types.nodes import (
    ApplyFunction,
    BinaryOperation,
    Expression,
    Integer,
    Negate,
    Variable,
)


def evaluate(expr: Expression, env: Environment) -> QuillValue:
    """Reduce `expr` to a value in `env`."""
    match expr:
        case Integer(value):
            return value
        case Variable(name):
            return env.lookup(name)
        case Negate(operand):
            return negate(evaluate(operand, env))
        case BinaryOperation(left, right):
            # both operands are evaluated before either is type checked
            lhs = evaluate(left, env)
            rhs = evaluate(right, env)
            return BINARY_OPERATORS[expr.symbol](lhs, rhs)
        case ApplyFunction(function, arguments):
            return apply(evaluate(function, env), arguments, env, evaluate)

    raise TypeError(f"Not an expression: {expr!r}")
