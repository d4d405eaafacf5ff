"""Function application for Quill.

Application is dynamically scoped: arguments are evaluated in the caller's
environment and the body runs in a fresh overlay of that same environment.
A function therefore resolves its free names against whatever the call site
has bound, and a recursive function finds itself through the base
environment every caller extends.
"""

from __future__ import annotations

from typing import Sequence

from quill import EvaluatorFn, QuillValue
from quill.errors import QuillInvalidType, QuillParameterMismatch
from quill.types.environment import Environment
from quill.types.function import Function
from quill.types.nodes import Expression
from quill.types.numeric import type_name


def bind_arguments(fn: Function, values: Sequence[QuillValue], caller_env: Environment) -> Environment:
    """Overlay `caller_env` with one binding per parameter.

    `values` must already match the parameter count. With a repeated parameter
    name, the later argument shadows the earlier one.
    """
    bindings: dict[str, QuillValue] = {}
    for name, value in zip(fn.parameters, values):
        bindings[name] = value
    return caller_env.overlay(bindings)


def apply(
    head: QuillValue,
    arguments: Sequence[Expression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> QuillValue:
    """Apply an evaluated callee to unevaluated argument expressions.

    - The callee must be a Function, else QuillInvalidType.
    - The argument count must equal the parameter count, else
      QuillParameterMismatch; this is checked before any argument runs.
    - Arguments are evaluated left to right in `env`.
    """
    if not isinstance(head, Function):
        raise QuillInvalidType(type_name(head), "apply")
    if head.arity != len(arguments):
        raise QuillParameterMismatch(head.arity, len(arguments))
    values = [evaluate_fn(argument, env) for argument in arguments]
    return evaluate_fn(head.body, bind_arguments(head, values, env))
