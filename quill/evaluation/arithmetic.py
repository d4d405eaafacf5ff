"""Arithmetic operators over the numeric tower.

Each binary operator accepts two evaluated operands. Two SmallInts are combined
with a checked integer operation first; if that overflows (or, for division,
is not exact) both sides are promoted to Real and the operation is redone in
decimal. A Real on either side promotes the other side. A Function on either
side is a QuillTypeMismatch naming both operand types and the operator.
"""
from __future__ import annotations

from typing import Callable, Optional

from quill import QuillValue
from quill.errors import QuillDivisionByZero, QuillInvalidType, QuillTypeMismatch
from quill.types.numeric import (
    checked_add,
    checked_mul,
    checked_neg,
    checked_pow,
    checked_sub,
    exact_quotient,
    is_number,
    is_real,
    is_small_int,
    real_add,
    real_div,
    real_mul,
    real_neg,
    real_pow,
    real_sub,
    to_real,
    type_name,
)

BinaryOperator = Callable[[QuillValue, QuillValue], QuillValue]


def _require_numbers(symbol: str, a: QuillValue, b: QuillValue) -> None:
    if not (is_number(a) and is_number(b)):
        raise QuillTypeMismatch(type_name(a), type_name(b), symbol)


def _promoting(
    symbol: str,
    small_op: Callable[[int, int], Optional[int]],
    real_op: BinaryOperator,
) -> BinaryOperator:
    def operator(a: QuillValue, b: QuillValue) -> QuillValue:
        _require_numbers(symbol, a, b)
        if is_small_int(a) and is_small_int(b):
            result = small_op(a, b)
            if result is not None:
                return result
        return real_op(to_real(a), to_real(b))

    return operator


add = _promoting("+", checked_add, real_add)
sub = _promoting("-", checked_sub, real_sub)
mul = _promoting("*", checked_mul, real_mul)


def div(a: QuillValue, b: QuillValue) -> QuillValue:
    """Exact SmallInt quotients stay SmallInt; everything else divides in decimal."""
    _require_numbers("/", a, b)
    if is_small_int(a) and is_small_int(b):
        if b == 0:
            raise QuillDivisionByZero()
        quotient = exact_quotient(a, b)
        if quotient is not None:
            return quotient
    return real_div(to_real(a), to_real(b))


def power(base: QuillValue, exponent: QuillValue) -> QuillValue:
    """Integer power for SmallInts with a non-negative exponent, decimal power otherwise."""
    _require_numbers("^", base, exponent)
    if is_small_int(base) and is_small_int(exponent) and exponent >= 0:
        result = checked_pow(base, exponent)
        if result is not None:
            return result
    return real_pow(to_real(base), to_real(exponent))


def negate(value: QuillValue) -> QuillValue:
    if is_small_int(value):
        result = checked_neg(value)
        return result if result is not None else real_neg(to_real(value))
    if is_real(value):
        return real_neg(value)
    raise QuillInvalidType(type_name(value), "-")


# Keyed by the operator symbol carried on each BinaryOperation node
BINARY_OPERATORS: dict[str, BinaryOperator] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "^": power,
}
