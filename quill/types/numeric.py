"""Two-tier numeric tower.

SmallInt values are Python ints confined to the signed 64-bit range; every
SmallInt operation is checked and promotes to the Real tier when the exact
result leaves that range. Real values are `decimal.Decimal` instances computed
under DECIMAL_CONTEXT, a single context fixed at import time (see
`quill.config.get_precision`). The precision never drops below 40 digits, so
converting any SmallInt to Real is exact, and so is recomputing a sum,
difference or product of two SmallInts after overflow.

Promotion is one-way: nothing here turns a Real back into a SmallInt.
"""

from __future__ import annotations

import decimal
from decimal import Decimal
from typing import Optional

from quill import QuillValue
from quill.config import get_precision
from quill.errors import QuillDivisionByZero, QuillUndefinedResult

SMALLINT_BITS = 64
SMALLINT_MIN = -(1 << (SMALLINT_BITS - 1))
SMALLINT_MAX = (1 << (SMALLINT_BITS - 1)) - 1

# Reals further than this many places from the decimal point render in exponent form
PLAIN_RENDER_LIMIT = 4000

DECIMAL_CONTEXT = decimal.Context(
    prec=get_precision(),
    rounding=decimal.ROUND_HALF_EVEN,
    Emin=decimal.MIN_EMIN,
    Emax=decimal.MAX_EMAX,
    traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
)


def is_small_int(value: QuillValue) -> bool:
    # bool is an int subclass but never a Quill value
    return type(value) is int


def is_real(value: QuillValue) -> bool:
    return isinstance(value, Decimal)


def is_number(value: QuillValue) -> bool:
    return is_small_int(value) or is_real(value)


def in_small_range(n: int) -> bool:
    return SMALLINT_MIN <= n <= SMALLINT_MAX


def to_real(value: int | Decimal) -> Decimal:
    """Promote a SmallInt to Real. Exact for every value in the 64-bit range."""
    if is_real(value):
        return value
    return DECIMAL_CONTEXT.create_decimal(value)


def type_name(value: QuillValue) -> str:
    if is_small_int(value):
        return "SmallInt"
    if is_real(value):
        return "Real"
    return "Function"


def render(value: QuillValue) -> str:
    """Text form of a value: plain digits for SmallInt, plain decimal expansion for Real.

    A Real whose decimal point sits more than PLAIN_RENDER_LIMIT places from its
    leading digit is written in exponent form instead, e.g. `1.2E+301029995663`.
    """
    if is_small_int(value):
        return str(value)
    if is_real(value):
        if value.is_finite() and abs(value.adjusted()) > PLAIN_RENDER_LIMIT:
            return DECIMAL_CONTEXT.to_sci_string(value)
        return format(value, "f")
    return str(value)


# -------------------------------
# Checked SmallInt operations
# -------------------------------
# Each returns None when the exact result does not fit in a SmallInt.

def checked(n: int) -> Optional[int]:
    return n if in_small_range(n) else None


def checked_add(a: int, b: int) -> Optional[int]:
    return checked(a + b)


def checked_sub(a: int, b: int) -> Optional[int]:
    return checked(a - b)


def checked_mul(a: int, b: int) -> Optional[int]:
    return checked(a * b)


def checked_neg(a: int) -> Optional[int]:
    return checked(-a)


def checked_pow(base: int, exponent: int) -> Optional[int]:
    """Integer power for a non-negative exponent, or None on overflow."""
    if base in (0, 1):
        return base if exponent > 0 else 1
    if base == -1:
        return -1 if exponent % 2 else 1
    # |base| >= 2, so anything past the word size cannot fit
    if exponent >= SMALLINT_BITS:
        return None
    return checked(base ** exponent)


def exact_quotient(a: int, b: int) -> Optional[int]:
    """a / b when b divides a exactly and the quotient fits, else None. b must be non-zero."""
    quotient, remainder = divmod(a, b)
    if remainder:
        return None
    return checked(quotient)


# -------------------------------
# Real operations
# -------------------------------
def _decimal_op(symbol: str, op, *args: Decimal) -> Decimal:
    try:
        return op(*args)
    except decimal.DivisionByZero:
        raise QuillDivisionByZero() from None
    except decimal.Overflow:
        raise QuillUndefinedResult(symbol, "result exceeds the decimal range") from None
    except decimal.InvalidOperation:
        raise QuillUndefinedResult(symbol, "no real-valued result") from None


def real_add(a: Decimal, b: Decimal) -> Decimal:
    return _decimal_op("+", DECIMAL_CONTEXT.add, a, b)


def real_sub(a: Decimal, b: Decimal) -> Decimal:
    return _decimal_op("-", DECIMAL_CONTEXT.subtract, a, b)


def real_mul(a: Decimal, b: Decimal) -> Decimal:
    return _decimal_op("*", DECIMAL_CONTEXT.multiply, a, b)


def real_neg(a: Decimal) -> Decimal:
    return _decimal_op("-", DECIMAL_CONTEXT.minus, a)


def real_div(a: Decimal, b: Decimal) -> Decimal:
    if b.is_zero():
        raise QuillDivisionByZero()
    return _decimal_op("/", DECIMAL_CONTEXT.divide, a, b)


def real_pow(base: Decimal, exponent: Decimal) -> Decimal:
    if exponent.is_zero():
        return DECIMAL_CONTEXT.create_decimal(1)
    if base.is_zero() and exponent < 0:
        raise QuillDivisionByZero()
    return _decimal_op("^", DECIMAL_CONTEXT.power, base, exponent)
