from __future__ import annotations

from typing import Optional


class QuillError(Exception):
    """ Base class for all Quill errors"""
    pass


class QuillSyntaxError(QuillError):
    """ Raised when program or expression text cannot be parsed"""

    def __init__(self, expected: str, position: int, found: Optional[str] = None):
        self.expected = expected
        self.position = position
        self.found = found
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.found is None:
            return f"expected {self.expected} at position {self.position}, found end of input"
        return f"expected {self.expected} at position {self.position}, found {self.found!r}"


class QuillRuntimeError(QuillError):
    """ Base class for errors raised while evaluating an expression"""
    pass


class QuillUnboundVariable(QuillRuntimeError):
    """ Raised when a name is not bound in the active environment"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unbound variable '{name}'")


class QuillInvalidType(QuillRuntimeError):
    """ Raised when a single operand has the wrong type for an operation"""

    def __init__(self, found: str, operation: str):
        self.found = found
        self.operation = operation
        super().__init__(f"cannot apply '{operation}' to {found}")


class QuillTypeMismatch(QuillRuntimeError):
    """ Raised when the operands of a binary operation cannot be combined"""

    def __init__(self, first: str, last: str, operation: str):
        self.first = first
        self.last = last
        self.operation = operation
        super().__init__(f"cannot apply '{operation}' to {first} and {last}")


class QuillDivisionByZero(QuillRuntimeError):
    """ Raised when dividing by zero, or raising zero to a negative power"""

    def __init__(self):
        super().__init__("division by zero")


class QuillParameterMismatch(QuillRuntimeError):
    """ Raised when the number of arguments passed to a function is incorrect"""

    def __init__(self, expected: int, found: int):
        self.expected = expected
        self.found = found
        super().__init__(f"expected {expected} arguments, found {found}")


class QuillUndefinedResult(QuillRuntimeError):
    """ Raised when a decimal operation has no representable result"""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"'{operation}' is undefined here: {reason}")
