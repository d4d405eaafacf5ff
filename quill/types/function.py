"""Function value representation for Quill."""

from __future__ import annotations

from quill.types.nodes import Expression, FunctionDefinition


class Function:
    """A named function: ordered parameter names and a body expression.

    There is no captured environment. The body is evaluated in an overlay of
    the caller's environment, so free names resolve at the call site.
    """

    __slots__ = ("name", "parameters", "body")

    def __init__(self, name: str, parameters: tuple[str, ...], body: Expression):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "parameters", tuple(parameters))
        object.__setattr__(self, "body", body)

    def __setattr__(self, key, value):
        raise AttributeError(f"Function '{self.name}' is immutable")

    @classmethod
    def from_definition(cls, definition: FunctionDefinition) -> Function:
        return cls(definition.name, definition.parameters, definition.body)

    @property
    def arity(self) -> int:
        return len(self.parameters)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Function)
            and self.name == other.name
            and self.parameters == other.parameters
            and self.body == other.body
        )

    def __hash__(self) -> int:
        return hash((self.name, self.parameters, self.body))

    def __str__(self) -> str:
        # placeholder only; source text is never reconstructed
        return f"<function {self.name}>"

    def __repr__(self) -> str:
        return f"Function({self.name!r}, {self.parameters!r})"
