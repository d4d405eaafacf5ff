"""Runtime environment for Quill.

An Environment maps names to evaluated values and may extend an `outer`
environment. The base environment is assembled once from a program's function
definitions and then sealed; every function call evaluates its body in a fresh
overlay of the caller's environment, so no binding is ever written into an
environment that someone else can see.
"""

from __future__ import annotations

import logging
from io import StringIO
from typing import Iterable, Mapping, Optional

from quill import QuillValue
from quill.errors import QuillError, QuillUnboundVariable
from quill.types.function import Function
from quill.types.nodes import FunctionDefinition, TopLevelStatement

logger = logging.getLogger(__name__)


class Environment:
    """Ordered mapping from names to Quill values with overlay support."""

    __slots__ = ("vars", "outer", "_sealed")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, QuillValue] = {}
        self.outer: Environment | None = outer
        self._sealed = False

    @classmethod
    def from_statements(cls, statements: Iterable[TopLevelStatement]) -> Environment:
        """Build the sealed base environment from top-level statements.

        Only function definitions produce bindings; type declarations are
        documentary. A later definition of a name replaces an earlier one.
        """
        env = cls()
        for statement in statements:
            if isinstance(statement, FunctionDefinition):
                if statement.name in env.vars:
                    logger.debug("redefinition of '%s' replaces the earlier definition", statement.name)
                env.define(statement.name, Function.from_definition(statement))
        env.seal()
        return env

    def define(self, name: str, value: QuillValue) -> None:
        """Bind `name` to `value` in this frame. Only allowed before sealing."""
        if self._sealed:
            raise QuillError(f"Cannot define '{name}' in a sealed environment")
        self.vars[name] = value

    def seal(self) -> None:
        self._sealed = True

    def overlay(self, bindings: Mapping[str, QuillValue]) -> Environment:
        """Return a new sealed environment holding `bindings` on top of this one."""
        env = Environment(outer=self)
        env.vars.update(bindings)
        env.seal()
        return env

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: str) -> QuillValue:
        """Look up the value bound to `name`.

        Raises QuillUnboundVariable if no environment in the chain binds it.
        """
        env = self.find(name)
        if env is None:
            raise QuillUnboundVariable(name)
        return env.vars[name]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as frame:
                env._write_vars(frame)
                chain.append(frame.getvalue())
            env = env.outer
        return f"<Environment chain: {' -> '.join(chain)}>"
