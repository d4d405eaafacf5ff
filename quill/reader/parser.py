"""
  Quill Lexer and Parser

- Regex lexer producing positioned tokens; ASCII whitespace (space, tab, CR, LF) between tokens is skipped
- Backtracking recursive-descent parser over the token list

Program grammar:

    program     := (typeDecl | funcDef)*
    typeDecl    := name ':' name '->' name
    funcDef     := name '(' (name (',' name)*)? ')' '=' expr

Expression ladder, tightest first:

    atom        := integer | name | '(' expr ')' | '-' expr
    application := atom ['(' (expr (',' expr)*)? ')']
    power       := application ('^' application)*
    divide      := power ('/' power)*
    multiply    := divide ('*' divide)*
    subtract    := multiply ('-' multiply)*
    add         := subtract ('+' subtract)*
    expr        := add

Notes:
    - Every binary level folds to the left, power included: 2^3^2 is (2^3)^2.
    - '-' in atom position negates the whole expression to its right:
      -1+2 is -(1+2).
    - A call suffix is tried once per atom; if it does not parse, the atom
      stands alone and the suffix is left for the caller.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterator, NamedTuple, Optional

from quill.errors import QuillSyntaxError
from quill.types.numeric import SMALLINT_MAX, in_small_range
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

logger = logging.getLogger(__name__)

# digits in SMALLINT_MAX
MAX_LITERAL_DIGITS = len(str(SMALLINT_MAX))


TOKEN_RE = re.compile(
    r"[ \t\r\n]*(?:"  # ASCII whitespace only
    r"(?P<integer>[0-9]+)"  # digits only; sign is the negate operator
    r"|(?P<name>[A-Za-z]+)"  # ASCII letters only, no digits or underscore
    r"|(?P<arrow>->)"  # must precede the '-' operator
    r"|(?P<punct>[():,=+\-*/^])"
    r"|(?P<unknown>[^ \t\r\n])"  # anything else; the parser stops on it
    r")"
)


class Token(NamedTuple):
    kind: str
    text: str
    position: int


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Token(kind, text, position) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if m is None or m.lastgroup is None:
            # only trailing whitespace is left
            break
        yield Token(m.lastgroup, m.group(m.lastgroup), m.start(m.lastgroup))
        pos = m.end()


class TokenStream:
    def __init__(self, tokens: Iterator[Token] | list[Token], source_length: int = 0):
        self.tokens: list[Token] = list(tokens)
        self.pos = 0
        self.end_position = max(source_length, self.tokens[-1].position + 1 if self.tokens else 0)
        # deepest failure seen so far, reported when nothing better is known
        self.furthest: Optional[QuillSyntaxError] = None

    # ------------------------
    # Stream primitives
    # ------------------------
    def peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Optional[Token]:
        tok = self.peek()
        if tok is not None:
            self.pos += 1
        return tok

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def mark(self) -> int:
        return self.pos

    def reset(self, mark: int) -> None:
        self.pos = mark

    @property
    def position(self) -> int:
        """Character offset of the next token (or of the end of input)."""
        tok = self.peek()
        return tok.position if tok is not None else self.end_position

    def fail(self, expected: str) -> QuillSyntaxError:
        tok = self.peek()
        err = QuillSyntaxError(expected, self.position, tok.text if tok is not None else None)
        if self.furthest is None or err.position >= self.furthest.position:
            self.furthest = err
        return err

    def accept(self, text: str) -> Optional[Token]:
        tok = self.peek()
        if tok is not None and tok.kind in ("punct", "arrow") and tok.text == text:
            return self.advance()
        return None

    def expect(self, text: str) -> Token:
        tok = self.accept(text)
        if tok is None:
            raise self.fail(f"'{text}'")
        return tok

    # ------------------------
    # Names and types
    # ------------------------
    def parse_name(self) -> str:
        tok = self.peek()
        if tok is None or tok.kind != "name":
            raise self.fail("name")
        self.advance()
        return tok.text

    def parse_typ(self) -> Named:
        return Named(self.parse_name())

    # ------------------------
    # Top-level statements
    # ------------------------
    def parse_function_type_declaration(self) -> FunctionTypeDeclaration:
        position = self.position
        name = self.parse_name()
        self.expect(":")
        domain = self.parse_typ()
        self.expect("->")
        codomain = self.parse_typ()
        return FunctionTypeDeclaration(name, domain, codomain, position)

    def parse_function_definition(self) -> FunctionDefinition:
        position = self.position
        name = self.parse_name()
        self.expect("(")
        parameters: list[str] = []
        if self.peek() is not None and self.peek().kind == "name":
            parameters.append(self.parse_name())
            while self.accept(","):
                parameters.append(self.parse_name())
        self.expect(")")
        self.expect("=")
        body = self.parse_expression()
        return FunctionDefinition(name, tuple(parameters), body, position)

    def parse_statement(self) -> TopLevelStatement:
        """Type declaration or function definition, trying them in that order."""
        start = self.mark()
        try:
            return self.parse_function_type_declaration()
        except QuillSyntaxError:
            self.reset(start)
        try:
            return self.parse_function_definition()
        except QuillSyntaxError:
            self.reset(start)
            raise

    def parse_top_level(self) -> list[TopLevelStatement]:
        """Parse statements until one fails; never raises."""
        statements: list[TopLevelStatement] = []
        while not self.at_end():
            try:
                statements.append(self.parse_statement())
            except QuillSyntaxError:
                break
        return statements

    # ------------------------
    # Expressions
    # ------------------------
    def parse_expression(self) -> Expression:
        return self.parse_add()

    def _parse_left_fold(
        self,
        operator: str,
        operand: Callable[[], Expression],
        node: type[BinaryOperation],
    ) -> Expression:
        """Read one operand, then fold (operator operand) pairs to the left.

        An operator whose right operand fails to parse is given back to the
        stream, ending this level.
        """
        left = operand()
        while True:
            mark = self.mark()
            if self.accept(operator) is None:
                return left
            try:
                right = operand()
            except QuillSyntaxError:
                self.reset(mark)
                return left
            left = node(left, right)

    def parse_add(self) -> Expression:
        return self._parse_left_fold("+", self.parse_subtract, Add)

    def parse_subtract(self) -> Expression:
        return self._parse_left_fold("-", self.parse_multiply, Subtract)

    def parse_multiply(self) -> Expression:
        return self._parse_left_fold("*", self.parse_divide, Multiply)

    def parse_divide(self) -> Expression:
        return self._parse_left_fold("/", self.parse_power, Divide)

    def parse_power(self) -> Expression:
        # left-associative, like every other level: 2^3^2 == (2^3)^2
        return self._parse_left_fold("^", self.parse_application, Power)

    def parse_application(self) -> Expression:
        atom = self.parse_atom()
        mark = self.mark()
        if self.accept("(") is None:
            return atom
        try:
            arguments: list[Expression] = []
            if self.accept(")") is None:
                arguments.append(self.parse_expression())
                while self.accept(","):
                    arguments.append(self.parse_expression())
                self.expect(")")
        except QuillSyntaxError:
            self.reset(mark)
            return atom
        return ApplyFunction(atom, tuple(arguments))

    def parse_atom(self) -> Expression:
        tok = self.peek()
        if tok is None:
            raise self.fail("expression")
        if tok.kind == "integer":
            # longer digit runs are out of range and are never converted
            if len(tok.text.lstrip("0")) > MAX_LITERAL_DIGITS:
                raise self.fail("integer literal within the 64-bit range")
            value = int(tok.text)
            if not in_small_range(value):
                raise self.fail("integer literal within the 64-bit range")
            self.advance()
            return Integer(value)
        if tok.kind == "name":
            self.advance()
            return Variable(tok.text)
        if self.accept("("):
            inner = self.parse_expression()
            self.expect(")")
            return inner
        if self.accept("-"):
            return Negate(self.parse_expression())
        raise self.fail("expression")


# ------------------------
# Entry points
# ------------------------
def read_program(source: str) -> tuple[list[TopLevelStatement], Optional[QuillSyntaxError]]:
    """Read statements until the first one that fails.

    Returns the statements and, when text is left unread, the error describing
    where and why reading stopped.
    """
    stream = TokenStream(lex(source), len(source))
    statements = stream.parse_top_level()
    logger.debug("parsed %d top-level statements", len(statements))
    if stream.at_end():
        return statements, None
    return statements, leftover_error(stream, "type declaration or function definition")


def parse_program(source: str, strict: bool = False) -> list[TopLevelStatement]:
    """Parse a program, keeping every statement read before the first one that fails.

    Text left unread is logged as a warning, or raised as a QuillSyntaxError
    when `strict` is set.
    """
    statements, err = read_program(source)
    if err is not None:
        if strict:
            raise err
        logger.warning("program text left unparsed: %s", err)
    return statements


def parse_expression(source: str) -> Expression:
    """Parse one complete expression; any unread text is an error."""
    stream = TokenStream(lex(source), len(source))
    try:
        expr = stream.parse_expression()
    except QuillSyntaxError:
        if stream.furthest is not None:
            raise stream.furthest from None
        raise
    if not stream.at_end():
        raise leftover_error(stream, "operator or end of input")
    return expr


def leftover_error(stream: TokenStream, expected: str) -> QuillSyntaxError:
    """The deepest failure past the stopping point, or a generic one at it."""
    here = stream.position
    furthest = stream.furthest
    if furthest is not None and furthest.position > here:
        return furthest
    tok = stream.peek()
    return QuillSyntaxError(expected, here, tok.text if tok is not None else None)
