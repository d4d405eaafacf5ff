import pytest
from hypothesis import given, strategies as st

from quill.errors import QuillSyntaxError
from quill.reader.parser import Token, lex, parse_expression, parse_program, read_program
from quill.types.nodes import (
    Add,
    ApplyFunction,
    Divide,
    FunctionDefinition,
    FunctionTypeDeclaration,
    Integer,
    Multiply,
    Named,
    Negate,
    Power,
    Subtract,
    Variable,
)


def I(n):
    return Integer(n)


def V(name):
    return Variable(name)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("x", [("name", "x", 0)]),
        ("  42 ", [("integer", "42", 2)]),
        ("f(x) = x + 1", [
            ("name", "f", 0), ("punct", "(", 1), ("name", "x", 2), ("punct", ")", 3),
            ("punct", "=", 5), ("name", "x", 7), ("punct", "+", 9), ("integer", "1", 11),
        ]),
        ("f : Int -> Int", [
            ("name", "f", 0), ("punct", ":", 2), ("name", "Int", 4), ("arrow", "->", 8), ("name", "Int", 11),
        ]),
        ("a-b", [("name", "a", 0), ("punct", "-", 1), ("name", "b", 2)]),
        ("12ab", [("integer", "12", 0), ("name", "ab", 2)]),
        ("x_1", [("name", "x", 0), ("unknown", "_", 1), ("integer", "1", 2)]),
        ("1.5", [("integer", "1", 0), ("unknown", ".", 1), ("integer", "5", 2)]),
        ("x\u00a0", [("name", "x", 0), ("unknown", "\u00a0", 1)]),
        ("\u30001", [("unknown", "\u3000", 0), ("integer", "1", 1)]),
        ("\r\n 7", [("integer", "7", 3)]),
        ("\t\n", []),
    ]
)
def test_lexer_basic(source, expected):
    assert list(lex(source)) == [Token(*t) for t in expected]


@given(st.text(alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ", min_size=1))
def test_lexer_letters_are_one_name(word):
    assert list(lex(f" {word} ")) == [Token("name", word, 1)]


@given(st.integers(min_value=0))
def test_lexer_digits_are_one_integer(n):
    assert list(lex(str(n))) == [Token("integer", str(n), 0)]


@pytest.mark.parametrize(
    "source, expected",
    [
        ("42", I(42)),
        ("  x  ", V("x")),
        ("1 + 2 * 3", Add(I(1), Multiply(I(2), I(3)))),
        ("(1 + 2) * 3", Multiply(Add(I(1), I(2)), I(3))),
        ("10 - 4 - 3", Subtract(Subtract(I(10), I(4)), I(3))),
        ("8 / 4 / 2", Divide(Divide(I(8), I(4)), I(2))),
        # add binds looser than subtract, multiply looser than divide
        ("1 - 2 + 3", Add(Subtract(I(1), I(2)), I(3))),
        ("1 + 2 - 3", Add(I(1), Subtract(I(2), I(3)))),
        ("2 * 3 / 4", Multiply(I(2), Divide(I(3), I(4)))),
        ("a-b", Subtract(V("a"), V("b"))),
        # power is left-associative
        ("2 ^ 3 ^ 2", Power(Power(I(2), I(3)), I(2))),
        # negate takes the whole expression to its right
        ("-1+2", Negate(Add(I(1), I(2)))),
        ("2 * -1 + 3", Multiply(I(2), Negate(Add(I(1), I(3))))),
        ("1--2", Subtract(I(1), Negate(I(2)))),
        ("f(1, x)", ApplyFunction(V("f"), (I(1), V("x")))),
        ("f()", ApplyFunction(V("f"), ())),
        ("f (1)", ApplyFunction(V("f"), (I(1),))),
        ("2 ^ f(3)", Power(I(2), ApplyFunction(V("f"), (I(3),)))),
        ("f(g(1), 2 + 3)", ApplyFunction(V("f"), (ApplyFunction(V("g"), (I(1),)), Add(I(2), I(3))))),
        ("(1)(2)", ApplyFunction(I(1), (I(2),))),
        ("9223372036854775807", I(9223372036854775807)),
        ("0" * 30 + "7", I(7)),
    ]
)
def test_parse_expression(source, expected):
    assert parse_expression(source) == expected


@pytest.mark.parametrize(
    "source, expected, position",
    [
        ("", "expression", 0),
        ("1 +", "expression", 3),
        ("(1 + 2", "')'", 6),
        ("f(1,", "expression", 4),
        ("x y", "operator or end of input", 2),
        ("1.5", "operator or end of input", 1),
        ("9223372036854775808", "integer literal within the 64-bit range", 0),
        ("1" * 5000, "integer literal within the 64-bit range", 0),
        ("2 + " + "9" * 5000, "integer literal within the 64-bit range", 4),
        ("1\u00a0+ 2", "operator or end of input", 1),
        ("*", "expression", 0),
    ]
)
def test_parse_expression_errors(source, expected, position):
    with pytest.raises(QuillSyntaxError) as info:
        parse_expression(source)
    assert info.value.expected == expected
    assert info.value.position == position


def test_syntax_error_message_names_found_token():
    with pytest.raises(QuillSyntaxError) as info:
        parse_expression("x y")
    assert str(info.value) == "expected operator or end of input at position 2, found 'y'"


def test_chained_calls_are_not_parsed():
    with pytest.raises(QuillSyntaxError):
        parse_expression("f(1)(2)")


def test_parse_program_declarations_and_definitions():
    source = """
    double : Int -> Int
    double(x) = x * 2
    constant() = 42
    same(x, x) = x
    """
    assert parse_program(source) == [
        FunctionTypeDeclaration("double", Named("Int"), Named("Int")),
        FunctionDefinition("double", ("x",), Multiply(V("x"), I(2))),
        FunctionDefinition("constant", (), I(42)),
        FunctionDefinition("same", ("x", "x"), V("x")),
    ]


def test_statement_positions():
    source = "f : A -> B\n  f(x) = x"
    decl, definition = parse_program(source)
    assert decl.position == 0
    assert definition.position == 13


def test_parse_program_stops_at_first_unreadable_statement(caplog):
    source = "f(x) = x\n???\ng(y) = y"
    with caplog.at_level("WARNING", logger="quill.reader.parser"):
        statements = parse_program(source)
    assert statements == [FunctionDefinition("f", ("x",), V("x"))]
    assert "position 9" in caplog.text


def test_parse_program_strict_raises():
    with pytest.raises(QuillSyntaxError) as info:
        parse_program("f(x) = x\n???", strict=True)
    assert info.value.position == 9


def test_read_program_reports_deepest_failure():
    statements, err = read_program("f(x) = x\ng(y) = ")
    assert [s.name for s in statements] == ["f"]
    assert err is not None
    assert err.expected == "expression"
    assert err.position == len("f(x) = x\ng(y) = ")


def test_read_program_empty():
    assert read_program("   \n") == ([], None)


def test_type_declaration_requires_arrow():
    statements, err = read_program("f : Int Int")
    assert statements == []
    assert err is not None


def test_oversized_literal_stops_program_reading():
    source = "f() = 1\ng() = " + "9" * 5000
    statements, err = read_program(source)
    assert [s.name for s in statements] == ["f"]
    assert err.expected == "integer literal within the 64-bit range"
    assert err.position == len("f() = 1\ng() = ")
