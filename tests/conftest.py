import pytest

from quill.interpreter import Interpreter

# A small program shared by the evaluation tests. Declared types are
# documentary; nothing checks them against the values passed around.
PROGRAM = """
double : Int -> Int
double(x) = x * 2

add(a, b) = a + b
twice(x) = double(double(x))
addy(x) = x + y
callA(y) = addy(1)
callB(y) = addy(10)
pick(x, x) = x
constant() = 42
call(f, x) = f(x)
loop(n) = loop(n)
"""


@pytest.fixture
def program():
    return PROGRAM


@pytest.fixture
def interp(program):
    """Fresh interpreter with the shared program loaded."""
    return Interpreter(program)
