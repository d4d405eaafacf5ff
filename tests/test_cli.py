import io

import pytest

from quill.__main__ import build_parser, evaluate_line, main, run_repl
from quill.interpreter import Interpreter


@pytest.fixture
def program_file(tmp_path):
    path = tmp_path / "program.quill"
    path.write_text("f : Int -> Int\nf(x) = x * 10\n", encoding="utf-8")
    return path


def test_eval_prints_results(capsys):
    assert main(["-e", "1 + 2", "-e", "7 / 2"]) == 0
    assert capsys.readouterr().out.splitlines() == ["3", "3.5"]


def test_eval_failure_continues(capsys):
    assert main(["-e", "1 / 0", "-e", "2 * 2"]) == 1
    assert capsys.readouterr().out.splitlines() == ["error: division by zero", "4"]


def test_program_files_are_loaded(capsys, program_file):
    assert main([str(program_file), "-e", "f(4)"]) == 0
    assert capsys.readouterr().out.strip() == "40"


def test_prelude_is_loaded_before_programs(capsys, monkeypatch, tmp_path, program_file):
    prelude = tmp_path / "prelude.quill"
    prelude.write_text("g(x) = f(x) + 1\nf(x) = x\n", encoding="utf-8")
    monkeypatch.setenv("QUILL_PRELUDE_PATH", str(prelude))
    # the program file's f replaces the prelude's
    assert main([str(program_file), "-e", "g(2)"]) == 0
    assert capsys.readouterr().out.strip() == "21"


def test_missing_program_file(capsys, tmp_path):
    assert main([str(tmp_path / "nope.quill"), "-e", "1"]) == 2
    assert capsys.readouterr().err.startswith("error: cannot read program")


def test_strict_rejects_unread_text(capsys, tmp_path):
    path = tmp_path / "bad.quill"
    path.write_text("f(x) = x\n???\n", encoding="utf-8")
    assert main(["--strict", str(path), "-e", "f(1)"]) == 2
    assert "position 9" in capsys.readouterr().err
    # without --strict the readable prefix still loads
    assert main([str(path), "-e", "f(1)"]) == 0
    assert capsys.readouterr().out.strip() == "1"


def test_log_level_is_case_insensitive():
    args = build_parser().parse_args(["--log-level", "debug"])
    assert args.log_level == "DEBUG"


def test_evaluate_line_reports_recursion():
    interp = Interpreter("loop(n) = loop(n)")
    assert evaluate_line(interp, "loop(0)") == (False, "error: maximum recursion depth exceeded")


def test_repl_session():
    interp = Interpreter("f : Int -> Int\nf(x) = x + 1")
    lines = io.StringIO("f(1)\n\n  \nf(1, 2)\n:type f\n:type g\nnope\n2 ^ 64\n")
    out = io.StringIO()
    failures = run_repl(interp, lines, out)
    assert failures == 2
    assert out.getvalue().splitlines() == [
        "2",
        "error: expected 1 arguments, found 2",
        "f : Int -> Int",
        "no declaration for 'g'",
        "error: unbound variable 'nope'",
        "18446744073709551616",
    ]


def test_repl_prompt_is_written_before_each_line():
    out = io.StringIO()
    run_repl(Interpreter(), io.StringIO("1\n"), out, prompt="> ")
    assert out.getvalue() == "> 1\n> "


def test_undecodable_program_file(capsys, tmp_path):
    path = tmp_path / "latin1.quill"
    path.write_bytes(b"f() = 1 \xff\xfe\n")
    assert main([str(path), "-e", "1"]) == 2
    assert capsys.readouterr().err.startswith("error: cannot read program")


def test_repl_survives_oversized_input():
    lines = io.StringIO("1" * 5000 + "\n2 ^ 1000000000000\n1 + 1\n")
    out = io.StringIO()
    assert run_repl(Interpreter(), lines, out) == 1
    first, second, third = out.getvalue().splitlines()
    assert first.startswith("error: expected integer literal within the 64-bit range at position 0")
    assert second.endswith("E+301029995663")
    assert third == "2"
