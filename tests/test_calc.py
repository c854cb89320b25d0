import math

import pytest

import calc
from calc import evaluate_line, format_result, main


@pytest.mark.parametrize("text, value", [
    ("3", 3.0),
    ("3.14", 3.14),
    ("-3.0", -3.0),
    ("0.5", 0.5),
])
def test_single_atom(text, value):
    assert evaluate_line(text) == value


def test_left_associative_subtraction():
    assert evaluate_line("10-5-100") == -95.0


def test_precedence():
    assert evaluate_line("3*4+4/3") == pytest.approx(13.3333333)


def test_parentheses():
    assert evaluate_line("(3+4)/3") == pytest.approx(7 / 3)
    assert evaluate_line("((3+4)/(3))") == evaluate_line("(3+4)/3")
    assert evaluate_line("(2+2)/2") == 2.0


def test_unary_minus():
    assert evaluate_line("-(100+2)") == -102.0


def test_signed_chain():
    assert evaluate_line("-3.0+10.0-5.0-100.0") == -98.0
    assert evaluate_line("-122.72-245.44-68.27-27.85-27.48+28.13+28.86") == pytest.approx(
        -122.72 - 245.44 - 68.27 - 27.85 - 27.48 + 28.13 + 28.86
    )


def test_whitespace_does_not_change_result():
    assert evaluate_line("2 + 2") == evaluate_line("2+2") == 4.0
    assert evaluate_line("  ( 3 +\t4 ) / 3 ") == evaluate_line("(3+4)/3")


@pytest.mark.parametrize("text", ["", "+", "(3+4", "3+", "   ", "abc", "1+(2"])
def test_malformed_input_is_absent(text):
    assert evaluate_line(text) is None


def test_deep_nesting_evaluates():
    assert evaluate_line("(" * 5000 + "1" + ")" * 5000) == 1.0
    assert evaluate_line("-(" * 3001 + "1" + ")" * 3001) == -1.0
    assert evaluate_line("-(" * 300 + "1" + ")" * 300) == 1.0


def test_division_by_zero_is_not_a_failure():
    result = evaluate_line("1/0")
    assert result is not None
    assert not math.isfinite(result)


@pytest.mark.parametrize("value, text", [
    (2.0, "2"),
    (-102.0, "-102"),
    (0.5, "0.5"),
    (math.inf, "inf"),
    (-math.inf, "-inf"),
    (math.nan, "nan"),
])
def test_format_result(value, text):
    assert format_result(value) == text


def test_one_shot_expressions(capsys):
    assert main(["-e", "1+2", "-e", "(3+4)/3"]) == 0
    out, err = capsys.readouterr()
    assert out.splitlines() == ["3", "2.3333333333333335"]
    assert err == ""


def test_one_shot_failure_exit_status(capsys):
    assert main(["-e", "3+", "-e", "2*2"]) == 1
    out, err = capsys.readouterr()
    assert out.splitlines() == ["4"]
    assert "invalid formula: 3+" in err


def test_debug_prints_ast(capsys):
    assert main(["--debug", "-e", "1 + 2"]) == 0
    out, _ = capsys.readouterr()
    assert "normalized: 1+2" in out
    assert "AST: BinaryOp(Literal(1.0), +, Literal(2.0))" in out


def test_debug_prints_long_chain(capsys):
    chain = "+".join(["1"] * 5000)
    assert main(["--debug", "-e", chain]) == 0
    out, _ = capsys.readouterr()
    lines = out.splitlines()
    assert lines[1].startswith("AST: BinaryOp(BinaryOp(")
    assert lines[-1] == "5000"


def feed(lines):
    pending = list(lines)

    def read(prompt):
        if not pending:
            raise EOFError
        return pending.pop(0)

    return read


def test_repl_continues_after_failure(capsys, monkeypatch):
    monkeypatch.setattr(calc, "readline", None)
    assert main([], read=feed(["1+1", "(3+4", "10-5-100"])) == 0
    out, err = capsys.readouterr()
    assert out.splitlines() == ["2", "-95"]
    assert err.splitlines() == ["invalid formula: (3+4"]


def test_repl_stops_on_interrupt(capsys, monkeypatch):
    monkeypatch.setattr(calc, "readline", None)

    def read(prompt):
        raise KeyboardInterrupt

    assert main([], read=read) == 0
    out, err = capsys.readouterr()
    assert out == ""


def test_repl_loads_and_saves_history(monkeypatch, tmp_path):
    recorded = []

    class FakeReadline:
        def read_history_file(self, path):
            recorded.append(("loaded", path))
            raise FileNotFoundError(path)

        def write_history_file(self, path):
            recorded.append(("saved", path))

    history = str(tmp_path / "history")
    monkeypatch.setattr(calc, "readline", FakeReadline())
    assert main(["--history-file", history], read=feed(["1+1", "2*3"])) == 0
    assert recorded == [("loaded", history), ("saved", history)]
