import sys
from io import StringIO

import pytest

from pebble import __version__
from pebble.interpreter import Interpreter
from pebble.interpreter.repl import (
    CONTINUATION_PROMPT,
    PROMPT,
    main,
    needs_more_input,
    paren_depth,
    repl,
    run_source,
)


def scripted(lines):
    """A read_line stand-in that records prompts and ends with EOF."""
    prompts = []
    pending = list(lines)

    def read_line(prompt):
        prompts.append(prompt)
        if not pending:
            raise EOFError
        return pending.pop(0)

    return read_line, prompts


def session(lines, interp=None):
    interp = interp if interp is not None else Interpreter()
    read_line, prompts = scripted(lines)
    out, err = StringIO(), StringIO()
    repl(interp, read_line, out, err)
    return out.getvalue(), err.getvalue(), prompts


@pytest.mark.parametrize(
    "source,depth",
    [
        ("(+ 1 2)", 0),
        ("(define f (lambda (x)", 2),
        ('(display ")")', 0),
        ("(a ; )\n", 1),
        (")", -1),
    ]
)
def test_paren_depth(source, depth):
    assert paren_depth(source) == depth


def test_results_are_echoed():
    out, err, _ = session(["(+ 1 2)", "(define x 4)", "(list x 5)"])
    assert out == "3\n(4 . (5 . ()))\n\n"
    assert err == ""


def test_multiline_input_uses_continuation_prompt():
    out, _, prompts = session(["(define sq (lambda (n)", "  (* n n)))", "(sq 9)"])
    assert prompts == [PROMPT, CONTINUATION_PROMPT, PROMPT, PROMPT]
    assert out == "81\n\n"


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1", True),
        ("'", True),
        ("(list 1 '", True),
        ("(+ 1 2)", False),
        ("", False),
        (")", False),
        ("(if 1 2)", False),
    ]
)
def test_needs_more_input(source, expected):
    assert needs_more_input(source) is expected


def test_trailing_quote_waits_for_the_list():
    out, err, prompts = session(["'", "(1 2)"])
    assert prompts == [PROMPT, CONTINUATION_PROMPT, PROMPT]
    assert out == "(1 . (2 . ()))\n\n"
    assert err == ""


def test_deeply_nested_value_is_echoed():
    interp = Interpreter()
    out, err = StringIO(), StringIO()
    program = (
        "(define nest (lambda (n acc) (if (= n 0) acc (nest (- n 1) (cons acc ())))))"
        "(nest 5000 ())"
    )
    assert run_source(interp, program, out, err)
    assert err.getvalue() == ""
    assert out.getvalue().startswith("(" * 5000 + "() . ())")


def test_deeply_nested_source_is_reported():
    interp = Interpreter()
    n = sys.getrecursionlimit() * 2
    out, err, _ = session(["(+ " * n + "1" + ")" * n, "(+ 1 1)"], interp)
    assert err == "Error: Expression nested too deeply\n"
    assert out == "2\n\n"


def test_error_is_reported_and_session_continues():
    out, err, _ = session(["(car 5)", "(+ 1 1)"])
    assert err == "Error: 5 is not a pair (in car)\n"
    assert out == "2\n\n"


def test_syntax_error_is_reported():
    _, err, _ = session(["(if 1 2)"])
    assert err.startswith("Error: Unexpected ')'")


def test_failed_form_does_not_keep_partial_definitions():
    out, err, _ = session(["(define y 1)", "(list (define y 2) (car 5))", "y"])
    assert out == "1\n\n"
    assert "5 is not a pair" in err


def test_env_command_lists_bindings():
    out, _, _ = session(["(define b 2)", "(define a 1)", "env"])
    assert out == "a = 1\nb = 2\n\n"


def test_exit_command_ends_session():
    out, _, prompts = session(["exit", "(+ 1 1)"])
    assert out == ""
    assert prompts == [PROMPT]


def test_blank_lines_are_ignored():
    out, err, _ = session(["", "   ", "7"])
    assert out == "7\n\n"
    assert err == ""


def test_display_output_goes_to_stdout(capsys):
    interp = Interpreter()
    out, err = StringIO(), StringIO()
    assert run_source(interp, '(display "hi")', out, err)
    assert capsys.readouterr().out == "hi"
    assert out.getvalue() == ""


def test_run_source_stops_at_first_error():
    interp = Interpreter()
    out, err = StringIO(), StringIO()
    assert not run_source(interp, "(define a 1) (car 1) (define b 2)", out, err)
    assert "a" in dict((k.id, v) for k, v in interp.env.names())
    assert "b" not in dict((k.id, v) for k, v in interp.env.names())


def test_main_runs_a_file(tmp_path, capsys):
    program = tmp_path / "hello.pbl"
    program.write_text('(display "hello") (newline) (+ 1 2)\n')
    assert main([str(program)]) == 0
    captured = capsys.readouterr()
    assert captured.out == "hello\n"
    assert captured.err == ""


def test_main_stops_a_file_at_first_error(tmp_path, capsys):
    program = tmp_path / "broken.pbl"
    program.write_text('(display "a") (car 1) (display "b")\n')
    assert main([str(program)]) == 1
    captured = capsys.readouterr()
    assert captured.out == "a"
    assert captured.err == "Error: 1 is not a pair (in car)\n"


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.pbl")]) == 1
    assert capsys.readouterr().err.startswith("Error: cannot read")


def test_main_rejects_non_positive_max_depth(tmp_path, capsys):
    program = tmp_path / "p.pbl"
    program.write_text("1")
    assert main(["--max-depth", "0", str(program)]) == 2


def test_main_rejects_unknown_log_level(tmp_path, capsys):
    program = tmp_path / "p.pbl"
    program.write_text("1")
    assert main(["--log-level", "chatty", str(program)]) == 2
    assert "unknown log level" in capsys.readouterr().err


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out
