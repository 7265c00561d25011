import io
import os

from loxi.interpreter import run_program

PROGRAMS = os.path.join(os.path.dirname(__file__), 'programs')


def read_program(name):
    with open(os.path.join(PROGRAMS, name), 'r', encoding='utf-8') as f:
        return f.read()


def test_program_fib(capsys):
    run_program(read_program('fib.lox'))
    out = capsys.readouterr().out
    assert out == "0\n1\n1\n2\n3\n5\n8\n13\n21\n34\n"


def test_program_fib_to_writer():
    out = io.StringIO()
    run_program(read_program('fib.lox'), writer=out)
    assert out.getvalue() == "0\n1\n1\n2\n3\n5\n8\n13\n21\n34\n"


def test_program_counter(capsys):
    run_program(read_program('counter.lox'))
    out = capsys.readouterr().out.strip()
    assert out == "count 3\nother 1"


def test_program_loops(capsys):
    run_program(read_program('loops.lox'))
    out = capsys.readouterr().out.strip()
    assert out == "total 18\nxxx"


def test_program_scopes(capsys):
    run_program(read_program('scopes.lox'))
    out = capsys.readouterr().out.strip()
    # show_a was resolved before the block-local 'a' existed
    assert out == "global\nglobal\nblock\nglobal"
