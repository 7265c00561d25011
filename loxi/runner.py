"""Pipeline driver shared by the CLI and the tests.

A :class:`Runner` owns one :class:`Interpreter` for its whole lifetime, so
globals defined by one call to :meth:`Runner.run` stay visible to the next.
That is what lets the REPL build a program up line by line.
"""

import sys
from typing import Any, List, Optional, TextIO

from .ast import Stmt
from .interpreter import Interpreter
from .errors import LoxError
from .parser import parse
from .printer import print_stmt
from .resolver import Resolver
from .scanner import scan_tokens

PROMPT = '> '


class Runner:
    def __init__(self, writer: Optional[TextIO] = None, reader: Any = None,
                 debug_level: int = 0, debug_fp: Optional[TextIO] = None):
        self.interpreter = Interpreter(writer=writer, reader=reader,
                                       debug_level=debug_level, debug_fp=debug_fp)

    def run(self, source: str) -> List[Stmt]:
        """Scan, parse, resolve and execute ``source``.

        Any :class:`LoxError` propagates to the caller; statements already
        executed before a runtime error keep their effects.
        """
        interpreter = self.interpreter
        tokens = scan_tokens(source)
        if interpreter.debug_level >= 1:
            interpreter.debug('tokens: ' + ' '.join(str(t) for t in tokens))
        statements = parse(tokens)
        if interpreter.debug_level >= 1:
            for stmt in statements:
                interpreter.debug('stmt: ' + print_stmt(stmt))
        Resolver(interpreter).resolve(statements)
        interpreter.interpret(statements)
        return statements

    def run_file(self, path: str) -> List[Stmt]:
        # OSError from reading is left to the caller
        with open(path, 'r', encoding='utf-8') as f:
            source = f.read()
        return self.run(source)

    def run_prompt(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        """Read-eval-print loop. Errors are reported and the loop continues."""
        stdin = stdin if stdin is not None else sys.stdin
        stdout = stdout if stdout is not None else sys.stdout
        while True:
            stdout.write(PROMPT)
            stdout.flush()
            line = stdin.readline()
            if line == '':
                break
            line = line.rstrip('\r\n')
            try:
                self.run(line)
            except LoxError as e:
                stdout.write(f"{e}\n")
        stdout.write('\n')
