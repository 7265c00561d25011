"""Errors raised by the loxi pipeline and the control signals used by the
interpreter.

Every stage raises a subclass of :class:`LoxError`. The control signals are
plain values returned from statement execution, not exceptions, so a genuine
failure can never be mistaken for a ``break`` or a ``return``.
"""

from __future__ import annotations

from typing import Any, List, Optional


class LoxError(Exception):
    """Base class for every failure surfaced by scan, parse, resolve and run."""
    kind = 'Error'

    def __init__(self, message: str, line: Optional[int] = None):
        self.message = message
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line is None:
            return f"{self.kind}: {self.message}"
        return f"[line {self.line}] {self.kind}: {self.message}"


class LexError(LoxError):
    """An unterminated string or unrecognised character.

    ``scan_tokens`` raises one aggregate LexError whose ``errors`` holds every
    individual defect found during the pass.
    """
    kind = 'LexError'

    def __init__(self, message: str, line: Optional[int] = None,
                 errors: Optional[List['LexError']] = None):
        self.errors: List[LexError] = list(errors) if errors else []
        super().__init__(message, line)

    @classmethod
    def join(cls, errors: List['LexError']) -> 'LexError':
        message = '\n'.join(str(err) for err in errors)
        return cls(message, errors=errors)

    def _format(self) -> str:
        if self.errors:
            return self.message
        return super()._format()


class ParseError(LoxError):
    kind = 'ParseError'

    def __init__(self, message: str, line: Optional[int] = None,
                 statements: Optional[list] = None):
        # statements parsed before the failure; callers decide if usable
        self.statements = list(statements) if statements else []
        super().__init__(message, line)


class ResolutionError(LoxError):
    kind = 'ResolutionError'


class LoxRuntimeError(LoxError):
    """Failure while executing a program.

    Call boundaries prepend context with :meth:`wrap` as the error travels
    up, so the final message reads outermost call first.
    """
    kind = 'RuntimeError'

    def __init__(self, message: str, line: Optional[int] = None):
        self.context: List[str] = []
        super().__init__(message, line)

    def wrap(self, context: str) -> 'LoxRuntimeError':
        self.context.insert(0, context)
        self.args = (self._format(),)
        return self

    def _format(self) -> str:
        base = super()._format()
        if not self.context:
            return base
        return ': '.join(self.context) + ': ' + base


class RuntimeTypeError(LoxRuntimeError):
    kind = 'TypeError'


class RuntimeNameError(LoxRuntimeError):
    kind = 'NameError'


class BreakSignal:
    """Returned by a ``break`` statement; consumed by the nearest loop."""

    def __repr__(self) -> str:
        return 'BreakSignal()'


class ContinueSignal:
    """Returned by a ``continue`` statement; consumed by the nearest loop."""

    def __repr__(self) -> str:
        return 'ContinueSignal()'


class ReturnSignal:
    """Returned by a ``return`` statement; consumed at the call boundary."""

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f'ReturnSignal({self.value!r})'


BREAK = BreakSignal()
CONTINUE = ContinueSignal()
