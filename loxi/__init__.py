# Lox language package
# This package provides a scanner, parser, resolver and tree-walking
# interpreter for the Lox language.
from .errors import (
    LoxError, LexError, ParseError, ResolutionError, LoxRuntimeError,
    RuntimeTypeError, RuntimeNameError,
)
from .scanner import scan_tokens
from .parser import parse_program, parse_expression
from .resolver import Resolver
from .interpreter import run_program, Interpreter, LoxFunction
from .runner import Runner

__all__ = [
    'run_program',
    'Interpreter',
    'LoxFunction',
    'Resolver',
    'Runner',
    'scan_tokens',
    'parse_program',
    'parse_expression',
    'LoxError',
    'LexError',
    'ParseError',
    'ResolutionError',
    'LoxRuntimeError',
    'RuntimeTypeError',
    'RuntimeNameError',
]
