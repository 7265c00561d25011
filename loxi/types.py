"""Runtime value helpers for Lox.

Lox values map onto Python objects directly:

    nil      -> None
    boolean  -> bool
    number   -> float
    string   -> str
    callable -> LoxFunction or BuiltinFunction

The helpers here define the language's truthiness, equality and printing
rules over that closed set. Keep ``bool`` checks ahead of numeric checks:
``bool`` is an ``int`` subclass in Python and must never behave as a number.
"""

from __future__ import annotations

from typing import Any, Optional

# Arity marker for callables that accept any number of arguments.
VARIADIC: Optional[int] = None


def is_number(value: Any) -> bool:
    return isinstance(value, float) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    """nil and false are falsy; every other value is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    """Lox equality.

    Values of different kinds are never equal (so ``true != 1``), numbers,
    strings and booleans compare by value, nil equals only nil, and
    callables compare by identity.
    """
    if a is None or b is None:
        return a is b
    if type(a) is not type(b):
        return False
    if isinstance(a, (bool, float, str)):
        return a == b
    return a is b


def type_name(value: Any) -> str:
    """Return the Lox type name of a runtime value."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if callable(getattr(value, 'call', None)):
        return 'function'
    return type(value).__name__


def to_string(value: Any) -> str:
    """Convert a Lox value to the text ``print`` writes.

    Integral numbers drop their ``.0`` suffix, so ``3.0`` prints as ``3``.
    """
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        text = repr(value)
        if text.endswith('.0'):
            text = text[:-2]
        return text
    return str(value)
