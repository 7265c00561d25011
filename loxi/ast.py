"""Abstract Syntax Tree (AST) definitions for Lox.

The node set is closed: the parser only ever builds the classes below, and
the resolver, interpreter and printer each dispatch over them with an
``isinstance`` chain. Nodes are frozen once built.

Every expression node gets a process-unique ``node_id`` when it is
constructed. The resolver keys its distance table by that id, so two
structurally equal expressions at different places in a program never share
a resolution entry.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .tokens import Token

_node_ids = itertools.count(1)


def next_node_id() -> int:
    return next(_node_ids)


@dataclass(frozen=True)
class Expr:
    """Base class for expression nodes."""
    node_id: int = field(default_factory=next_node_id, compare=False,
                         repr=False, kw_only=True)


@dataclass(frozen=True)
class Stmt:
    """Base class for statement nodes."""
    pass


# Expressions

@dataclass(frozen=True)
class Literal(Expr):
    value: Any


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Logical(Expr):
    left: Expr
    operator: Token  # AND or OR
    right: Expr


@dataclass(frozen=True)
class PostUnary(Expr):
    left: Expr
    operator: Token  # PLUS_PLUS or MINUS_MINUS


@dataclass(frozen=True)
class Variable(Expr):
    name: Token


@dataclass(frozen=True)
class Assignment(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True)
class Call(Expr):
    callee: Expr
    arguments: List[Expr]
    paren: Token  # closing paren, for runtime error positions


@dataclass(frozen=True)
class Lambda(Expr):
    keyword: Token  # the 'fun' token
    params: List[Token]
    body: List[Stmt]
    name: Optional[Token] = None  # set for named function declarations


# Statements

@dataclass(frozen=True)
class Expression(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Declaration(Stmt):
    name: Token
    initializer: Optional[Expr]  # None means nil


@dataclass(frozen=True)
class Block(Stmt):
    statements: List[Stmt]


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass(frozen=True)
class While(Stmt):
    """A loop. ``increment`` is only set by ``for`` desugaring and runs after
    every iteration, including one cut short by ``continue``."""
    condition: Expr
    body: Stmt
    increment: Optional[Expr] = None


@dataclass(frozen=True)
class Break(Stmt):
    keyword: Token


@dataclass(frozen=True)
class Continue(Stmt):
    keyword: Token


@dataclass(frozen=True)
class Return(Stmt):
    keyword: Token
    value: Optional[Expr]
