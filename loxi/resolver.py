"""Static scope resolution.

The resolver walks the AST once, before execution, mirroring the scopes the
interpreter will create at run time: every block and every function body
(together with its parameters) is one scope. For each variable reference and
assignment it records how many scopes separate the use from the declaring
scope, writing the distance into ``Interpreter.locals``. Names found in no
tracked scope get no entry and are looked up in the global environment at
run time.

Each scope maps a name to ``False`` while its initializer is being resolved
and ``True`` once it is usable; reading a name that is still ``False`` is an
error. A declaration whose initializer is a lambda is marked usable before
the lambda body is resolved, so named functions can recurse.

The resolver also rejects ``break``/``continue`` outside a loop and
``return`` outside a function.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List

from .ast import (
    Assignment, Binary, Block, Break, Call, Continue, Declaration, Expr,
    Expression, Grouping, If, Lambda, Literal, Logical, PostUnary, Return,
    Stmt, Unary, Variable, While,
)
from .errors import ResolutionError
from .tokens import Token

if TYPE_CHECKING:
    from .interpreter import Interpreter


class Resolver:
    def __init__(self, interpreter: 'Interpreter'):
        self.interpreter = interpreter
        self.scopes: List[Dict[str, bool]] = []
        self.loop_depth = 0
        self.function_depth = 0

    def resolve(self, statements: List[Stmt]) -> None:
        for stmt in statements:
            self.resolve_stmt(stmt)

    # Scopes

    def begin_scope(self) -> None:
        self.scopes.append({})

    def end_scope(self) -> None:
        self.scopes.pop()

    def declare(self, name: Token) -> None:
        if self.scopes:
            self.scopes[-1][name.lexeme] = False

    def define(self, name: Token) -> None:
        if self.scopes:
            self.scopes[-1][name.lexeme] = True

    def resolve_local(self, expr: Expr, name: Token) -> None:
        for depth, scope in enumerate(reversed(self.scopes)):
            if name.lexeme in scope:
                self.interpreter.resolve(expr, depth)
                return
        # not found: global, resolved dynamically

    # Statements

    def resolve_stmt(self, node: Stmt) -> None:
        if isinstance(node, Expression):
            self.resolve_expr(node.expression)
            return
        if isinstance(node, Declaration):
            self.declare(node.name)
            if isinstance(node.initializer, Lambda):
                self.define(node.name)
                self.resolve_expr(node.initializer)
                return
            if node.initializer is not None:
                self.resolve_expr(node.initializer)
            self.define(node.name)
            return
        if isinstance(node, Block):
            self.begin_scope()
            try:
                self.resolve(node.statements)
            finally:
                self.end_scope()
            return
        if isinstance(node, If):
            self.resolve_expr(node.condition)
            self.resolve_stmt(node.then_branch)
            if node.else_branch is not None:
                self.resolve_stmt(node.else_branch)
            return
        if isinstance(node, While):
            self.resolve_expr(node.condition)
            self.loop_depth += 1
            try:
                self.resolve_stmt(node.body)
            finally:
                self.loop_depth -= 1
            if node.increment is not None:
                self.resolve_expr(node.increment)
            return
        if isinstance(node, (Break, Continue)):
            if self.loop_depth == 0:
                raise ResolutionError(
                    f"'{node.keyword.lexeme}' outside of a loop", node.keyword.line)
            return
        if isinstance(node, Return):
            if self.function_depth == 0:
                raise ResolutionError("'return' outside of a function", node.keyword.line)
            if node.value is not None:
                self.resolve_expr(node.value)
            return
        raise TypeError(f"resolve: unexpected node type {type(node).__name__}")

    # Expressions

    def resolve_expr(self, node: Expr) -> None:
        if isinstance(node, Literal):
            return
        if isinstance(node, Variable):
            for scope in reversed(self.scopes):
                if node.name.lexeme in scope:
                    if scope[node.name.lexeme] is False:
                        raise ResolutionError(
                            f"cannot read local variable '{node.name.lexeme}' "
                            "in its own initializer",
                            node.name.line,
                        )
                    break
            self.resolve_local(node, node.name)
            return
        if isinstance(node, Assignment):
            self.resolve_expr(node.value)
            self.resolve_local(node, node.name)
            return
        if isinstance(node, (Binary, Logical)):
            self.resolve_expr(node.left)
            self.resolve_expr(node.right)
            return
        if isinstance(node, Unary):
            self.resolve_expr(node.right)
            return
        if isinstance(node, PostUnary):
            self.resolve_expr(node.left)
            return
        if isinstance(node, Grouping):
            self.resolve_expr(node.expression)
            return
        if isinstance(node, Call):
            self.resolve_expr(node.callee)
            for arg in node.arguments:
                self.resolve_expr(arg)
            return
        if isinstance(node, Lambda):
            self.resolve_function(node)
            return
        raise TypeError(f"resolve: unexpected node type {type(node).__name__}")

    def resolve_function(self, node: Lambda) -> None:
        enclosing_loop_depth = self.loop_depth
        self.loop_depth = 0
        self.function_depth += 1
        self.begin_scope()
        try:
            for param in node.params:
                self.declare(param)
                self.define(param)
            self.resolve(node.body)
        finally:
            self.end_scope()
            self.function_depth -= 1
            self.loop_depth = enclosing_loop_depth
