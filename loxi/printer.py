"""S-expression rendering of the AST, used by tests and debug output.

``print_expr`` shows operator structure explicitly, so ``1 + 2 * 3`` renders
as ``(+ 1 (* 2 3))``.
"""

from __future__ import annotations

from typing import List

from .ast import (
    Assignment, Binary, Block, Break, Call, Continue, Declaration, Expr,
    Expression, Grouping, If, Lambda, Literal, Logical, PostUnary, Return,
    Stmt, Unary, Variable, While,
)
from .types import to_string


def print_expr(node: Expr) -> str:
    if isinstance(node, Literal):
        if isinstance(node.value, str):
            return f'"{node.value}"'
        return to_string(node.value)
    if isinstance(node, Grouping):
        return f"(group {print_expr(node.expression)})"
    if isinstance(node, Unary):
        return f"({node.operator.lexeme} {print_expr(node.right)})"
    if isinstance(node, (Binary, Logical)):
        return f"({node.operator.lexeme} {print_expr(node.left)} {print_expr(node.right)})"
    if isinstance(node, PostUnary):
        return f"({node.operator.lexeme} {print_expr(node.left)})"
    if isinstance(node, Variable):
        return node.name.lexeme
    if isinstance(node, Assignment):
        return f"(= {node.name.lexeme} {print_expr(node.value)})"
    if isinstance(node, Call):
        parts = [print_expr(node.callee)] + [print_expr(arg) for arg in node.arguments]
        return f"(call {' '.join(parts)})"
    if isinstance(node, Lambda):
        params = ' '.join(p.lexeme for p in node.params)
        return f"(fun ({params}) {_print_body(node.body)})"
    raise TypeError(f"print_expr: unexpected node type {type(node).__name__}")


def print_stmt(node: Stmt) -> str:
    if isinstance(node, Expression):
        return f"{print_expr(node.expression)};"
    if isinstance(node, Declaration):
        if node.initializer is None:
            return f"(var {node.name.lexeme})"
        return f"(var {node.name.lexeme} {print_expr(node.initializer)})"
    if isinstance(node, Block):
        return _print_body(node.statements)
    if isinstance(node, If):
        text = f"(if {print_expr(node.condition)} {print_stmt(node.then_branch)}"
        if node.else_branch is not None:
            text += f" {print_stmt(node.else_branch)}"
        return text + ")"
    if isinstance(node, While):
        text = f"(while {print_expr(node.condition)} {print_stmt(node.body)}"
        if node.increment is not None:
            text += f" {print_expr(node.increment)}"
        return text + ")"
    if isinstance(node, Break):
        return "(break)"
    if isinstance(node, Continue):
        return "(continue)"
    if isinstance(node, Return):
        if node.value is None:
            return "(return)"
        return f"(return {print_expr(node.value)})"
    raise TypeError(f"print_stmt: unexpected node type {type(node).__name__}")


def _print_body(statements: List[Stmt]) -> str:
    return "{" + ' '.join(print_stmt(s) for s in statements) + "}"
