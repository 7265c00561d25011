"""Tree-walking evaluator for Lox.

Statements are run by :meth:`Interpreter.execute`, which returns ``None`` when
a statement completes normally or one of the control signals from
:mod:`loxi.errors` (``BREAK``, ``CONTINUE`` or a ``ReturnSignal``). Loops
consume break/continue, call boundaries consume returns, and every other
statement hands a signal straight back to its caller. Genuine failures are
raised as :class:`LoxRuntimeError` subclasses.

Variable lookups use the distances recorded by the resolver in
``Interpreter.locals``; a name without an entry lives in the global
environment and is looked up there directly.
"""

import math
import sys
from typing import Any, Dict, List, Optional, TextIO

from .ast import (
    Assignment, Binary, Block, Break, Call, Continue, Declaration, Expr,
    Expression, Grouping, If, Lambda, Literal, Logical, PostUnary, Return,
    Stmt, Unary, Variable, While,
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import (
    BREAK, CONTINUE, BreakSignal, ContinueSignal, LoxRuntimeError,
    ReturnSignal, RuntimeNameError, RuntimeTypeError,
)
from .parser import parse_program
from .resolver import Resolver
from .std import BasicIO, populate_standard_environment
from .tokens import Token, TokenType
from .types import is_equal, is_number, is_truthy, to_string, type_name


class LoxFunction:
    """A user-defined function or lambda closed over its defining scope."""
    def __init__(self, declaration: Lambda, closure: Environment):
        self.declaration = declaration
        self.closure = closure

    @property
    def name(self) -> str:
        if self.declaration.name is None:
            return 'lambda'
        return self.declaration.name.lexeme

    @property
    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: 'Interpreter', args: List[Any]) -> Any:
        env = Environment(self.closure)
        for param, arg in zip(self.declaration.params, args):
            env.define(param.lexeme, arg)
        try:
            res = interpreter.execute_block(self.declaration.body, env)
        except LoxRuntimeError as err:
            raise err.wrap(f"calling {self.name} defined on line {self.declaration.keyword.line}")
        if isinstance(res, ReturnSignal):
            return res.value
        if isinstance(res, (BreakSignal, ContinueSignal)):
            raise LoxRuntimeError('loop control outside of a loop').wrap(
                f"calling {self.name} defined on line {self.declaration.keyword.line}")
        return None

    def __repr__(self) -> str:
        return f"<fn {self.name}>"

    __str__ = __repr__


class Interpreter:
    """Core interpreter that executes a resolved Lox AST."""
    def __init__(self, writer: Optional[TextIO] = None, reader: Any = None,
                 debug_level: int = 0, debug_fp: Optional[TextIO] = None):
        self.globals = Environment()
        self.locals: Dict[int, int] = {}
        self.debug_level = debug_level
        self.debug_fp = debug_fp
        self.basic_io = BasicIO(writer if writer is not None else sys.stdout,
                                reader if reader is not None else sys.stdin)
        populate_standard_environment(self.globals, self.basic_io)

    def debug(self, msg: str, level: int = 1):
        if self.debug_level >= level:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    # Public API
    def resolve(self, expr: Expr, depth: int) -> None:
        self.locals[expr.node_id] = depth
        if self.debug_level >= 4:
            self.debug(f"resolve #{expr.node_id} at distance {depth}", 4)

    def interpret(self, statements: List[Stmt]) -> None:
        for stmt in statements:
            res = self.execute(stmt, self.globals)
            if isinstance(res, ReturnSignal):
                raise LoxRuntimeError("'return' outside of a function")
            if isinstance(res, BreakSignal):
                raise LoxRuntimeError("'break' outside of a loop")
            if isinstance(res, ContinueSignal):
                raise LoxRuntimeError("'continue' outside of a loop")

    def execute_block(self, statements: List[Stmt], env: Environment) -> Any:
        for stmt in statements:
            res = self.execute(stmt, env)
            # propagate break/continue/return signals
            if res is not None:
                return res
        return None

    def execute(self, node: Stmt, env: Environment) -> Any:
        if isinstance(node, Expression):
            self.evaluate(node.expression, env)
            return None
        if isinstance(node, Declaration):
            value = self.evaluate(node.initializer, env) if node.initializer is not None else None
            env.define(node.name.lexeme, value)
            if self.debug_level >= 2:
                if isinstance(value, LoxFunction):
                    self.debug(f"define function {node.name.lexeme}", 2)
                else:
                    self.debug(f"declare {node.name.lexeme}: {type_name(value)} = {to_string(value)}", 2)
            return None
        if isinstance(node, Block):
            return self.execute_block(node.statements, Environment(env))
        if isinstance(node, If):
            cond = self.evaluate(node.condition, env)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}", 3)
            if truthy:
                return self.execute(node.then_branch, env)
            if node.else_branch is not None:
                return self.execute(node.else_branch, env)
            return None
        if isinstance(node, While):
            while is_truthy(self.evaluate(node.condition, env)):
                res = self.execute(node.body, env)
                if res is BREAK:
                    break
                if isinstance(res, ReturnSignal):
                    return res
                # CONTINUE falls through to the increment
                if node.increment is not None:
                    self.evaluate(node.increment, env)
            return None
        if isinstance(node, Break):
            return BREAK
        if isinstance(node, Continue):
            return CONTINUE
        if isinstance(node, Return):
            value = self.evaluate(node.value, env) if node.value is not None else None
            return ReturnSignal(value)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Expr, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression, env)
        if isinstance(node, Variable):
            return self.look_up(node, node.name, env)
        if isinstance(node, Assignment):
            value = self.evaluate(node.value, env)
            self.assign_variable(node, node.name, value, env)
            return value
        if isinstance(node, Unary):
            right = self.evaluate(node.right, env)
            if node.operator.type == TokenType.MINUS:
                self.check_number_operand(node.operator, right)
                return -right
            if node.operator.type == TokenType.BANG:
                return not is_truthy(right)
            raise LoxRuntimeError(f"unknown unary operator {node.operator.lexeme}", node.operator.line)
        if isinstance(node, Logical):
            left = self.evaluate(node.left, env)
            if node.operator.type == TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right, env)
        if isinstance(node, Binary):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.operator, left, right)
        if isinstance(node, PostUnary):
            if not isinstance(node.left, Variable):
                raise LoxRuntimeError(
                    f"operand of '{node.operator.lexeme}' must be a variable", node.operator.line)
            current = self.look_up(node.left, node.left.name, env)
            if not is_number(current):
                raise RuntimeTypeError(
                    f"operand of '{node.operator.lexeme}' must be a number", node.operator.line)
            delta = 1.0 if node.operator.type == TokenType.PLUS_PLUS else -1.0
            value = current + delta
            self.assign_variable(node.left, node.left.name, value, env)
            return value
        if isinstance(node, Call):
            callee = self.evaluate(node.callee, env)
            args = [self.evaluate(arg, env) for arg in node.arguments]
            return self.call_function(callee, args, node.paren)
        if isinstance(node, Lambda):
            return LoxFunction(node, env)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def look_up(self, expr: Expr, name: Token, env: Environment) -> Any:
        distance = self.locals.get(expr.node_id)
        try:
            if distance is not None:
                return env.get_at(distance, name.lexeme)
            return self.globals.get(name.lexeme)
        except RuntimeNameError as err:
            raise RuntimeNameError(err.message, name.line) from None

    def assign_variable(self, expr: Expr, name: Token, value: Any, env: Environment) -> None:
        distance = self.locals.get(expr.node_id)
        try:
            if distance is not None:
                env.assign_at(distance, name.lexeme, value)
            else:
                self.globals.assign(name.lexeme, value)
        except RuntimeNameError as err:
            raise RuntimeNameError(err.message, name.line) from None

    def call_function(self, func: Any, args: List[Any], paren: Token) -> Any:
        if not isinstance(func, (LoxFunction, BuiltinFunction)):
            raise RuntimeTypeError('can only call functions', paren.line)
        # None arity means variadic
        if func.arity is not None and len(args) != func.arity:
            raise RuntimeTypeError(
                f"expected {func.arity} arguments but got {len(args)}", paren.line)
        if self.debug_level >= 3:
            self.debug(f"call {func} with {len(args)} argument(s)", 3)
        try:
            return func.call(self, args)
        except LoxRuntimeError as err:
            raise err.wrap(f"line {paren.line}")

    def check_number_operand(self, operator: Token, operand: Any) -> None:
        if not is_number(operand):
            raise RuntimeTypeError('operand must be a number', operator.line)

    def check_number_operands(self, operator: Token, left: Any, right: Any) -> None:
        if not (is_number(left) and is_number(right)):
            raise RuntimeTypeError('operands must be numbers', operator.line)

    def apply_binary_op(self, operator: Token, a: Any, b: Any) -> Any:
        op = operator.type
        if op == TokenType.PLUS:
            if is_number(a) and is_number(b):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise RuntimeTypeError('operands must be two numbers or two strings', operator.line)
        if op == TokenType.EQUAL_EQUAL:
            return is_equal(a, b)
        if op == TokenType.BANG_EQUAL:
            return not is_equal(a, b)
        self.check_number_operands(operator, a, b)
        if op == TokenType.MINUS:
            return a - b
        if op == TokenType.STAR:
            return a * b
        if op == TokenType.SLASH:
            return self.divide(a, b)
        if op == TokenType.GREATER:
            return a > b
        if op == TokenType.GREATER_EQUAL:
            return a >= b
        if op == TokenType.LESS:
            return a < b
        if op == TokenType.LESS_EQUAL:
            return a <= b
        raise LoxRuntimeError(f"unknown binary operator {operator.lexeme}", operator.line)

    def divide(self, a: float, b: float) -> float:
        # IEEE-754: x/0 is +-inf, 0/0 is nan
        if b == 0.0:
            if a == 0.0 or a != a:
                return float('nan')
            return math.copysign(math.inf, a) * math.copysign(1.0, b)
        return a / b


def run_program(source: str, writer: Optional[TextIO] = None, reader: Any = None,
                debug_level: int = 0) -> Interpreter:
    """Scan, parse, resolve and run a Lox program; return the interpreter."""
    statements = parse_program(source)
    interpreter = Interpreter(writer=writer, reader=reader, debug_level=debug_level)
    Resolver(interpreter).resolve(statements)
    interpreter.interpret(statements)
    return interpreter
