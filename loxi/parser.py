"""Pratt parser for Lox.

Statements are parsed by looking the leading token up in a table of
statement parselets; anything not in the table is an expression statement.
Expressions are parsed by precedence climbing over two tables:

* prefix parselets, keyed by the token that starts an expression
  (literals, names, unary operators, grouping, ``fun`` lambdas);
* infix parselets, keyed by the token that follows a complete left operand
  (binary and logical operators, assignment, postfix ``++``/``--``, calls).

``parse_expr(min_precedence)`` consumes a prefix, then keeps folding infix
operators into the left operand while the next token binds tighter than
``min_precedence``. Every infix parselet recurses at its own precedence,
which makes the operators left associative; assignment recurses one level
lower, which makes it right associative.

Two constructs are desugared here so that later stages never see them:

* ``fun name(params) { body }`` becomes ``var name = fun (params) { body };``
* ``for (init; cond; incr) body`` becomes
  ``{ init; while (cond) body }`` with ``incr`` attached to the loop as its
  increment, so it also runs after ``continue``. ``cond`` defaults to
  ``true``.

Parsing stops at the first error; there is no resynchronisation.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, List, NoReturn, Optional

from .ast import (
    Assignment, Binary, Block, Break, Call, Continue, Declaration, Expr,
    Expression, Grouping, If, Lambda, Literal, Logical, PostUnary, Return,
    Stmt, Unary, Variable, While,
)
from .errors import ParseError
from .scanner import scan_tokens
from .tokens import Token, TokenType

MAX_ARGUMENTS = 255


class Precedence(IntEnum):
    NONE = 0
    ASSIGNMENT = 1  # =
    OR = 2          # or
    AND = 3         # and
    EQUALITY = 4    # == !=
    COMPARISON = 5  # < <= > >=
    TERM = 6        # + -
    FACTOR = 7      # * /
    UNARY = 8       # ! -
    POSTFIX = 9     # ++ --
    CALL = 10       # ()


###############################################################################
# Prefix parselets
###############################################################################

class UnaryParselet:
    def parse(self, parser: 'Parser', token: Token) -> Expr:
        right = parser.parse_expr(Precedence.UNARY)
        return Unary(token, right)


class LiteralParselet:
    def parse(self, parser: 'Parser', token: Token) -> Expr:
        if token.type is TokenType.TRUE:
            return Literal(True)
        if token.type is TokenType.FALSE:
            return Literal(False)
        # NUMBER and STRING carry their decoded literal; NIL carries None
        return Literal(token.literal)


class VariableParselet:
    def parse(self, parser: 'Parser', token: Token) -> Expr:
        return Variable(token)


class GroupParselet:
    def parse(self, parser: 'Parser', token: Token) -> Expr:
        expr = parser.parse_expr()
        parser.consume(TokenType.RIGHT_PAREN, "expected ')' after expression")
        return Grouping(expr)


class LambdaParselet:
    def parse(self, parser: 'Parser', token: Token) -> Expr:
        return parser.parse_function(token, name=None)


###############################################################################
# Infix parselets
###############################################################################

class BinaryParselet:
    def __init__(self, precedence: Precedence):
        self.precedence = precedence

    def parse(self, parser: 'Parser', left: Expr, token: Token) -> Expr:
        right = parser.parse_expr(self.precedence)
        return Binary(left, token, right)


class LogicalParselet:
    def __init__(self, precedence: Precedence):
        self.precedence = precedence

    def parse(self, parser: 'Parser', left: Expr, token: Token) -> Expr:
        right = parser.parse_expr(self.precedence)
        return Logical(left, token, right)


class AssignmentParselet:
    precedence = Precedence.ASSIGNMENT

    def parse(self, parser: 'Parser', left: Expr, token: Token) -> Expr:
        value = parser.parse_expr(Precedence.ASSIGNMENT - 1)
        if not isinstance(left, Variable):
            raise ParseError(
                f"at '{token.lexeme}': left hand side of assignment must be a variable",
                token.line,
            )
        return Assignment(left.name, value)


class PostfixParselet:
    precedence = Precedence.POSTFIX

    def parse(self, parser: 'Parser', left: Expr, token: Token) -> Expr:
        return PostUnary(left, token)


class CallParselet:
    precedence = Precedence.CALL

    def parse(self, parser: 'Parser', left: Expr, token: Token) -> Expr:
        args: List[Expr] = []
        if not parser.check(TokenType.RIGHT_PAREN):
            while True:
                if len(args) >= MAX_ARGUMENTS:
                    parser.error(parser.peek(), f"can't have more than {MAX_ARGUMENTS} arguments")
                args.append(parser.parse_expr())
                if not parser.match(TokenType.COMMA):
                    break
        paren = parser.consume(TokenType.RIGHT_PAREN, "expected ')' after arguments")
        return Call(left, args, paren)


PREFIX_PARSELETS: Dict[TokenType, object] = {
    TokenType.MINUS: UnaryParselet(),
    TokenType.BANG: UnaryParselet(),
    TokenType.NUMBER: LiteralParselet(),
    TokenType.STRING: LiteralParselet(),
    TokenType.NIL: LiteralParselet(),
    TokenType.TRUE: LiteralParselet(),
    TokenType.FALSE: LiteralParselet(),
    TokenType.IDENTIFIER: VariableParselet(),
    TokenType.LEFT_PAREN: GroupParselet(),
    TokenType.FUN: LambdaParselet(),
}

INFIX_PARSELETS: Dict[TokenType, object] = {
    TokenType.EQUAL: AssignmentParselet(),
    TokenType.OR: LogicalParselet(Precedence.OR),
    TokenType.AND: LogicalParselet(Precedence.AND),
    TokenType.EQUAL_EQUAL: BinaryParselet(Precedence.EQUALITY),
    TokenType.BANG_EQUAL: BinaryParselet(Precedence.EQUALITY),
    TokenType.LESS: BinaryParselet(Precedence.COMPARISON),
    TokenType.LESS_EQUAL: BinaryParselet(Precedence.COMPARISON),
    TokenType.GREATER: BinaryParselet(Precedence.COMPARISON),
    TokenType.GREATER_EQUAL: BinaryParselet(Precedence.COMPARISON),
    TokenType.PLUS: BinaryParselet(Precedence.TERM),
    TokenType.MINUS: BinaryParselet(Precedence.TERM),
    TokenType.STAR: BinaryParselet(Precedence.FACTOR),
    TokenType.SLASH: BinaryParselet(Precedence.FACTOR),
    TokenType.PLUS_PLUS: PostfixParselet(),
    TokenType.MINUS_MINUS: PostfixParselet(),
    TokenType.LEFT_PAREN: CallParselet(),
}


###############################################################################
# Statement parselets
###############################################################################

class ExpressionStatementParselet:
    def parse(self, parser: 'Parser') -> Stmt:
        expr = parser.parse_expr()
        parser.consume(TokenType.SEMICOLON, "expected ';' after expression")
        return Expression(expr)


class DeclarationParselet:
    def parse(self, parser: 'Parser') -> Stmt:
        parser.advance()  # var
        name = parser.consume(TokenType.IDENTIFIER, 'expected variable name')
        initializer: Optional[Expr] = None
        if parser.match(TokenType.EQUAL):
            initializer = parser.parse_expr()
        parser.consume(TokenType.SEMICOLON, "expected ';' after variable declaration")
        return Declaration(name, initializer)


class FunctionDeclarationParselet:
    def parse(self, parser: 'Parser') -> Stmt:
        if parser.peek_next().type is not TokenType.IDENTIFIER:
            # an anonymous lambda in statement position
            return ExpressionStatementParselet().parse(parser)
        keyword = parser.advance()  # fun
        name = parser.advance()
        return Declaration(name, parser.parse_function(keyword, name))


class BlockParselet:
    def parse(self, parser: 'Parser') -> Stmt:
        return Block(parser.parse_block())


class IfParselet:
    def parse(self, parser: 'Parser') -> Stmt:
        parser.advance()  # if
        parser.consume(TokenType.LEFT_PAREN, "expected '(' after 'if'")
        condition = parser.parse_expr()
        parser.consume(TokenType.RIGHT_PAREN, "expected ')' after if condition")
        then_branch = parser.parse_statement()
        else_branch = None
        if parser.match(TokenType.ELSE):
            else_branch = parser.parse_statement()
        return If(condition, then_branch, else_branch)


class WhileParselet:
    def parse(self, parser: 'Parser') -> Stmt:
        parser.advance()  # while
        parser.consume(TokenType.LEFT_PAREN, "expected '(' after 'while'")
        condition = parser.parse_expr()
        parser.consume(TokenType.RIGHT_PAREN, "expected ')' after while condition")
        body = parser.parse_statement()
        return While(condition, body)


class ForParselet:
    def parse(self, parser: 'Parser') -> Stmt:
        parser.advance()  # for
        parser.consume(TokenType.LEFT_PAREN, "expected '(' after 'for'")

        initializer: Optional[Stmt]
        if parser.match(TokenType.SEMICOLON):
            initializer = None
        elif parser.check(TokenType.VAR):
            initializer = DeclarationParselet().parse(parser)
        else:
            initializer = ExpressionStatementParselet().parse(parser)

        condition: Optional[Expr] = None
        if not parser.check(TokenType.SEMICOLON):
            condition = parser.parse_expr()
        parser.consume(TokenType.SEMICOLON, "expected ';' after loop condition")

        increment: Optional[Expr] = None
        if not parser.check(TokenType.RIGHT_PAREN):
            increment = parser.parse_expr()
        parser.consume(TokenType.RIGHT_PAREN, "expected ')' after for clauses")

        body = parser.parse_statement()
        if condition is None:
            condition = Literal(True)
        loop: Stmt = While(condition, body, increment)
        if initializer is not None:
            loop = Block([initializer, loop])
        return loop


class BreakParselet:
    def parse(self, parser: 'Parser') -> Stmt:
        keyword = parser.advance()
        parser.consume(TokenType.SEMICOLON, "expected ';' after 'break'")
        return Break(keyword)


class ContinueParselet:
    def parse(self, parser: 'Parser') -> Stmt:
        keyword = parser.advance()
        parser.consume(TokenType.SEMICOLON, "expected ';' after 'continue'")
        return Continue(keyword)


class ReturnParselet:
    def parse(self, parser: 'Parser') -> Stmt:
        keyword = parser.advance()
        value: Optional[Expr] = None
        if not parser.check(TokenType.SEMICOLON):
            value = parser.parse_expr()
        parser.consume(TokenType.SEMICOLON, "expected ';' after return value")
        return Return(keyword, value)


STATEMENT_PARSELETS: Dict[TokenType, object] = {
    TokenType.LEFT_BRACE: BlockParselet(),
    TokenType.VAR: DeclarationParselet(),
    TokenType.FUN: FunctionDeclarationParselet(),
    TokenType.IF: IfParselet(),
    TokenType.WHILE: WhileParselet(),
    TokenType.FOR: ForParselet(),
    TokenType.BREAK: BreakParselet(),
    TokenType.CONTINUE: ContinueParselet(),
    TokenType.RETURN: ReturnParselet(),
}

EXPRESSION_STATEMENT = ExpressionStatementParselet()


###############################################################################
# Parser
###############################################################################

class Parser:
    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].type is not TokenType.EOF:
            raise ValueError('token stream must end with EOF')
        self.tokens = tokens
        self.pos = 0

    def parse(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.at_end():
            try:
                statements.append(self.parse_statement())
            except ParseError as err:
                err.statements = statements
                raise
        return statements

    def parse_statement(self) -> Stmt:
        parselet = STATEMENT_PARSELETS.get(self.peek().type, EXPRESSION_STATEMENT)
        return parselet.parse(self)

    def parse_expr(self, precedence: int = Precedence.NONE) -> Expr:
        token = self.advance()
        prefix = PREFIX_PARSELETS.get(token.type)
        if prefix is None:
            self.error(token, 'expected expression')
        left = prefix.parse(self, token)
        while precedence < self.next_precedence():
            token = self.advance()
            infix = INFIX_PARSELETS[token.type]
            left = infix.parse(self, left, token)
        return left

    def next_precedence(self) -> int:
        infix = INFIX_PARSELETS.get(self.peek().type)
        if infix is None:
            return Precedence.NONE
        return infix.precedence

    def parse_block(self) -> List[Stmt]:
        self.consume(TokenType.LEFT_BRACE, "expected '{' before block")
        statements: List[Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.at_end():
            statements.append(self.parse_statement())
        self.consume(TokenType.RIGHT_BRACE, "expected '}' after block")
        return statements

    def parse_function(self, keyword: Token, name: Optional[Token]) -> Lambda:
        what = 'function name' if name is not None else "'fun'"
        self.consume(TokenType.LEFT_PAREN, f"expected '(' after {what}")
        params: List[Token] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGUMENTS:
                    self.error(self.peek(), f"can't have more than {MAX_ARGUMENTS} parameters")
                params.append(self.consume(TokenType.IDENTIFIER, 'expected parameter name'))
                if not self.match(TokenType.COMMA):
                    break
        self.consume(TokenType.RIGHT_PAREN, "expected ')' after parameters")
        if not self.check(TokenType.LEFT_BRACE):
            self.error(self.peek(), "expected '{' before function body")
        body = self.parse_block()
        return Lambda(keyword, params, body, name)

    # Token helpers

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def peek_next(self) -> Token:
        return self.tokens[min(self.pos + 1, len(self.tokens) - 1)]

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.type is not TokenType.EOF:
            self.pos += 1
        return token

    def at_end(self) -> bool:
        return self.peek().type is TokenType.EOF

    def check(self, type_: TokenType) -> bool:
        return self.peek().type is type_

    def match(self, type_: TokenType) -> bool:
        if self.check(type_):
            self.advance()
            return True
        return False

    def consume(self, type_: TokenType, message: str) -> Token:
        if self.check(type_):
            return self.advance()
        self.error(self.peek(), message)

    def error(self, token: Token, message: str) -> NoReturn:
        where = 'at end' if token.type is TokenType.EOF else f"at '{token.lexeme}'"
        raise ParseError(f"{where}: {message}", token.line)


def parse(tokens: List[Token]) -> List[Stmt]:
    """Parse a token stream into a list of statements."""
    return Parser(tokens).parse()


def parse_program(source: str) -> List[Stmt]:
    """Scan and parse Lox source code."""
    return parse(scan_tokens(source))


def parse_expression(source: str) -> Expr:
    """Scan and parse a single expression; trailing tokens are an error."""
    parser = Parser(scan_tokens(source))
    expr = parser.parse_expr()
    if not parser.at_end():
        parser.error(parser.peek(), 'expected end of expression')
    return expr
