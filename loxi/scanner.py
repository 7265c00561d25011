"""Lexical scanner for Lox source text.

The scanner makes a single left-to-right pass over the source with one
character of lookahead (two when deciding whether a ``.`` starts the
fractional part of a number). Lexical defects do not stop the pass: each one
is recorded and scanning resumes at the next character, so a single run
reports every problem in the file.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .errors import LexError
from .tokens import KEYWORDS, Token, TokenType

SINGLE_CHAR_TOKENS = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    ';': TokenType.SEMICOLON,
    '*': TokenType.STAR,
}

# first char -> (second char, two-char type, one-char type)
ONE_OR_TWO_CHAR_TOKENS = {
    '!': ('=', TokenType.BANG_EQUAL, TokenType.BANG),
    '=': ('=', TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    '<': ('=', TokenType.LESS_EQUAL, TokenType.LESS),
    '>': ('=', TokenType.GREATER_EQUAL, TokenType.GREATER),
    '+': ('+', TokenType.PLUS_PLUS, TokenType.PLUS),
    '-': ('-', TokenType.MINUS_MINUS, TokenType.MINUS),
}


def is_alpha(c: str) -> bool:
    return c.isalpha() or c == '_'


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


class Scanner:
    """Turns a source string into a list of tokens plus a list of errors."""

    def __init__(self, source: str):
        self.source = source
        self.tokens: List[Token] = []
        self.errors: List[LexError] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan(self) -> Tuple[List[Token], List[LexError]]:
        while not self.at_end():
            self.start = self.current
            self.scan_token()
        self.tokens.append(Token(TokenType.EOF, '', None, self.line))
        return self.tokens, self.errors

    def scan_token(self) -> None:
        c = self.advance()
        if c in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[c])
            return
        if c in ONE_OR_TWO_CHAR_TOKENS:
            second, double, single = ONE_OR_TWO_CHAR_TOKENS[c]
            self.add_token(double if self.match(second) else single)
            return
        if c == '/':
            if self.match('/'):
                # leave the newline so the line counter still sees it
                while self.peek() != '\n' and not self.at_end():
                    self.advance()
            else:
                self.add_token(TokenType.SLASH)
            return
        if c in ' \r\t':
            return
        if c == '\n':
            self.line += 1
            return
        if c == '"':
            self.read_string()
            return
        if is_digit(c):
            self.read_number()
            return
        if is_alpha(c):
            self.read_identifier()
            return
        self.errors.append(LexError(f"unexpected character {c!r}", self.line))

    def read_string(self) -> None:
        start_line = self.line
        while self.peek() != '"' and not self.at_end():
            if self.peek() == '\n':
                self.line += 1
            self.advance()
        if self.at_end():
            self.errors.append(LexError('unterminated string', start_line))
            return
        self.advance()  # closing quote
        value = self.source[self.start + 1:self.current - 1]
        self.add_token(TokenType.STRING, value)

    def read_number(self) -> None:
        while is_digit(self.peek()):
            self.advance()
        # a trailing '.' without digits is left for the DOT token
        if self.peek() == '.' and is_digit(self.peek_next()):
            self.advance()
            while is_digit(self.peek()):
                self.advance()
        self.add_token(TokenType.NUMBER, float(self.lexeme()))

    def read_identifier(self) -> None:
        while is_alpha(self.peek()) or is_digit(self.peek()):
            self.advance()
        self.add_token(KEYWORDS.get(self.lexeme(), TokenType.IDENTIFIER))

    def add_token(self, type_: TokenType, literal: Optional[object] = None) -> None:
        self.tokens.append(Token(type_, self.lexeme(), literal, self.line))

    def lexeme(self) -> str:
        return self.source[self.start:self.current]

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def match(self, expected: str) -> bool:
        if self.at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self) -> str:
        if self.at_end():
            return '\0'
        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return '\0'
        return self.source[self.current + 1]

    def at_end(self) -> bool:
        return self.current >= len(self.source)


def scan_tokens(source: str) -> List[Token]:
    """Scan ``source`` and return its tokens.

    Raises a single LexError listing every lexical defect if there were any;
    the partial token list is discarded in that case.
    """
    tokens, errors = Scanner(source).scan()
    if errors:
        raise LexError.join(errors)
    return tokens
