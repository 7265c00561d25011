import hypothesis.strategies as st
import pytest
from hypothesis import given

from loxi.errors import LexError
from loxi.scanner import Scanner, scan_tokens
from loxi.tokens import TokenType


def types_of(source):
    return [t.type for t in scan_tokens(source)]


def test_scan_number():
    tokens = scan_tokens("123")
    assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.EOF]
    assert tokens[0].literal == 123.0
    assert isinstance(tokens[0].literal, float)


def test_scan_declaration():
    tokens = scan_tokens("var x=3.3")
    assert [t.type for t in tokens] == [
        TokenType.VAR, TokenType.IDENTIFIER, TokenType.EQUAL, TokenType.NUMBER, TokenType.EOF,
    ]
    assert tokens[1].lexeme == 'x'
    assert tokens[3].literal == 3.3


def test_scan_one_or_two_char_operators():
    assert types_of("! != = == < <= > >=") == [
        TokenType.BANG, TokenType.BANG_EQUAL, TokenType.EQUAL, TokenType.EQUAL_EQUAL,
        TokenType.LESS, TokenType.LESS_EQUAL, TokenType.GREATER, TokenType.GREATER_EQUAL,
        TokenType.EOF,
    ]


def test_scan_increment_and_decrement():
    assert types_of("i++ j-- +-") == [
        TokenType.IDENTIFIER, TokenType.PLUS_PLUS, TokenType.IDENTIFIER, TokenType.MINUS_MINUS,
        TokenType.PLUS, TokenType.MINUS, TokenType.EOF,
    ]


def test_trailing_dot_is_not_part_of_number():
    tokens = scan_tokens("1.")
    assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.DOT, TokenType.EOF]
    assert tokens[0].literal == 1.0


def test_keywords_and_identifiers():
    assert types_of("and or fun while _name print") == [
        TokenType.AND, TokenType.OR, TokenType.FUN, TokenType.WHILE,
        TokenType.IDENTIFIER, TokenType.IDENTIFIER, TokenType.EOF,
    ]


def test_string_literal_strips_quotes():
    tokens = scan_tokens('"hi there"')
    assert tokens[0].type is TokenType.STRING
    assert tokens[0].literal == 'hi there'
    assert tokens[0].lexeme == '"hi there"'


def test_comments_and_line_numbers():
    tokens = scan_tokens('var a;\n// a comment\nprint(a);')
    assert tokens[0].line == 1
    print_token = [t for t in tokens if t.lexeme == 'print'][0]
    assert print_token.line == 3
    assert tokens[-1].type is TokenType.EOF
    assert tokens[-1].line == 3


def test_multiline_string_advances_line():
    tokens = scan_tokens('"one\ntwo" x')
    assert tokens[0].line == 2
    assert tokens[1].line == 2


def test_all_errors_reported_in_one_pass():
    tokens, errors = Scanner('@ var # "open').scan()
    assert len(errors) == 3
    assert errors[0].line == 1
    assert tokens[-1].type is TokenType.EOF
    with pytest.raises(LexError) as exc:
        scan_tokens('@ var # "open')
    assert len(exc.value.errors) == 3
    assert 'unexpected character' in str(exc.value)
    assert 'unterminated string' in str(exc.value)


def test_unterminated_string_reports_starting_line():
    _, errors = Scanner('\n"abc\ndef').scan()
    assert [e.line for e in errors] == [2]


@given(st.text())
def test_eof_is_last_and_unique(source):
    tokens, _ = Scanner(source).scan()
    assert tokens[-1].type is TokenType.EOF
    assert sum(1 for t in tokens if t.type is TokenType.EOF) == 1


@given(st.integers(min_value=0, max_value=10 ** 12))
def test_integer_literals_are_floats(n):
    tokens = scan_tokens(str(n))
    assert tokens[0].literal == float(n)
