import pytest

from fnscript import tokens as T
from fnscript.errors import LexerError
from fnscript.lexer import Lexer, tokenize
from fnscript.types import format_number


def types_of(source):
    return [tok.type for tok in tokenize(source)]


def test_empty_source_is_just_eof():
    toks = tokenize('')
    assert len(toks) == 1
    assert toks[0].type == T.EOF


def test_import_with_alias():
    assert types_of('import request -> req from http_request') == [
        T.IMPORT, T.IDENT, T.ARROW, T.IDENT, T.FROM, T.IDENT, T.EOF,
    ]


def test_structural_symbols():
    assert types_of('( ) , : < > =') == [
        T.LPAREN, T.RPAREN, T.COMMA, T.COLON, T.LT, T.GT, T.ASSIGN, T.EOF,
    ]


def test_lone_dash_is_dropped():
    assert types_of('otherwise - ret') == [T.OTHERWISE, T.RET, T.EOF]
    assert types_of('- then,') == [T.THEN, T.COMMA, T.EOF]


def test_keywords_operators_and_booleans():
    toks = tokenize('if then otherwise run ret plus and same not equal true false other')
    assert [t.type for t in toks] == [
        T.IF, T.THEN, T.OTHERWISE, T.RUN, T.RET,
        T.OPERATOR, T.OPERATOR, T.OPERATOR, T.OPERATOR,
        T.IDENT, T.BOOLEAN, T.BOOLEAN, T.IDENT, T.EOF,
    ]
    assert [t.value for t in toks[5:9]] == ['plus', 'and', 'same', 'not']
    assert toks[10].value is True
    assert toks[11].value is False


def test_underscore_words():
    toks = tokenize('__fn __ _helper')
    assert [t.type for t in toks] == [T.FN_START, T.BLOCK_END, T.IDENT, T.EOF]
    assert toks[2].value == '_helper'


def test_identifiers_may_contain_digits_and_underscores():
    toks = tokenize('value_2x')
    assert toks[0].type == T.IDENT
    assert toks[0].value == 'value_2x'


def test_string_literal_has_no_escape_processing():
    toks = tokenize(r'"a\nb"')
    assert toks[0].type == T.STRING
    assert toks[0].value == 'a\\nb'


def test_empty_string_literal():
    toks = tokenize('""')
    assert toks[0].type == T.STRING
    assert toks[0].value == ''


@pytest.mark.parametrize('text', ['0', '3', '3.25', '10.5', '0.1', '123456789.125', '1.'])
def test_number_round_trip(text):
    tok = tokenize(text)[0]
    assert tok.type == T.NUMBER
    assert isinstance(tok.value, float)
    assert float(format_number(tok.value)) == tok.value
    assert tok.value == float(text)


def test_malformed_number_is_fatal():
    with pytest.raises(LexerError):
        tokenize('ret 1.2.3')


def test_unterminated_string_is_fatal():
    with pytest.raises(LexerError) as info:
        tokenize('ret "never closed')
    assert info.value.line == 1
    assert info.value.column == 5


def test_unknown_characters_are_discarded():
    assert types_of('@ # $ ; ! x') == [T.IDENT, T.EOF]


def test_strict_mode_reports_discarded_characters():
    lexer = Lexer('x @ y', strict=True)
    toks = lexer.tokenize()
    assert [t.type for t in toks] == [T.IDENT, T.IDENT, T.EOF]
    assert len(lexer.diagnostics) == 1
    assert lexer.diagnostics[0].column == 3
    assert '@' in lexer.diagnostics[0].message


def test_best_effort_mode_collects_nothing():
    lexer = Lexer('x @ y')
    lexer.tokenize()
    assert lexer.diagnostics == []


def test_positions_are_tracked():
    toks = tokenize('import\n  request')
    assert (toks[0].line, toks[0].column) == (1, 1)
    assert (toks[1].line, toks[1].column) == (2, 3)
    assert toks[-1].type == T.EOF


def test_eof_is_always_last():
    toks = tokenize('__fn = (a) ret a __ ???')
    assert toks[-1].type == T.EOF
    assert sum(1 for t in toks if t.type == T.EOF) == 1
