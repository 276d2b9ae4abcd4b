'''
Lexer tests
'''

from infix.token import Token, TokenKind
from infix.util import UnterminatedString, MalformedNumber
from infix.lexer import Lexer, tokenize

from pytest import raises


def kinds(text):
    return [token.kind for token in tokenize(text)]


def test_arithmetic():
    assert kinds('3 + 7 / (4 * 5 - 6)') == [
        TokenKind.NUMBER, TokenKind.PLUS, TokenKind.NUMBER, TokenKind.DIV,
        TokenKind.LBRACKET, TokenKind.NUMBER, TokenKind.MULT,
        TokenKind.NUMBER, TokenKind.MINUS, TokenKind.NUMBER,
        TokenKind.RBRACKET, TokenKind.EOL,
    ]


def test_empty():
    assert list(tokenize('')) == [Token(TokenKind.EOL)]
    assert list(tokenize(' \t\r\n\f')) == [Token(TokenKind.EOL)]


def test_single_eol():
    tokens = list(tokenize('max(1, 2) % 3'))
    assert tokens[-1] == Token(TokenKind.EOL)
    assert [token.kind for token in tokens].count(TokenKind.EOL) == 1


def test_numbers():
    assert list(tokenize('12.5 .5 3')) == [
        Token(TokenKind.NUMBER, 12.5),
        Token(TokenKind.NUMBER, 0.5),
        Token(TokenKind.NUMBER, 3.0),
        Token(TokenKind.EOL),
    ]


def test_number_then_word():
    assert list(tokenize('3abc')) == [
        Token(TokenKind.NUMBER, 3.0),
        Token(TokenKind.WORD, 'abc'),
        Token(TokenKind.EOL),
    ]


def test_word_keeps_digits():
    assert list(tokenize('log10(100)'))[:2] == [
        Token(TokenKind.WORD, 'log10'),
        Token(TokenKind.LBRACKET),
    ]


def test_malformed_number():
    with raises(MalformedNumber, match='1.2.3'):
        list(tokenize('1 + 1.2.3'))


def test_lone_point():
    with raises(MalformedNumber):
        list(tokenize('.'))


def test_string_verbatim():
    assert list(tokenize(r'"a (b) \, 3" + 1'))[:2] == [
        Token(TokenKind.STRING, r'a (b) \, 3'),
        Token(TokenKind.PLUS),
    ]


def test_empty_string():
    assert list(tokenize('""')) == [
        Token(TokenKind.STRING, ''),
        Token(TokenKind.EOL),
    ]


def test_string_ends_word():
    assert kinds('abc"d"') == [TokenKind.WORD, TokenKind.STRING,
                               TokenKind.EOL]


def test_unterminated_string():
    with raises(UnterminatedString):
        list(tokenize('1 + "abc'))


def test_lazy():
    # Nothing is lexed until asked for.
    tokens = tokenize('1 "abc')
    assert next(tokens) == Token(TokenKind.NUMBER, 1.0)
    with raises(UnterminatedString):
        next(tokens)


def test_unknown_characters_dropped():
    assert list(tokenize('3 $ 4 #')) == [
        Token(TokenKind.NUMBER, 3.0),
        Token(TokenKind.NUMBER, 4.0),
        Token(TokenKind.EOL),
    ]


def test_unknown_character_ends_number():
    assert kinds('3$4') == [TokenKind.NUMBER, TokenKind.NUMBER,
                            TokenKind.EOL]


def test_comparisons():
    assert kinds('1>=2<3==4=5<=6>7') == [
        TokenKind.NUMBER, TokenKind.GE, TokenKind.NUMBER, TokenKind.LT,
        TokenKind.NUMBER, TokenKind.EQ, TokenKind.NUMBER, TokenKind.EQ,
        TokenKind.NUMBER, TokenKind.LE, TokenKind.NUMBER, TokenKind.GT,
        TokenKind.NUMBER, TokenKind.EOL,
    ]


def test_unicode_letters():
    assert list(tokenize('ñandú'))[0] == Token(TokenKind.WORD, 'ñandú')


def test_stateless():
    lexer = Lexer()
    assert list(lexer.lex('1')) == list(lexer.lex('1'))


def test_not_equal():
    assert kinds('3 != 4') == [TokenKind.NUMBER, TokenKind.NE,
                               TokenKind.NUMBER, TokenKind.EOL]


def test_lone_exclamation_dropped():
    assert kinds('3 ! 4') == [TokenKind.NUMBER, TokenKind.NUMBER,
                              TokenKind.EOL]
