from collections import namedtuple
from enum import Enum


class TokenKind(Enum):
    '''
    Kinds of lexemes the lexer produces and the parser consumes.
    '''
    NUMBER = 'number'
    STRING = 'string'
    WORD = 'word'

    PLUS = '+'
    MINUS = '-'
    MULT = '*'
    DIV = '/'
    MOD = '%'
    # Never lexed; the parser rewrites a MINUS into this.
    UNARYMINUS = '_'

    GT = '>'
    LT = '<'
    GE = '>='
    LE = '<='
    EQ = '=='
    NE = '!='

    LBRACKET = '('
    RBRACKET = ')'
    DELIM = ','
    EOL = 'eol'


class Token(namedtuple('Token', 'kind payload')):
    '''
    Immutable lexeme.

    :param kind: A TokenKind.
    :param payload: float for numbers, str for strings and words, else None.
    '''
    __slots__ = ()

    def __new__(cls, kind, payload=None):
        return super().__new__(cls, kind, payload)

    def __str__(self):
        if self.payload is None:
            return self.kind.value
        return repr(self.payload)


# Operands, as opposed to operators or punctuation.
LITERALS = frozenset({TokenKind.NUMBER, TokenKind.STRING})
ARITHMETIC = frozenset({TokenKind.PLUS, TokenKind.MINUS,
                        TokenKind.MULT, TokenKind.DIV, TokenKind.MOD})
COMPARISON = frozenset({TokenKind.GT, TokenKind.LT,
                        TokenKind.GE, TokenKind.LE, TokenKind.EQ,
                        TokenKind.NE})
BINARY = ARITHMETIC | COMPARISON
