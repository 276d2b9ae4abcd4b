from collections import deque, namedtuple

from .token import Token, TokenKind, LITERALS, BINARY
from .util import MissingLBracket, MissingRBracket


Postfix = namedtuple('Postfix', 'tokens arities')
Postfix.__doc__ = '''
Expression in postfix notation, ready for a Machine.

tokens and arities are both consumed from the left; arities holds the number
of arguments of each function call, in the order their WORD tokens appear.
'''


class Parser:
    '''
    Infix to postfix converter (shunting-yard).

    A series of tokens like 3 + 7 / (4 * 5 - 6) is converted to
    3 7 4 5 * 6 - / +.
    '''
    # Higher binds tighter. Brackets and words are 0, so no operator ever
    # pops them.
    PRECEDENCE = {
        TokenKind.GT: 1,
        TokenKind.LT: 1,
        TokenKind.GE: 1,
        TokenKind.LE: 1,
        TokenKind.EQ: 1,
        TokenKind.NE: 1,
        TokenKind.PLUS: 2,
        TokenKind.MINUS: 2,
        TokenKind.MULT: 3,
        TokenKind.DIV: 3,
        TokenKind.MOD: 3,
        TokenKind.UNARYMINUS: 4,
    }
    # What a binary minus must follow.
    OPERAND_ENDS = LITERALS | {TokenKind.RBRACKET}

    def __init__(self, infix):
        '''
        :param infix: Iterable of tokens, usually straight from the Lexer.
                      Consumed by to_postfix().
        '''
        self.infix = iter(infix)

    @classmethod
    def precedence(cls, token):
        return cls.PRECEDENCE.get(token.kind, 0)

    def to_postfix(self):
        '''
        Drain the infix tokens, returning them as a Postfix.
        '''
        postfix = deque()
        arities = deque()
        operators = []
        numargs = []
        previous = None

        for token in self.infix:
            kind = token.kind
            if previous is not None and previous.kind is TokenKind.WORD \
               and kind is not TokenKind.LBRACKET:
                raise MissingRBracket(
                    'Function {} is never called'.format(previous.payload))

            if kind in LITERALS:
                postfix.append(token)
            elif kind is TokenKind.MINUS and \
                    (previous is None or previous.kind not in self.OPERAND_ENDS):
                # Unary; nothing to its left to pop for.
                operators.append(Token(TokenKind.UNARYMINUS))
            elif kind in BINARY:
                while operators and \
                        self.precedence(operators[-1]) >= self.precedence(token):
                    postfix.append(operators.pop())
                operators.append(token)
            elif kind is TokenKind.LBRACKET:
                operators.append(token)
            elif kind is TokenKind.RBRACKET:
                self._unwind(operators, postfix)
                operators.pop()
                if operators and operators[-1].kind is TokenKind.WORD:
                    postfix.append(operators.pop())
                    arities.append(numargs.pop())
            elif kind is TokenKind.DELIM:
                if not numargs:
                    raise MissingLBracket('Argument delimiter outside a call')
                numargs[-1] += 1
                self._unwind(operators, postfix)
            elif kind is TokenKind.WORD:
                numargs.append(1)
                operators.append(token)
            elif kind is TokenKind.EOL:
                break
            previous = token

        if previous is not None and previous.kind is TokenKind.WORD:
            raise MissingRBracket(
                'Function {} is never called'.format(previous.payload))
        while operators:
            top = operators.pop()
            if top.kind is TokenKind.LBRACKET:
                raise MissingRBracket('Unclosed bracket')
            postfix.append(top)
        return Postfix(postfix, arities)

    def _unwind(self, operators, postfix):
        '''
        Move operators to output up to (not including) the innermost bracket.
        '''
        while operators and operators[-1].kind is not TokenKind.LBRACKET:
            postfix.append(operators.pop())
        if not operators:
            raise MissingLBracket('Unopened bracket')


def convert(tokens):
    '''
    Convert an infix token sequence to a Postfix, consuming tokens.
    '''
    return Parser(tokens).to_postfix()
