from collections import deque
import math
import operator

from .token import TokenKind, ARITHMETIC, COMPARISON
from .value import Value, EMPTY
from .util import MissingArg, MissingLBracket, MissingRBracket
from .lexer import tokenize
from .parser import convert
from .registry import Registry


def _truediv(left, right):
    '''
    IEEE 754 division: dividing by zero gives an infinity or NaN.
    '''
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


def _fmod(left, right):
    '''
    IEEE 754 (truncated) remainder: never raises, NaN where undefined.
    '''
    if right == 0 or math.isinf(left):
        return math.nan
    return math.fmod(left, right)


class Machine:
    '''
    Postfix stack machine.

    Takes the output of the Parser and runs it, resolving function calls
    against a Registry.
    '''

    ARITHMETIC = {
        TokenKind.PLUS: operator.__add__,
        TokenKind.MINUS: operator.__sub__,
        TokenKind.MULT: operator.__mul__,
        TokenKind.DIV: _truediv,
        TokenKind.MOD: _fmod,
    }
    COMPARISON = {
        TokenKind.GT: operator.__gt__,
        TokenKind.LT: operator.__lt__,
        TokenKind.GE: operator.__ge__,
        TokenKind.LE: operator.__le__,
        TokenKind.EQ: operator.__eq__,
        TokenKind.NE: operator.__ne__,
    }

    def __init__(self, registry=None):
        '''
        Create empty stack machine.

        :param registry: Where to look up functions. Defaults to a fresh
                         Registry with only the builtin namespace.
        '''
        self.registry = Registry() if registry is None else registry
        self.stack = deque()

    def evaluate(self, postfix, arities):
        '''
        Run postfix tokens, returning the resulting Value.

        Consumes both postfix and arities. An empty expression results in
        the empty string.
        '''
        if not isinstance(postfix, deque):
            postfix = deque(postfix)
        if not isinstance(arities, deque):
            arities = deque(arities)
        self.stack.clear()
        try:
            while postfix:
                self.feed(postfix.popleft(), arities)
            return self.stack.pop() if self.stack else EMPTY
        finally:
            self.stack.clear()

    def feed(self, token, arities):
        '''
        Push or apply a single postfix token.
        '''
        kind = token.kind
        if kind is TokenKind.NUMBER:
            self._pshstack(Value.number(token.payload))
        elif kind is TokenKind.STRING:
            self._pshstack(Value.string(token.payload))
        elif kind is TokenKind.UNARYMINUS:
            only, = self._popstack()
            if not only.isnumber:
                raise MissingArg('Cannot negate {!r}'.format(only.data))
            self._pshstack(Value.number(-only.data))
        elif kind in ARITHMETIC or kind in COMPARISON:
            right, left = self._popstack(2)
            self._pshstack(self._binary(kind, left, right))
        elif kind is TokenKind.WORD:
            if not arities:
                raise MissingLBracket(
                    'No arguments for {}'.format(token.payload))
            # If you don't reverse, you'll call f(b, a) instead of f(a, b).
            args = list(reversed(self._popstack(arities.popleft())))
            self._pshstack(self.registry.resolve(token.payload, args))
        elif kind is TokenKind.LBRACKET:
            raise MissingRBracket('Unclosed bracket')

    def _binary(self, kind, left, right):
        if left.isempty:
            left = Value.number(0.0)
        if right.isempty:
            right = Value.number(0.0)

        if left.isnumber and right.isnumber:
            if kind in ARITHMETIC:
                return Value.number(self.ARITHMETIC[kind](left.data,
                                                          right.data))
            return Value.boolean(self.COMPARISON[kind](left.data, right.data))
        elif left.isboolean and right.isboolean:
            if kind in (TokenKind.EQ, TokenKind.NE):
                return Value.boolean(self.COMPARISON[kind](left.data,
                                                           right.data))
        elif kind is TokenKind.PLUS:
            return Value.string(left.to_text() + right.to_text())
        raise MissingArg('Cannot apply {} to {!r} and {!r}'.format(
            kind.value, left.data, right.data))

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n=1):
        '''
        Pop specified number of args from stack, topmost first.
        '''
        if len(self.stack) < n:
            raise MissingArg('Less than {} element(s) on stack'.format(n))
        return [self.stack.pop() for _ in range(n)]


def evaluate(postfix, arities, registry=None):
    '''
    Evaluate postfix tokens with their function arities against registry.
    '''
    return Machine(registry).evaluate(postfix, arities)


def calculate(text, registry=None):
    '''
    Lex, parse and evaluate text in one go.
    '''
    postfix = convert(tokenize(text))
    return evaluate(postfix.tokens, postfix.arities, registry)
