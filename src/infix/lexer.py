from enum import Enum

import regex

from .token import Token, TokenKind
from .util import UnterminatedString, MalformedNumber, wrap_user_errors


class State(Enum):
    '''
    What the lexer is in the middle of reading.
    '''
    NONE = 0
    NUMBER = 1
    WORD = 2


class Lexer:
    '''
    Lexer for infix expressions.

    A small state machine rather than one big regex: numbers and words are
    accumulated character by character and only become tokens once something
    else comes along. For consistency with the other stages, needs to be
    instantiated, despite holding no state between calls.
    '''
    # Single characters that are complete tokens by themselves.
    IMMEDIATE = {
        '+': TokenKind.PLUS,
        '-': TokenKind.MINUS,
        '*': TokenKind.MULT,
        '/': TokenKind.DIV,
        '%': TokenKind.MOD,
        '(': TokenKind.LBRACKET,
        ')': TokenKind.RBRACKET,
        ',': TokenKind.DELIM,
    }
    # Longest match wins, so >= is never > followed by =.
    COMPARISON = {
        '>=': TokenKind.GE,
        '<=': TokenKind.LE,
        '==': TokenKind.EQ,
        '!=': TokenKind.NE,
        '>': TokenKind.GT,
        '<': TokenKind.LT,
        '=': TokenKind.EQ,
    }
    QUOTE = '"'

    POINT = '.'
    DIGIT = regex.compile(r'\p{Nd}')
    LETTER = regex.compile(r'\p{L}')

    def lex(self, line):
        '''
        Take a line and yield all tokens, ending with a single EOL.

        Characters that can't start any token are skipped.
        '''
        state = State.NONE
        pending = []

        def switch(new):
            # Flush whatever was pending if we're leaving its state.
            nonlocal state
            flushed = None
            if new is not state and pending:
                flushed = self._token(state, ''.join(pending))
                pending.clear()
            state = new
            return flushed

        position = 0
        while position < len(line):
            char = line[position]
            position += 1
            if char == self.POINT:
                token = switch(State.NUMBER)
                pending.append(char)
            elif self.DIGIT.match(char):
                # Digits belong to a word already being read: log10, atan2.
                token = switch(State.WORD if state is State.WORD
                               else State.NUMBER)
                pending.append(char)
            elif self.LETTER.match(char):
                token = switch(State.WORD)
                pending.append(char)
            else:
                token = switch(State.NONE)
            if token is not None:
                yield token

            if char in self.IMMEDIATE:
                yield Token(self.IMMEDIATE[char])
            elif line[position - 1:position + 1] in self.COMPARISON:
                # A lone ! is dropped like any unknown character.
                yield Token(self.COMPARISON[line[position - 1:position + 1]])
                position += 1
            elif char in self.COMPARISON:
                yield Token(self.COMPARISON[char])
            elif char == self.QUOTE:
                end = line.find(self.QUOTE, position)
                if end == -1:
                    raise UnterminatedString(
                        'No closing quote for {}'.format(line[position - 1:]))
                yield Token(TokenKind.STRING, line[position:end])
                position = end + 1
            # Whitespace merely ends the pending token, and anything else is
            # dropped, so neither needs handling here.

        token = switch(State.NONE)
        if token is not None:
            yield token
        yield Token(TokenKind.EOL)

    def _token(self, state, text):
        if state is State.NUMBER:
            return Token(TokenKind.NUMBER, self._number(text))
        return Token(TokenKind.WORD, text)

    @wrap_user_errors('Cannot convert {1}', MalformedNumber)
    def _number(self, text):
        return float(text)


def tokenize(text):
    '''
    Return a (lazy, single use) iterator of the tokens in text.
    '''
    return Lexer().lex(text)
