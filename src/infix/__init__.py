'''
Infix expression calculator.

Parses and evaluates expressions such as 3 + 7 / (4 * 5 - 6) or
max(sqrt(16), 3) > 2 in three stages:

- the Lexer turns text into tokens,
- the Parser converts them to postfix notation (shunting-yard),
- the Machine evaluates the postfix form on a stack, calling functions from
  the namespaces of a Registry.

Values are numbers (floats), strings ("double quoted", no escapes) and
booleans (from comparisons). Adding a string to anything concatenates; the
empty string counts as 0 in arithmetic.
'''

from .token import Token, TokenKind
from .value import Value, ValueKind
from .util import (ParserError, UnterminatedString, MalformedNumber,
                   MissingLBracket, MissingRBracket, MissingArg, FormulaError)
from .lexer import Lexer, tokenize
from .parser import Parser, Postfix, convert
from .registry import Registry, Namespace
from .machine import Machine, evaluate, calculate
from .cli import CLI


__all__ = ('Token', 'TokenKind', 'Value', 'ValueKind',
           'ParserError', 'UnterminatedString', 'MalformedNumber',
           'MissingLBracket', 'MissingRBracket', 'MissingArg', 'FormulaError',
           'Lexer', 'tokenize', 'Parser', 'Postfix', 'convert',
           'Registry', 'Namespace', 'Machine', 'evaluate', 'calculate',
           'CLI')
