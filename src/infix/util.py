from functools import wraps


class ParserError(Exception):
    '''
    Base of all faults raised while lexing, parsing or evaluating.
    '''
    summary = 'Invalid expression'


class UnterminatedString(ParserError):
    summary = 'Unterminated string in expression'


class MalformedNumber(ParserError):
    summary = 'Malformed number in expression'


class MissingLBracket(ParserError):
    summary = 'Missing bracket in expression'


class MissingRBracket(ParserError):
    summary = 'Missing bracket in expression'


class MissingArg(ParserError):
    summary = 'Missing argument in expression'


class FormulaError(ParserError):
    summary = 'No such library or function'


def wrap_user_errors(fmt, error=ParserError):
    '''
    Decorator that converts foreign exceptions into the given fault.

    Passes through ParserErrors. fmt is formatted with the call's arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except ParserError:
                raise
            except Exception as e:
                raise error(fmt.format(*args, **kwargs), e) from e
        return wrapper
    return decorator
