from importlib import import_module
from inspect import signature as getsignature, Parameter
from threading import Lock
import math

from .value import Value
from .util import FormulaError, wrap_user_errors


def _unary(f, kind=float):
    '''
    Give a builtin a signature the registry can match arguments against.
    '''
    def wrapped(only: kind):
        return f(only)
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = getattr(f, '__name__', 'unary')
    return wrapped


def _binary(f):
    def wrapped(left: float, right: float):
        return f(left, right)
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = getattr(f, '__name__', 'binary')
    return wrapped


def _variadic(f):
    def wrapped(first: float, *rest: float):
        return f(first, *rest)
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = getattr(f, '__name__', 'variadic')
    return wrapped


def _signum(only):
    '''
    Return -1.0, 0.0 or 1.0 according to the sign of only (NaN stays NaN).
    '''
    if only == 0 or math.isnan(only):
        return only
    return math.copysign(1.0, only)


def _round(only):
    '''
    Round only to the nearest integer, halves towards positive infinity.
    '''
    return math.floor(only + 0.5)


def _cbrt(only):
    '''
    Return the real cube root of only.
    '''
    return math.copysign(abs(only) ** (1 / 3), only)


# The builtin namespace. Functions only; constants would need a call with no
# arguments, which the grammar can't express.
MATH = {
    'abs': _unary(abs),
    'acos': _unary(math.acos),
    'acosh': _unary(math.acosh),
    'asin': _unary(math.asin),
    'asinh': _unary(math.asinh),
    'atan': _unary(math.atan),
    'atan2': _binary(math.atan2),
    'atanh': _unary(math.atanh),
    'cbrt': _unary(_cbrt),
    'ceil': _unary(math.ceil),
    'copysign': _binary(math.copysign),
    'cos': _unary(math.cos),
    'cosh': _unary(math.cosh),
    'degrees': _unary(math.degrees),
    'erf': _unary(math.erf),
    'erfc': _unary(math.erfc),
    'exp': _unary(math.exp),
    'expm1': _unary(math.expm1),
    'fabs': _unary(math.fabs),
    'factorial': _unary(math.factorial, int),
    'floor': _unary(math.floor),
    'fmod': _binary(math.fmod),
    'gamma': _unary(math.gamma),
    'hypot': _binary(math.hypot),
    'isfinite': _unary(math.isfinite),
    'isinf': _unary(math.isinf),
    'isnan': _unary(math.isnan),
    'lgamma': _unary(math.lgamma),
    'log': _unary(math.log),
    'log10': _unary(math.log10),
    'log1p': _unary(math.log1p),
    'log2': _unary(math.log2),
    'max': _variadic(max),
    'min': _variadic(min),
    'pow': _binary(math.pow),
    'radians': _unary(math.radians),
    'round': _unary(_round),
    'signum': _unary(_signum),
    'sin': _unary(math.sin),
    'sinh': _unary(math.sinh),
    'sqrt': _unary(math.sqrt),
    'tan': _unary(math.tan),
    'tanh': _unary(math.tanh),
    'trunc': _unary(math.trunc),
}

# Returned by _coerce when an argument can't be passed as a parameter.
_MISMATCH = object()


def _coerce(value, annotation):
    '''
    Convert value to what a parameter annotated with annotation expects.
    '''
    if annotation is Parameter.empty:
        return value.data
    elif annotation is float:
        return value.data if value.isnumber else _MISMATCH
    elif annotation is int:
        if value.isnumber and float(value.data).is_integer():
            return int(value.data)
        return _MISMATCH
    elif annotation is bool:
        return value.data if value.isboolean else _MISMATCH
    elif annotation is str:
        return value.to_text()
    return value.data


def _bind(f, args):
    '''
    Return args as f's positional arguments, or None if f won't take them.

    Callables without an inspectable signature get the raw data, and it's up
    to them to complain.
    '''
    try:
        signature = getsignature(f)
    except (TypeError, ValueError):
        return [arg.data for arg in args]
    parameters = signature.parameters.values()
    positionals = [parameter
                   for parameter
                   in parameters
                   if parameter.kind in (Parameter.POSITIONAL_ONLY,
                                         Parameter.POSITIONAL_OR_KEYWORD)]
    required = [parameter
                for parameter
                in positionals
                if parameter.default is Parameter.empty]
    rest = [parameter
            for parameter
            in parameters
            if parameter.kind == Parameter.VAR_POSITIONAL]
    if len(args) < len(required):
        return None
    if not rest and len(args) > len(positionals):
        return None

    annotations = [parameter.annotation for parameter in positionals]
    if rest:
        annotations += [rest[0].annotation] * (len(args) - len(positionals))
    bound = [_coerce(arg, annotation)
             for arg, annotation
             in zip(args, annotations)]
    if any(arg is _MISMATCH for arg in bound):
        return None
    return bound


@wrap_user_errors('Exception thrown by function {0}', FormulaError)
def _invoke(name, f, args):
    return Value.of(f(*args))


class Namespace:
    '''
    Named collection of functions that expressions can call.
    '''

    def __init__(self, name, functions):
        self.name = name
        self.functions = dict(functions)

    @classmethod
    @wrap_user_errors('No such library {1}', FormulaError)
    def from_module(cls, name):
        '''
        Expose the public functions of the module with the given name.
        '''
        module = import_module(name)
        return cls(name, {key: value
                          for key, value
                          in vars(module).items()
                          if not key.startswith('_') and
                             callable(value) and
                             not isinstance(value, type)})

    def get(self, name):
        return self.functions.get(name)

    def __contains__(self, name):
        return name in self.functions

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self.name)


class Registry:
    '''
    Ordered set of namespaces to resolve function calls against.

    The first namespace registered that has a matching function wins. The
    builtin namespace, if any, is always first.

    Registration is serialized; resolution works on a snapshot, so it's safe
    to resolve while another thread registers.
    '''
    BUILTIN = 'math'

    def __init__(self, builtins=True):
        self._lock = Lock()
        self.namespaces = ()
        if builtins:
            self.register_namespace(self.BUILTIN, MATH)

    def register_namespace(self, name, functions=None):
        '''
        Add a namespace after all the others.

        :param name: Name of the namespace. If no functions are given, also
                     the name of the module to import them from.
        :param functions: Mapping of function names to callables.
        :return: False if a namespace by that name is already registered.
        '''
        with self._lock:
            if name in self:
                return False
            if functions is None:
                namespace = Namespace.from_module(name)
            else:
                namespace = Namespace(name, functions)
            self.namespaces += (namespace,)
            return True

    def remove_namespace(self, name):
        '''
        Remove namespace with name, returning whether there was one.
        '''
        with self._lock:
            remaining = tuple(namespace
                              for namespace
                              in self.namespaces
                              if namespace.name != name)
            removed = len(remaining) != len(self.namespaces)
            self.namespaces = remaining
            return removed

    def resolve(self, name, args):
        '''
        Call the first function called name that takes args.

        :param args: List of Values, in call order.
        :return: The function's result as a Value.
        '''
        for namespace in self.namespaces:
            f = namespace.get(name)
            if f is None:
                continue
            bound = _bind(f, args)
            if bound is None:
                continue
            return _invoke(name, f, bound)
        raise FormulaError('No function {} taking {}'.format(
            name, ', '.join(arg.kind.value for arg in args) or 'no arguments'))

    def __contains__(self, name):
        return any(namespace.name == name for namespace in self.namespaces)

    def __iter__(self):
        return iter(self.namespaces)
