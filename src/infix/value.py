from collections import namedtuple
from enum import Enum


class ValueKind(Enum):
    NUMBER = 'number'
    STRING = 'string'
    BOOLEAN = 'boolean'


class Value(namedtuple('Value', 'kind data')):
    '''
    Result of (part of) an evaluation: a number, string or boolean.

    Tagged, so that the machine dispatches on kind rather than on the type of
    data.
    '''
    __slots__ = ()

    @classmethod
    def number(cls, data):
        return cls(ValueKind.NUMBER, float(data))

    @classmethod
    def string(cls, data):
        return cls(ValueKind.STRING, str(data))

    @classmethod
    def boolean(cls, data):
        return cls(ValueKind.BOOLEAN, bool(data))

    @classmethod
    def of(cls, data):
        '''
        Wrap whatever a registered function returned.

        Raises TypeError on anything that isn't a number, string or boolean.
        '''
        # bool before int; bool is an int.
        if isinstance(data, bool):
            return cls.boolean(data)
        elif isinstance(data, (int, float)):
            return cls.number(data)
        elif isinstance(data, str):
            return cls.string(data)
        raise TypeError('Cannot represent {!r}'.format(data))

    @property
    def isnumber(self):
        return self.kind is ValueKind.NUMBER

    @property
    def isboolean(self):
        return self.kind is ValueKind.BOOLEAN

    @property
    def isempty(self):
        '''
        Return True for the empty string, which arithmetic treats as 0.
        '''
        return self.kind is ValueKind.STRING and not self.data

    def to_text(self):
        return str(self.data)

    __str__ = to_text


EMPTY = Value.string('')
