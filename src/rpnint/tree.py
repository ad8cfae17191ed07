'''
Expression trees for postfix integrands.

A tree is built once by the parser and never mutated afterwards, so it can be
shared between threads that only evaluate it.
'''

from enum import Enum

import numpy


def cot(x):
    return 1 / numpy.tan(x)


class Function(Enum):
    '''
    The unary functions an integrand may call, keyed by their token.
    '''
    SIN = 'sin'
    COS = 'cos'
    TG = 'tg'
    CTG = 'ctg'
    LN = 'ln'
    EXP = 'exp'

    def __call__(self, x):
        return _UFUNCS[self](x)


_UFUNCS = {
    Function.SIN: numpy.sin,
    Function.COS: numpy.cos,
    Function.TG: numpy.tan,
    Function.CTG: cot,
    Function.LN: numpy.log,
    Function.EXP: numpy.exp,
}

# Binary operators, in the order the calculator's prompt lists them.
OPERATORS = {
    '+': numpy.add,
    '-': numpy.subtract,
    '*': numpy.multiply,
    '/': numpy.divide,
    '^': numpy.power,
}

VARIABLE = 'x'


class Node:
    '''
    Base of the four node kinds.
    '''
    __slots__ = ()

    @property
    def children(self):
        return ()

    def __len__(self):
        return 1 + sum(len(child) for child in self.children)

    def __eq__(self, other):
        return type(self) is type(other) and \
            self._key() == other._key()

    def __hash__(self):
        return hash((type(self), self._key()))

    def __repr__(self):
        return '{0}({1})'.format(type(self).__name__,
                                 ', '.join(map(repr, self._key())))


class Variable(Node):
    __slots__ = ('name',)

    def __init__(self, name=VARIABLE):
        self.name = name

    def _key(self):
        return (self.name,)

    def __str__(self):
        return self.name


class Number(Node):
    __slots__ = ('value',)

    def __init__(self, value):
        self.value = float(value)

    def _key(self):
        return (self.value,)

    def __str__(self):
        return repr(self.value)


class Call(Node):
    '''
    One of the fixed unary functions applied to its argument.
    '''
    __slots__ = ('function', 'argument')

    def __init__(self, function, argument):
        self.function = Function(function)
        self.argument = argument

    @property
    def children(self):
        return (self.argument,)

    def _key(self):
        return (self.function, self.argument)

    def __str__(self):
        return '{0} {1}'.format(self.argument, self.function.value)


class Operator(Node):
    '''
    Binary operator; left is the operand pushed first.
    '''
    __slots__ = ('symbol', 'left', 'right')

    def __init__(self, symbol, left, right):
        if symbol not in OPERATORS:
            raise ValueError('Unknown operator {0!r}'.format(symbol))
        self.symbol = symbol
        self.left = left
        self.right = right

    @property
    def children(self):
        return (self.left, self.right)

    def _key(self):
        return (self.symbol, self.left, self.right)

    def __str__(self):
        return '{0} {1} {2}'.format(self.left, self.right, self.symbol)
