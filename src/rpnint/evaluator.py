'''
Evaluation of expression trees.

Arithmetic follows IEEE 754: a division by zero, the logarithm of a
non-positive number or a pole of tg/ctg yields inf or nan, which then flows
into whatever is computed from it. Nothing here raises for numeric domain
problems.
'''

import numpy

from .tree import Variable, Number, Call, Operator, OPERATORS


def evaluate(node, x):
    '''
    Evaluate tree at x.

    :param node: Root of the tree; None evaluates to 0.0.
    :param x: A number, or a numpy array to evaluate at many points at once.
    '''
    if isinstance(x, numpy.ndarray):
        x = x.astype(numpy.float64, copy=False)
    else:
        x = numpy.float64(x)
    with numpy.errstate(all='ignore'):
        return _evaluate(node, x)


def _evaluate(node, x):
    if node is None:
        return numpy.float64(0.0)
    elif isinstance(node, Variable):
        return x
    elif isinstance(node, Number):
        return numpy.float64(node.value)
    elif isinstance(node, Call):
        return node.function(_evaluate(node.argument, x))
    elif isinstance(node, Operator):
        left = _evaluate(node.left, x)
        right = _evaluate(node.right, x)
        return OPERATORS[node.symbol](left, right)
    raise TypeError('Cannot evaluate {0!r}'.format(node))
