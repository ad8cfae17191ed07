'''
Riemann and Darboux sums over a uniform partition.

The extremum of every subinterval is looked for on a grid of fixed step, so
the Darboux sums are only as good as that grid: a peak thinner than the step
can be missed.
'''

from enum import Enum
import math

import numpy

from .evaluator import evaluate


# The step size for looking for the extremum of a subinterval
STEP = 1e-05

# Samples evaluated at once; bounds memory for fine partitions and long scans.
CHUNK_SIZE = 1 << 18


class Extremum(Enum):
    MIN = 'min'
    MAX = 'max'

    @property
    def fill(self):
        # What a nan sample is replaced with so that it never wins.
        return math.inf if self is Extremum.MIN else -math.inf

    def reduce(self, values):
        if self is Extremum.MIN:
            return numpy.min(values, axis=-1)
        return numpy.max(values, axis=-1)

    def combine(self, left, right):
        if self is Extremum.MIN:
            return numpy.minimum(left, right)
        return numpy.maximum(left, right)


def samples(lo, hi, step):
    '''
    Return how many points lo, lo + step, lo + 2 step, ... are <= hi.

    At least one: lo itself is always sampled.
    '''
    if not step > 0:
        raise ValueError('Step must be positive, not {0}'.format(step))
    n = math.floor((hi - lo) / step)
    if n < 0:
        return 1
    while lo + (n + 1) * step <= hi:
        n += 1
    while n > 0 and lo + n * step > hi:
        n -= 1
    return n + 1


def partitions(start, end, dx):
    '''
    Return the number of subintervals of width dx in [start, end).
    '''
    if not dx > 0:
        raise ValueError('Subinterval width must be positive, '
                         'not {0}'.format(dx))
    return max(1, round((end - start) / dx))


def _grid(tree, x):
    # Constant trees evaluate to a scalar whatever x is.
    return numpy.broadcast_to(evaluate(tree, x), x.shape)


def _first_wins(values, kind):
    '''
    Extremum along the last axis of scans starting at values[..., 0].

    Mirrors a running extremum seeded with the first sample and replaced only
    on strict comparison: a nan first sample sticks, later nans never win.
    '''
    best = kind.reduce(numpy.where(numpy.isnan(values), kind.fill, values))
    first = values[..., 0]
    return numpy.where(numpy.isnan(first), first, best)


def extrema(tree, lows, count, step, kind):
    '''
    Scan count points of the given step from each of lows.

    :return: Array of the extremum found for every low.
    '''
    lows = numpy.asarray(lows, dtype=numpy.float64)
    block = min(count, CHUNK_SIZE)
    rows = max(1, CHUNK_SIZE // block)
    result = numpy.empty(lows.shape, dtype=numpy.float64)
    for i in range(0, len(lows), rows):
        chunk = lows[i:i + rows, numpy.newaxis]
        running = None
        for k in range(0, count, block):
            offsets = step * numpy.arange(k, min(k + block, count),
                                          dtype=numpy.float64)
            values = _grid(tree, chunk + offsets)
            if running is None:
                running = _first_wins(values, kind)
            else:
                best = kind.reduce(numpy.where(numpy.isnan(values),
                                               kind.fill, values))
                running = numpy.where(numpy.isnan(running), running,
                                      kind.combine(running, best))
        result[i:i + rows] = running
    return result


def extremum(tree, lo, hi, step, kind):
    '''
    Return the minimum or maximum of tree over [lo, hi], sampled every step.

    :param kind: Extremum.MIN or Extremum.MAX.
    '''
    if tree is None:
        raise ValueError('Cannot look for the extremum of no expression')
    kind = Extremum(kind)
    count = samples(lo, hi, step)
    return float(extrema(tree, [lo], count, step, kind)[0])


def find_infimum(tree, lo, hi, step=STEP):
    return extremum(tree, lo, hi, step, Extremum.MIN)


def find_supremum(tree, lo, hi, step=STEP):
    return extremum(tree, lo, hi, step, Extremum.MAX)


def _boundaries(start, end, dx):
    '''
    Yield chunks of the left boundaries start + i dx of [start, end).
    '''
    n = partitions(start, end, dx)
    for i in range(0, n, CHUNK_SIZE):
        yield start + dx * numpy.arange(i, min(i + CHUNK_SIZE, n),
                                        dtype=numpy.float64)


def riemann_sum(tree, start, end, dx):
    '''
    Left endpoint Riemann sum of tree over [start, end).
    '''
    total = 0.0
    for xs in _boundaries(start, end, dx):
        with numpy.errstate(all='ignore'):
            total += float(numpy.sum(_grid(tree, xs) * dx))
    return total


def darboux_sum(tree, start, end, dx, step, kind):
    '''
    Darboux sum of tree over [start, end), lower or upper depending on kind.

    Every subinterval [x, x + dx] is scanned with the same number of samples,
    that of the first one.
    '''
    if tree is None:
        raise ValueError('Cannot sum no expression')
    kind = Extremum(kind)
    count = samples(start, start + dx, step)
    total = 0.0
    for xs in _boundaries(start, end, dx):
        with numpy.errstate(all='ignore'):
            total += float(numpy.sum(extrema(tree, xs, count, step, kind)
                                     * dx))
    return total


def lower_darboux_sum(tree, start, end, dx, step=STEP):
    return darboux_sum(tree, start, end, dx, step, Extremum.MIN)


def upper_darboux_sum(tree, start, end, dx, step=STEP):
    return darboux_sum(tree, start, end, dx, step, Extremum.MAX)
