'''
Definite integrals of postfix integrands.

Drives one integration request: validates the inputs, builds the tree,
normalizes the direction of the interval and computes the Riemann, lower and
upper Darboux sums, negated when the interval was given backwards.
'''

from concurrent.futures import ThreadPoolExecutor
from enum import Enum
import logging
import math
import time

import regex

from .util import RPNError, InputError, wrap_user_errors
from .lexer import Lexer
from .parser import Parser
from .integral import STEP, riemann_sum, lower_darboux_sum, upper_darboux_sum


logger = logging.getLogger(__name__)


class State(Enum):
    VALIDATING = 'validating'
    PARSING = 'parsing'
    PARTITIONING = 'partitioning'
    SUMMING = 'summing'
    REPORTING = 'reporting'
    FAILED = 'failed'


class Interval:
    '''
    Bounds of integration, in the order the user gave them.
    '''
    UNDEFINED = '[ ; ]'
    PATTERN = r'''
               \[
               \s*
               (?<start>{NUMBER})
               \s*
               ;
               \s*
               (?<end>{NUMBER})
               \s*
               \]
               '''.format(NUMBER=Lexer.NUMBER)

    def __init__(self, start, end):
        self.start = float(start)
        self.end = float(end)
        if not (math.isfinite(self.start) and math.isfinite(self.end)):
            raise InputError('The interval {0} is not finite'.format(self))
        if not math.isfinite(self.end - self.start):
            raise InputError('The interval {0} is too wide'.format(self))
        if self.start == self.end:
            raise InputError('Integrating in a [c ; c] interval is defined '
                             'to be equal to 0')

    @classmethod
    def parse(cls, text):
        '''
        Parse "[start ; end]".
        '''
        text = text.strip()
        if text == cls.UNDEFINED:
            raise InputError('The interval is not defined')
        match = regex.fullmatch(cls.PATTERN, text, flags=Lexer.FLAGS)
        if match is None:
            raise InputError("Couldn't parse interval {0!r}, expected "
                             "'[start ; end]'".format(text))
        return cls(match.group('start'), match.group('end'))

    @property
    def reversed(self):
        return self.start > self.end

    def normalized(self):
        '''
        Return the interval in increasing order, and whether it was swapped.
        '''
        if self.reversed:
            return type(self)(self.end, self.start), True
        return self, False

    def __eq__(self, other):
        return isinstance(other, Interval) and \
            (self.start, self.end) == (other.start, other.end)

    def __hash__(self):
        return hash((self.start, self.end))

    def __repr__(self):
        return 'Interval({0!r}, {1!r})'.format(self.start, self.end)

    def __str__(self):
        return '[{0:g} ; {1:g}]'.format(self.start, self.end)


class Result:
    '''
    The three sums of one integration, already sign corrected.
    '''

    def __init__(self, riemann, lower, upper, minus=False, timings=None):
        sign = -1 if minus else 1
        self.riemann = sign * riemann
        self.lower = sign * lower
        self.upper = sign * upper
        self.minus = minus
        # CPU seconds spent on each sum
        self.timings = timings or {}

    @property
    def difference(self):
        '''
        How far apart the Darboux sums are.
        '''
        return abs(self.upper - self.lower)

    @property
    def average(self):
        return (self.upper + self.lower) / 2

    @property
    def discrepancy(self):
        '''
        How far the Riemann sum is from the average of the Darboux sums.
        '''
        return abs(self.average - self.riemann)

    def __iter__(self):
        return iter((self.riemann, self.lower, self.upper))

    def __repr__(self):
        return 'Result(riemann={0!r}, lower={1!r}, upper={2!r})'.format(
            *self)


def _timed(f, *args):
    begin = time.thread_time()
    result = f(*args)
    return result, time.thread_time() - begin


class Integrator:
    '''
    Numerical integrator for postfix integrands.
    '''

    MIN_REFINEMENT = 1
    MAX_REFINEMENT = 20000000

    def __init__(self, step=STEP, min_refinement=None, max_refinement=None,
                 max_length=None, stack_size=None, parallel=False):
        '''
        :param step: Grid step of the extremum search.
        :param max_length: Maximum integrand length, in characters.
        :param stack_size: Operand stack bound, None for unbounded.
        :param parallel: Compute the three sums in threads.
        '''
        if not step > 0:
            raise InputError('The step must be positive, not {0}'.format(step))
        self.step = step
        if min_refinement is None:
            min_refinement = type(self).MIN_REFINEMENT
        if max_refinement is None:
            max_refinement = type(self).MAX_REFINEMENT
        self.min_refinement = min_refinement
        self.max_refinement = max_refinement
        self.parser = Parser(Lexer(max_length), stack_size=stack_size)
        self.parallel = parallel

    @wrap_user_errors('The scale of refinement must be an integer, not {1!r}')
    def _to_int(self, value):
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(value)
        return int(value)

    def _check_grid(self, interval, refinement):
        # The extremum scan counts its samples as width / step.
        dx = abs(interval.end - interval.start) / refinement
        if not math.isfinite(dx / self.step):
            raise InputError('The step {0} is too small for subintervals '
                             'of width {1}'.format(self.step, dx))

    def validate_refinement(self, value):
        '''
        Return the refinement as an int, rejecting values out of range.
        '''
        refinement = self._to_int(value)
        if not self.min_refinement <= refinement <= self.max_refinement:
            raise InputError('The scale of refinement must be between {0} '
                             'and {1}'.format(self.min_refinement,
                                              self.max_refinement))
        return refinement

    def sums(self, tree, start, end, refinement):
        '''
        Return the Riemann, lower and upper Darboux sums over [start, end).

        :return: (sums, timings) where timings maps sum names to CPU seconds.
        '''
        dx = (end - start) / refinement
        jobs = {
            'riemann': (riemann_sum, tree, start, end, dx),
            'lower': (lower_darboux_sum, tree, start, end, dx, self.step),
            'upper': (upper_darboux_sum, tree, start, end, dx, self.step),
        }
        if self.parallel:
            with ThreadPoolExecutor(max_workers=len(jobs)) as executor:
                futures = {name: executor.submit(_timed, *job)
                           for name, job in jobs.items()}
                done = {name: future.result()
                        for name, future in futures.items()}
        else:
            done = {name: _timed(*job) for name, job in jobs.items()}
        sums = tuple(done[name][0] for name in jobs)
        timings = {name: done[name][1] for name in jobs}
        return sums, timings

    def integrate(self, integrand, interval, refinement):
        '''
        Integrate a postfix integrand over an interval.

        :param integrand: Space separated postfix tokens in x.
        :param interval: "[start ; end]", or an Interval.
        :param refinement: Number of subintervals.
        :return: Result.
        :raises InputError: Integrand, interval or refinement rejected.
        :raises GrammarError: Malformed postfix integrand.
        '''
        state = State.VALIDATING
        try:
            self.parser.lexer.split(integrand)
            if not isinstance(interval, Interval):
                interval = Interval.parse(interval)
            refinement = self.validate_refinement(refinement)
            self._check_grid(interval, refinement)

            state = self._enter(State.PARSING)
            tree = self.parser.parse(integrand)

            state = self._enter(State.PARTITIONING)
            interval, minus = interval.normalized()
            if minus:
                logger.debug('Reversed interval, sums will be negated')

            state = self._enter(State.SUMMING)
            (riemann, lower, upper), timings = self.sums(
                tree, interval.start, interval.end, refinement)

            state = self._enter(State.REPORTING)
            return Result(riemann, lower, upper, minus=minus, timings=timings)
        except RPNError as e:
            logger.debug('%s while %s: %s', State.FAILED.name, state.value, e)
            raise

    def _enter(self, state):
        logger.debug('Entering %s', state.value)
        return state
