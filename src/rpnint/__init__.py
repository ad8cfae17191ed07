'''
Numerical integration of functions given in Reverse Polish Notation.

An integrand such as "x sin 2 ^" is built into an expression tree and
integrated over an interval such as "[0 ; 3.14]" three independent ways: a
left endpoint Riemann sum and the lower and upper Darboux sums. How far the
Darboux sums are apart bounds the error of the approximation.

Why Darboux sums?

- They bracket the integral, Riemann sums alone don't tell you how wrong
  they are.
- The extremum of every subinterval is found on a fixed grid, so peaks
  thinner than the grid step can still be missed.
'''

from .util import RPNError, InputError, GrammarError
from .lexer import Lexer
from .parser import Parser, parse
from .evaluator import evaluate
from .integrator import Integrator, Interval, Result
from .history import History


__all__ = ('RPNError', 'InputError', 'GrammarError', 'Lexer', 'Parser',
           'parse', 'evaluate', 'Integrator', 'Interval', 'Result',
           'History')
