from functools import reduce
import operator

import regex

from .util import InputError, UnknownToken
from .tree import Function, OPERATORS, VARIABLE


class Lexer:
    '''
    Lexer for postfix integrands.

    Tokens are separated by single spaces; the lexer only tells them apart,
    building the tree is the parser's job.
    '''
    MAX_INTEGRAND_LENGTH = 100

    # Decimal literal, as typed on the keyboard
    NUMBER = r'''
              [-+]?
              (?:
                  # 1, 12, 1. (notice trailing dot), 1.3
                  \d+
                  (?:
                      \.
                      \d*
                  )?
                  |
                  # .2
                  \.
                  \d+
              )
              # 1e-5, 2.5E3
              (?:
                  [eE]
                  [-+]?
                  \d+
              )?
              '''

    assert not [operator
                for operator
                in OPERATORS
                if len(operator) != 1]
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape, OPERATORS)) + r')'
    FUNCTION = r'(?:' + r'|'.join(regex.escape(function.value)
                                  for function
                                  in Function) + r')'
    VARIABLE = regex.escape(VARIABLE)

    # All possible tokens. Order matters: '-' is an operator, '-1' a number.
    TOKEN = r'(?<variable>' + VARIABLE + r')|' \
            r'(?<operator>' + OPERATOR + r')|' \
            r'(?<function>' + FUNCTION + r')|' \
            r'(?<number>' + NUMBER + r')'
    # Default regex flags for matching tokens
    FLAGS = reduce(operator.__or__,
                   {regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def __init__(self, max_length=None):
        if max_length is None:
            max_length = type(self).MAX_INTEGRAND_LENGTH
        self.max_length = max_length

    def normalize(self, text):
        '''
        Strip leading and trailing whitespace. Inner spacing is kept as is.
        '''
        return text.strip()

    def split(self, text):
        '''
        Normalize and cut into tokens.

        Too long an integrand is rejected before it is looked at.
        '''
        text = self.normalize(text)
        if len(text) > self.max_length:
            raise InputError('The integrand is too long '
                             '({0} > {1} characters)'.format(len(text),
                                                            self.max_length))
        if not text:
            return []
        return text.split(' ')

    def classify(self, token):
        '''
        Return the kind of token: variable, operator, function or number.
        '''
        match = regex.fullmatch(type(self).TOKEN, token,
                                flags=type(self).FLAGS)
        if match is None:
            raise UnknownToken(token)
        return match.lastgroup

    def lex(self, text):
        '''
        Yield (kind, token) for every token of the integrand.
        '''
        for token in self.split(text):
            yield self.classify(token), token
