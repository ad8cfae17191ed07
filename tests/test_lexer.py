'''
Integrand lexer tests
'''

import regex

from rpnint.util import InputError, UnknownToken
from rpnint.lexer import Lexer

from pytest import raises, mark


def test_normalize_strips_outer_whitespace_only():
    l = Lexer()
    assert l.normalize('  x  2 *\n') == 'x  2 *'


def test_split():
    l = Lexer()
    assert l.split(' x 2 ^ sin ') == ['x', '2', '^', 'sin']
    assert l.split('   ') == []


def test_too_long():
    l = Lexer()
    with raises(InputError, match='too long'):
        l.split('x ' * 50 + 'x')
    # Surrounding whitespace doesn't count
    assert len(l.split('  ' + 'x ' * 49 + 'x  ')) == 50


def test_custom_max_length():
    with raises(InputError):
        Lexer(max_length=3).split('x 2 +')


@mark.parametrize('token, kind', [
    ('x', 'variable'),
    ('+', 'operator'),
    ('-', 'operator'),
    ('^', 'operator'),
    ('ctg', 'function'),
    ('ln', 'function'),
    ('2', 'number'),
    ('-2', 'number'),
    ('+.5', 'number'),
    ('3.', 'number'),
    ('1e-5', 'number'),
    ('2.5E3', 'number'),
])
def test_classify(token, kind):
    assert Lexer().classify(token) == kind


@mark.parametrize('token', ['y', 'sinx', 'log', '1,5', '--1', 'inf', 'nan',
                            '0x10', '', '**'])
def test_unknown_token(token):
    with raises(UnknownToken, match=regex.escape(repr(token))):
        Lexer().classify(token)


def test_double_space_is_an_empty_token():
    l = Lexer()
    with raises(UnknownToken):
        list(l.lex('x  2 +'))


def test_lex():
    l = Lexer()
    assert list(l.lex('x -1 * exp')) == [('variable', 'x'),
                                         ('number', '-1'),
                                         ('operator', '*'),
                                         ('function', 'exp')]
