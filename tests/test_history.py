'''
Function log tests
'''

from rpnint.util import InputError
from rpnint.history import History

from pytest import raises


def test_save_and_last(history):
    history.save('x 2 ^', '[0 ; 1]')
    history.save(' x sin ', '[1 ; -1]')
    assert history.last() == ('x sin', '[1 ; -1]')
    assert list(history.entries()) == [('x 2 ^', '[0 ; 1]'),
                                       ('x sin', '[1 ; -1]')]


def test_alternating_lines(history):
    history.save('x', '[0 ; 2]')
    with open(history.filename) as log:
        assert log.read() == 'x\n[0 ; 2]\n'
    assert history.dump() == 'x\n[0 ; 2]\n'


def test_nothing_saved(history):
    with raises(InputError, match='No function saved'):
        history.last()
    with raises(InputError):
        history.dump()
    assert list(history.entries()) == []


def test_incomplete_pair_is_skipped(history):
    with open(history.filename, 'w') as log:
        log.write('x\n[0 ; 1]\n\nx 2 *\n')
    assert list(history.entries()) == [('x', '[0 ; 1]')]


def test_default_file():
    assert History().filename == History.DEFAULT_FILE


def test_last_skips_incomplete_pair(history):
    with open(history.filename, 'w') as log:
        log.write('x\n[0 ; 1]\nx 2 *\n')
    assert history.last() == ('x', '[0 ; 1]')


def test_last_with_only_an_integrand(history):
    with open(history.filename, 'w') as log:
        log.write('x 2 *\n')
    with raises(InputError):
        history.last()
