'''
Command line tests
'''

import io

import rpnint.cli
from rpnint.cli import CLI

from pytest import raises


def run(*args):
    CLI().run(args=list(args))


def test_integrate(capsys, history):
    run('-f', 'x', '-i', '[0 ; 2]', '-r', '100', '--step', '0.001',
        '--history', history.filename)
    out = capsys.readouterr().out
    assert 'Riemann-sum = 1.980000' in out
    assert 'Lower Darboux-sum = 1.980000' in out
    assert 'Average of the Darboux-sums' in out
    assert history.last() == ('x', '[0 ; 2]')


def test_reversed(capsys, history):
    run('-f', 'x', '-i', '[2 ; 0]', '-r', '100', '--step', '0.001',
        '--history', history.filename, '--no-save')
    assert 'Riemann-sum = -1.980000' in capsys.readouterr().out
    assert list(history.entries()) == []


def test_timings(capsys, history):
    run('-f', '1', '-i', '[0 ; 1]', '-r', '10', '--step', '0.01',
        '--history', history.filename, '--parallel')
    assert 'CPU time of riemann' in capsys.readouterr().out


def test_grammar_error_exits(history):
    with raises(SystemExit) as e:
        run('-f', '1 2', '-i', '[0 ; 1]', '-r', '10',
            '--history', history.filename)
    assert e.value.code == 1


def test_refinement_out_of_range_exits(history):
    with raises(SystemExit) as e:
        run('-f', 'x', '-i', '[0 ; 1]', '-r', '0',
            '--history', history.filename)
    assert e.value.code == 1


def test_last(capsys, history):
    history.save('x 2 *', '[0 ; 1]')
    run('-l', '-r', '10', '--step', '0.01', '--history', history.filename)
    out = capsys.readouterr().out
    assert 'Function to integrate: x 2 *' in out
    assert 'Interval: [0 ; 1]' in out
    assert 'Upper Darboux-sum = 1.100000' in out


def test_last_without_history(history):
    with raises(SystemExit):
        run('-l', '-r', '10', '--history', history.filename)


def test_list(capsys, history):
    history.save('x', '[0 ; 1]')
    history.save('x exp', '[-1 ; 1]')
    run('-L', '--history', history.filename)
    assert capsys.readouterr().out == 'x\n[0 ; 1]\nx exp\n[-1 ; 1]\n'


def test_piped_input(capsys, history, monkeypatch):
    monkeypatch.setattr(rpnint.cli, 'stdin',
                        io.StringIO('x 2 ^\n[0 ; 3]\n30\n'))
    run('--step', '0.01', '--history', history.filename)
    assert 'Lower Darboux-sum' in capsys.readouterr().out
    assert history.last() == ('x 2 ^', '[0 ; 3]')


def test_piped_input_runs_dry(history, monkeypatch):
    monkeypatch.setattr(rpnint.cli, 'stdin', io.StringIO('x\n'))
    with raises(SystemExit):
        run('--history', history.filename)


def test_too_wide_interval_exits(history):
    with raises(SystemExit) as e:
        run('-f', '1', '-i', '[-1e308 ; 1e308]', '-r', '10',
            '--history', history.filename)
    assert e.value.code == 1


def test_subnormal_step_exits(history):
    with raises(SystemExit) as e:
        run('-f', 'x', '-i', '[0 ; 1]', '-r', '10', '--step', '1e-320',
            '--history', history.filename)
    assert e.value.code == 1
