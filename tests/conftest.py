from pytest import Item, fixture

from rpnint.integrator import Integrator
from rpnint.history import History


@fixture
def integrator():
    '''
    Integrator with a coarse extremum grid, to keep the Darboux sums cheap.
    '''
    return Integrator(step=1e-3)


@fixture
def history(tmp_path):
    return History(str(tmp_path / 'functions.txt'))


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Excessive in most cases.

    Use with pytest -rP -o enable_assertion_pass_hook=true.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!)
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))
