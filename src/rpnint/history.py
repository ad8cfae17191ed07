from os import path
import logging

from .util import InputError


logger = logging.getLogger(__name__)


class History:
    '''
    Log of integrated functions: a text file where integrand lines and
    "[start ; end]" lines alternate.
    '''

    DEFAULT_FILE = 'functions.txt'

    def __init__(self, filename=None):
        self.filename = path.expanduser(filename or type(self).DEFAULT_FILE)

    def save(self, integrand, interval):
        '''
        Append an integrand and its interval.
        '''
        with open(self.filename, 'a', encoding='utf-8') as log:
            print(integrand.strip(), file=log)
            print(str(interval).strip(), file=log)
        logger.debug('Saved %r %s to %s', integrand, interval, self.filename)

    def _lines(self):
        try:
            with open(self.filename, encoding='utf-8') as log:
                return [line.rstrip('\n') for line in log if line.strip()]
        except FileNotFoundError:
            return []

    def entries(self):
        '''
        Yield every saved (integrand, interval) pair, oldest first.

        A trailing integrand without interval is skipped.
        '''
        lines = self._lines()
        for i in range(0, len(lines) - 1, 2):
            yield lines[i], lines[i + 1]

    def last(self):
        '''
        Return the last saved (integrand, interval).
        '''
        pairs = list(self.entries())
        if not pairs:
            raise InputError('No function saved in {0}'.format(self.filename))
        return pairs[-1]

    def dump(self):
        '''
        Return the raw contents of the log.
        '''
        try:
            with open(self.filename, encoding='utf-8') as log:
                return log.read()
        except FileNotFoundError:
            raise InputError('No function saved in {0}'.format(
                self.filename)) from None
