from os import path
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .util import RPNError, InputError
from .history import History
from .integral import STEP
from .integrator import Integrator
from .lexer import Lexer


RULES = '''\
| The rules of integrating:
|   a. Use Reverse Polish Notation, in the variable x.
|   b. Enter a single space between all operands, operators and functions.
|   c. Operators: + - * / ^   Functions: sin cos tg ctg ln exp
|   d. The integrand must not exceed {max_length} characters.
|   e. The interval is entered as [start ; end].
'''


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.session = PromptSession(vi_mode=True,
                                     enable_suspend=True,
                                     history=history,
                                     # Certainly not! But be explicit.
                                     erase_when_done=False)

    def ask(self, question):
        return self.session.prompt(question + self.prompt)


class PipedInput:
    def __init__(self, lines):
        self.lines = lines

    def ask(self, question):
        line = self.lines.readline()
        if not line:
            raise InputError('Expected {0} on input'.format(question.lower()))
        return line.rstrip('\n')


class CLI:
    '''
    Command line interface to the integrator.
    '''

    DEFAULT_PROMPT = ': '
    HISTORY_FILE = '~/.rpnint_history'

    def integrator(self):
        return Integrator(step=self.args.step,
                          max_refinement=self.args.max_refinement,
                          parallel=self.args.parallel)

    def report(self, result):
        '''
        Print the sums, how far apart they are and how long they took.
        '''
        print('Riemann-sum = {0:.6f}'.format(result.riemann))
        print('Lower Darboux-sum = {0:.6f}'.format(result.lower))
        print('Upper Darboux-sum = {0:.6f}'.format(result.upper))
        print()
        print('Difference between Darboux-sums = {0:.6f}'.format(
            result.difference))
        print('Average of the Darboux-sums = {0:.6f}'.format(result.average))
        print('Difference between Riemann-sum and average of the '
              'Darboux-sums = {0:.6f}'.format(result.discrepancy))
        print()
        for name, seconds in result.timings.items():
            print('CPU time of {0} = {1:.3f} ms'.format(name,
                                                       seconds * 1000))

    def _refinement(self, integrator):
        if self.args.refinement is not None:
            return self.args.refinement
        return self.ask('Scale of refinement [{0} ; {1}]'.format(
            integrator.min_refinement, integrator.max_refinement))

    def integrate(self, integrand, interval):
        integrator = self.integrator()
        result = integrator.integrate(integrand, interval,
                                      self._refinement(integrator))
        self.report(result)

    def integrate_new(self):
        '''
        Integrate the function given on the command line, or asked for.
        '''
        if self.args.function is None and self._interactive():
            print(RULES.format(max_length=Lexer.MAX_INTEGRAND_LENGTH))
        integrand = self.args.function
        if integrand is None:
            integrand = self.ask('f(x)')
        interval = self.args.interval
        if interval is None:
            interval = self.ask('Interval')
        if not self.args.no_save:
            self.history.save(integrand, interval)
        self.integrate(integrand, interval)

    def integrate_last(self):
        '''
        Integrate the last saved function over its interval.
        '''
        integrand, interval = self.history.last()
        print('Function to integrate: {0}'.format(integrand))
        print('Interval: {0}'.format(interval))
        self.integrate(integrand, interval)

    def list_saved(self):
        '''
        Print every saved function and interval.
        '''
        print(self.history.dump(), end='')

    def _input(self):
        '''
        Return prompting input if either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           stdin.isatty() and stdout.isatty():
            history = FileHistory(path.expanduser(self.HISTORY_FILE))
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=history)
        else:
            return PipedInput(stdin)

    def _interactive(self):
        if self.input is None:
            self.input = self._input()
        return isinstance(self.input, InteractiveInput)

    def ask(self, question):
        self._interactive()
        return self.input.ask(question)

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Numerical integration of postfix (RPN) functions')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-f', '--function',
                                          help="integrand, e.g. 'x 2 ^'")
        self.argument_parser.add_argument('-i', '--interval',
                                          help="e.g. '[0 ; 1]'")
        self.argument_parser.add_argument('-r', '--refinement',
                                          help='number of subintervals')
        self.argument_parser.add_argument('--step', type=float, default=STEP,
                                          help='grid step of the extremum '
                                               'search')
        self.argument_parser.add_argument('--max-refinement', type=int,
                                          default=Integrator.MAX_REFINEMENT)
        self.argument_parser.add_argument('--parallel', action='store_true',
                                          help='compute the sums in threads')
        self.argument_parser.add_argument('--history',
                                          default=History.DEFAULT_FILE,
                                          help='log of integrated functions')
        self.argument_parser.add_argument('--no-save', action='store_true',
                                          help="don't log the function")
        self.argument_parser.add_argument('-p', '--prompt', nargs='?',
                                          const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-l', '--last', self.integrate_last),
                                      ('-L', '--list', self.list_saved)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.integrate_new)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING,
                            format='%(levelname)s %(name)s: %(message)s')
        self.history = History(self.args.history)
        self.input = None
        try:
            self.args.action()
        except RPNError as e:
            print(e.args[0], file=stderr)
            exit(1)
        except (KeyboardInterrupt, EOFError):
            exit(1)


def main():
    CLI().run()
