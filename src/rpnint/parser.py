import logging
from collections import deque

from .util import GrammarError, StackOverflow, StackUnderflow
from .lexer import Lexer
from .tree import Variable, Number, Call, Operator


logger = logging.getLogger(__name__)


class Parser:
    '''
    Stack-based builder turning a postfix integrand into a tree.

    The operand stack lives only for the duration of one parse() call.
    '''

    # The stack depth the interactive calculator used to enforce.
    LEGACY_STACK_SIZE = 50

    def __init__(self, lexer=None, stack_size=None):
        '''
        :param lexer: Lexer to split integrands with.
        :param stack_size: Maximum operand stack depth, or None for unbounded.
        '''
        self.lexer = lexer or Lexer()
        self.stack_size = stack_size

    def parse(self, text):
        '''
        Build and return the root of the tree for a postfix integrand.

        Consumes tokens left to right. Raises a GrammarError unless exactly
        one node is left on the stack at the end.
        '''
        stack = deque()
        for kind, token in self.lexer.lex(text):
            if kind == 'variable':
                node = Variable(token)
            elif kind == 'operator':
                # If you don't pop right first, 9 2 ^ becomes 2**9.
                right = self._pop(stack, token)
                left = self._pop(stack, token)
                node = Operator(token, left, right)
            elif kind == 'function':
                node = Call(token, self._pop(stack, token))
            else:
                node = Number(token)
            self._push(stack, node)

        if len(stack) != 1:
            raise GrammarError('Malformed expression: {0} operands left on '
                               'the stack instead of 1'.format(len(stack)))
        root = stack.pop()
        logger.debug('Parsed %r into %d nodes', text, len(root))
        return root

    def _push(self, stack, node):
        if self.stack_size is not None and len(stack) >= self.stack_size:
            raise StackOverflow('Stack overflow: more than {0} pending '
                                'operands'.format(self.stack_size))
        stack.append(node)

    def _pop(self, stack, token):
        try:
            return stack.pop()
        except IndexError:
            raise StackUnderflow("Stack underflow: not enough operands "
                                 "for '{0}'".format(token)) from None


def parse(text):
    '''
    Parse with the default lexer and an unbounded stack.
    '''
    return Parser().parse(text)
