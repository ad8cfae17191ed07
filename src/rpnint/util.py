from functools import wraps


class RPNError(Exception):
    pass


class InputError(RPNError):
    '''
    Integrand, interval or refinement rejected before anything is parsed.
    '''


class GrammarError(RPNError):
    '''
    Postfix integrand that doesn't reduce to exactly one tree.
    '''


class StackUnderflow(GrammarError):
    pass


class StackOverflow(GrammarError):
    pass


class UnknownToken(GrammarError):
    def __init__(self, token):
        super().__init__("Invalid token '{0}' in expression".format(token))
        self.token = token


def wrap_user_errors(fmt):
    '''
    Decorator that converts unexpected exceptions to RPNErrors.

    Passes through RPNErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except Exception as e:
                raise InputError(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
