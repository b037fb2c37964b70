# errors.py
# October 2026
# python3

"""
Exceptions raised by the case-elimination code.

Arithmetic trouble (division by zero, a pool too small to score) is
prevented by the loop bounds in eliminate.py rather than caught after
the fact; the exceptions here signal that a caller broke those bounds
or supplied inputs that cannot be processed.
"""


class StoppingError(Exception):
    """ Base class for all errors raised by this package. """

    pass


class EmptyPoolError(StoppingError):
    """ Selector or driver invoked with zero active cases. """

    pass


class InsufficientDrawsError(StoppingError):
    """ 
    Risk-conscious input in which some case has fewer or more draws
    than the configured number S, or whose draw indices are not the
    same for every case.
    """

    pass


class DegenerateDenominatorError(StoppingError):
    """ A round was requested when n_active - 1 - j would be <= 0. """

    pass


class NoBudgetSatisfyingCaseError(StoppingError):
    """
    No elimination record satisfies the budget.  Not fatal: the
    truncator only raises this when asked to be strict, otherwise it
    returns an empty stop set.
    """

    pass


class InputError(StoppingError):
    """ A case table or draw table could not be read. """

    pass


class SpecError(StoppingError):
    """ A run specification value is missing or out of range. """

    pass
