# pool.py
# October 2026
# python3

"""
PoolState: running totals over the currently active (not yet dropped)
cases, and the aggregate updater that folds one dropped case into them.

A PoolState is a value: fold_dropped() returns a new PoolState and
leaves its argument alone.  The elimination driver threads the state
from round to round by parameter and return value, so any single round
can be rerun or tested in isolation.

Fields:
    total_cost       initial pool total, sunk cost included
                     ([S] array for the risk-conscious variant, float otherwise)
    dropped_cost     sum of future costs of cases dropped so far (same shape)
    dropped_quality  [k] sums of each quality variable over dropped cases
    n_cases          n, number of cases in the pool at the start
    active           sorted tuple of positions of still-active cases

Derived:
    n_dropped        j, number of rounds completed
    n_active         n - j
    current_total    total_cost - dropped_cost
    denominator()    n_active - 1 == n - 1 - j
"""

import numpy as np

from errors import DegenerateDenominatorError, EmptyPoolError


def _frozen(value):
    """ Return read-only float copy of value (array) or float(value) (scalar). """

    if np.ndim(value) == 0:
        return float(value)
    arr = np.array(value, dtype=float)
    arr.setflags(write=False)
    return arr


class PoolState(object):

    def __init__(self, total_cost, dropped_cost, dropped_quality, n_cases, active):

        self.total_cost = _frozen(total_cost)
        self.dropped_cost = _frozen(dropped_cost)
        self.dropped_quality = _frozen(np.atleast_1d(dropped_quality))
        self.n_cases = int(n_cases)
        self.active = tuple(active)

    @property
    def n_active(self):
        return len(self.active)

    @property
    def n_dropped(self):
        return self.n_cases - self.n_active

    @property
    def current_total(self):
        return self.total_cost - self.dropped_cost

    def denominator(self):
        """
        Return n_active - 1 (== n - 1 - j), the count that the variance
        terms are divided by.  Raise DegenerateDenominatorError if it is
        not positive: scoring a pool of one case (or none) is a loop-bound
        error, not something to recover from.
        """

        d = self.n_active - 1
        if d <= 0:
            raise DegenerateDenominatorError(
                "Pool has {} active case(s) after {} drop(s); cannot score (n - 1 - j = {})."
                .format(self.n_active, self.n_dropped, d))
        return d

    def __repr__(self):

        return ("PoolState(n_cases={}, n_active={}, dropped_quality={})"
                .format(self.n_cases, self.n_active, list(self.dropped_quality)))


def initial_pool_state(total_cost, n_cases, n_variables=1):
    """
    Return PoolState for round 0: all n_cases cases active and
    nothing dropped.  total_cost is the [S] array of per-draw pool
    totals (risk-conscious) or the point total (deterministic).
    """

    if n_cases <= 0:
        raise EmptyPoolError("Cannot start elimination with an empty pool.")
    return PoolState(total_cost,
                     np.zeros_like(np.asarray(total_cost, dtype=float)),
                     np.zeros(n_variables),
                     n_cases,
                     range(n_cases))


def fold_dropped(state, position, future_cost, quality):
    """
    Aggregate updater.  Return the PoolState for the next round,
    after dropping the case at the given position, whose future cost
    (per draw, or point) and quality value(s) are given.
    """

    if position not in state.active:
        raise ValueError("Case position {} is not active.".format(position))
    return PoolState(state.total_cost,
                     state.dropped_cost + np.asarray(future_cost, dtype=float),
                     state.dropped_quality + np.atleast_1d(np.asarray(quality, dtype=float)),
                     state.n_cases,
                     [i for i in state.active if i != position])
