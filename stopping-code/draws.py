# draws.py
# October 2026
# python3

"""
Draw aggregator: collapse per-case, per-draw future costs into
per-draw pool totals.

For draw s the pool total is

    total(s) = sunk_cost + sum over all cases i of future_cost(i, s)

i.e. what data collection would cost, overall, under scenario s if no
case were stopped.  Draw s is a scenario realized jointly for the
whole pool, so summing down a column is meaningful.

The deterministic variant has a single scenario; its "pool total" is
the point analogue (or a total supplied by the caller).
"""

import numpy as np


def pool_totals(table, sunk_cost=0.0):
    """
    Return [S] array of per-draw pool totals for DrawTable table,
    including sunk_cost (the cost already incurred to date).
    """

    return float(sunk_cost) + np.sum(table.costs, axis=0)


def pool_total(table, sunk_cost=0.0):
    """ Return point pool total for CaseTable table, including sunk_cost. """

    return float(sunk_cost) + float(np.sum(table.costs))
