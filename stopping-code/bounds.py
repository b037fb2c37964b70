# bounds.py
# October 2026
# python3

"""
Bound/percentile reducer: reduce per-case, per-draw scores to
case-level bounds, to be used for robust (worst-case-aware) selection.

Percentiles here are empirical, with no interpolation.  For S values
sorted ascending, the q-th percentile is the value of 1-based rank

    floor(q * S) + 1        (clamped to 1..S)

so with the canonical S = 1000 draws the 10th and 90th percentiles are
the values of rank 101 and 901.  When q*S is not an integer this is
just ceil(q*S).
"""

import math

import numpy as np

# q*S computed in floating point can land a hair below an integer
RANK_EPSILON = 1e-9


class CaseBounds(object):
    """
    Lower/upper bounds (e.g. P10/P90) for each active case of one round,
    row r belonging to table position positions[r].

        psi_lo, psi_hi    [m] bounds on psi
        rc_lo, rc_hi      [m] bounds on remaining cost
        var_lo, var_hi    [m] bounds on estimated variance
    """

    def __init__(self, positions, psi_lo, psi_hi, rc_lo, rc_hi, var_lo, var_hi):

        self.positions = list(positions)
        self.psi_lo = psi_lo
        self.psi_hi = psi_hi
        self.rc_lo = rc_lo
        self.rc_hi = rc_hi
        self.var_lo = var_lo
        self.var_hi = var_hi

    def __len__(self):
        return len(self.positions)


def percentile_rank(q, n):
    """
    Return 1-based rank of the empirical q-th percentile of n values.

    >>> percentile_rank(0.10, 1000), percentile_rank(0.90, 1000)
    (101, 901)
    >>> percentile_rank(0.10, 5), percentile_rank(0.90, 5)
    (1, 5)
    """

    if not 0.0 <= q <= 1.0:
        raise ValueError("Percentile {} not in [0, 1].".format(q))
    if n <= 0:
        raise ValueError("Cannot take a percentile of {} values.".format(n))
    rank = int(math.floor(q * n + RANK_EPSILON)) + 1
    return min(max(rank, 1), n)


def empirical_percentile(values, q):
    """
    Return empirical q-th percentile along the last axis of values
    (so for an [m, S] array, one percentile per row).
    """

    values = np.asarray(values, dtype=float)
    rank = percentile_rank(q, values.shape[-1])
    return np.sort(values, axis=-1)[..., rank - 1]


def reduce_risk_scores(scores, lower=0.10, upper=0.90):
    """ Return CaseBounds for risk-conscious CaseScores scores. """

    return CaseBounds(scores.positions,
                      empirical_percentile(scores.psi, lower),
                      empirical_percentile(scores.psi, upper),
                      empirical_percentile(scores.remaining_cost, lower),
                      empirical_percentile(scores.remaining_cost, upper),
                      empirical_percentile(scores.est_variance, lower),
                      empirical_percentile(scores.est_variance, upper))


def reduce_point_scores(scores):
    """
    Return CaseBounds for deterministic CaseScores scores.  Nothing to
    reduce: each lower bound equals its upper bound equals the point value.
    """

    return CaseBounds(scores.positions,
                      scores.psi, scores.psi,
                      scores.remaining_cost, scores.remaining_cost,
                      scores.est_variance, scores.est_variance)
