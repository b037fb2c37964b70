# psi.py
# October 2026
# python3

"""
Tradeoff scorer: the multiplicative cost-variance statistic psi.

psi for a case is the projected remaining cost of data collection if
that case were stopped, times the estimated sampling-variance
contribution after stopping it.  Small psi means stopping the case
does little harm to the combined cost/error objective.

Both scorers are pure functions of (table, PoolState): calling them
twice on the same arguments gives bit-identical arrays.  All active
cases (and, for the risk-conscious variant, all draws) are scored at
once with numpy broadcasting; no case's score depends on another's.

Risk-conscious variant, for active case i and draw s, with d = n_active - 1:

    remaining_cost(i,s) = current_total(s) - future_cost(i,s)
    est_variance(i,s)   = (quality(i) / d)**2 + 1/d
    psi(i,s)            = remaining_cost(i,s) * est_variance(i,s)

Deterministic variant, with k quality variables each weighted 1/k,
j cases dropped so far and d = n - 1 - j:

    remaining_cost(i) = total - dropped_cost - future_cost(i)
    var_term(i,v)     = ((dropped_sum(v) + quality(i,v)) / d)**2 + 1/d
    psi(i)            = sum over v of (1/k) * remaining_cost(i) * var_term(i,v)
"""

import numpy as np


class CaseScores(object):
    """
    Scores for the active cases of one round.  Row r of each array
    belongs to the case at table position positions[r].

        positions       [m] table positions of the m active cases
        remaining_cost  [m, S] (risk) or [m] (deterministic)
        est_variance    [m, S] (risk) or [m] (deterministic; 1/k-weighted
                        mean of the var_terms)
        psi             [m, S] (risk) or [m] (deterministic)
        var_terms       [m, k] (deterministic only; None for risk)
    """

    def __init__(self, positions, remaining_cost, est_variance, psi, var_terms=None):

        self.positions = list(positions)
        self.remaining_cost = remaining_cost
        self.est_variance = est_variance
        self.psi = psi
        self.var_terms = var_terms

    def __len__(self):
        return len(self.positions)


def risk_scores(table, state):
    """ 
    Return CaseScores, per active case and per draw, for DrawTable
    table and PoolState state.
    """

    d = state.denominator()
    positions = list(state.active)
    remaining_cost = state.current_total[np.newaxis, :] - table.costs[positions, :]
    variance = (table.quality[positions] / d) ** 2 + 1.0 / d
    est_variance = np.repeat(variance[:, np.newaxis], table.n_draws, axis=1)
    psi = remaining_cost * est_variance
    return CaseScores(positions, remaining_cost, est_variance, psi)


def deterministic_scores(table, state):
    """
    Return CaseScores, one value per active case, for CaseTable table
    and PoolState state.  Each of the table's k quality variables gets
    weight 1/k.
    """

    d = state.denominator()
    k = table.n_variables
    positions = list(state.active)
    remaining_cost = state.current_total - table.costs[positions]
    var_terms = ((state.dropped_quality[np.newaxis, :] + table.quality[positions, :]) / d) ** 2 \
        + 1.0 / d
    psi = np.sum(remaining_cost[:, np.newaxis] * var_terms / k, axis=1)
    est_variance = np.sum(var_terms / k, axis=1)
    return CaseScores(positions, remaining_cost, est_variance, psi, var_terms)
