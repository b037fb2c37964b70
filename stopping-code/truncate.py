# truncate.py
# October 2026
# python3

"""
Budget/threshold truncator: turn a completed EliminationOrder into
the final set of cases to stop.

Risk-conscious variant (truncate_by_budget):
    Scan records in elimination order.  The boundary record is the
    first one whose upper (P90) bound on remaining cost is strictly
    below the budget; the stop set is the prefix of records ending at
    the boundary.  If no record qualifies, nothing is stopped: data
    collection should not be curtailed under that budget.

    Both readings of the output are exposed.  StopSet.boundary is the
    single boundary record; StopSet.prefix is every record up to and
    including it.  StopSet.caseids(scope) picks one of them.

Deterministic variant (truncate_by_baseline):
    The baseline psi_0 = total_cost / n is the average cost per case
    before any drop.  Take the record with globally minimal psi over
    the whole elimination history (earliest on ties).  If that psi is
    below psi_0, the stop set is the prefix of the elimination order
    ending at that record's *elimination order* index; else nothing is
    stopped.

Either way at most n-1 cases are stopped: the implicit last case is
never part of any record.
"""

import logging

import numpy as np

from errors import NoBudgetSatisfyingCaseError

logger = logging.getLogger(__name__)

PREFIX = "prefix"
BOUNDARY = "boundary"
SCOPES = (PREFIX, BOUNDARY)


class StopSet(object):
    """
    Result of truncation.

        boundary    the EliminationRecord ending the stop set, or None
        prefix      list of EliminationRecords up to and including boundary
        threshold   the budget (risk) or baseline psi_0 (deterministic) used
    """

    def __init__(self, boundary, prefix, threshold):

        self.boundary = boundary
        self.prefix = list(prefix)
        self.threshold = threshold

    @property
    def is_empty(self):
        return self.boundary is None

    def caseids(self, scope=PREFIX):
        """ Return case ids to stop: the whole prefix, or just the boundary case. """

        if scope not in SCOPES:
            raise ValueError("Unknown stop scope `{}`; use one of {}.".format(scope, SCOPES))
        if self.boundary is None:
            return []
        if scope == BOUNDARY:
            return [self.boundary.caseid]
        return [record.caseid for record in self.prefix]

    def __len__(self):
        return len(self.prefix)


def truncate_by_budget(order, budget, strict=False):
    """
    Return StopSet for risk-conscious EliminationOrder order and the
    given budget.  If strict, raise NoBudgetSatisfyingCaseError instead
    of returning an empty StopSet.
    """

    records = list(order)
    for index, record in enumerate(records):
        if record.rc_hi < budget:
            logger.info("budget %g first satisfied at order %d (case %s, P90 remaining cost %g)",
                        budget, record.order, record.caseid, record.rc_hi)
            return StopSet(record, records[:index + 1], budget)
    msg = "No case satisfies budget {}; no cases stopped.".format(budget)
    if strict:
        raise NoBudgetSatisfyingCaseError(msg)
    logger.info(msg)
    return StopSet(None, [], budget)


def baseline_psi(order):
    """ Return psi_0 = initial pool total / n for a deterministic EliminationOrder. """

    return float(np.asarray(order.total_cost)) / order.n_cases


def truncate_by_baseline(order, strict=False):
    """
    Return StopSet for deterministic EliminationOrder order, comparing
    the minimal psi of its history to the baseline psi_0.
    If strict, raise NoBudgetSatisfyingCaseError instead of returning an
    empty StopSet.
    """

    psi_0 = baseline_psi(order)
    records = list(order)
    if len(records) > 0:
        # min() keeps the first of equal values, i.e. the earliest order
        best = min(records, key=lambda record: record.psi_hi)
        if best.psi_hi < psi_0:
            logger.info("minimal psi %g (order %d, case %s) is below baseline %g",
                        best.psi_hi, best.order, best.caseid, psi_0)
            prefix = [record for record in records if record.order <= best.order]
            return StopSet(best, prefix, psi_0)
    msg = "No psi below baseline {:g}; no cases stopped.".format(psi_0)
    if strict:
        raise NoBudgetSatisfyingCaseError(msg)
    logger.info(msg)
    return StopSet(None, [], psi_0)
