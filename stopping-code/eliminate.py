# eliminate.py
# October 2026
# python3

"""
Elimination loop driver: the greedy sequential elimination that
produces a total order over cases to stop.

Each round j = 0, 1, ..., n-2 does:
    score   every active case against the current PoolState  (psi.py)
    reduce  the scores to per-case bounds                     (bounds.py)
    select  the least harmful case to drop                    (selector.py)
    record  EliminationRecord(order=j+1, case, bounds)
    update  the PoolState with the dropped case               (pool.py)
and the loop is done once exactly one case remains.  That last case
is never scored; it is implicitly the last to drop, and is reported
as EliminationOrder.last_caseid.

Rounds are strictly sequential, since round j+1 scores against the
state left by round j.  The PoolState is owned by the driver and is
passed to, and returned from, each round explicitly.
"""

import collections
import logging

import bounds
import draws
import ids
import pool
import psi
import selector
import utils
from errors import EmptyPoolError, InputError, InsufficientDrawsError

logger = logging.getLogger(__name__)

RISK = "risk"
DETERMINISTIC = "deterministic"

# Number of quality variables in the deterministic variant
N_WEIGHTS = 2


EliminationRecord = collections.namedtuple(
    "EliminationRecord",
    ["order", "caseid", "rc_lo", "rc_hi", "var_lo", "var_hi", "psi_lo", "psi_hi"])
EliminationRecord.__doc__ = """
One round's outcome: the case dropped in round `order` (1 = first
dropped), with lower/upper bounds (P10/P90 for the risk-conscious
variant; both equal to the point value for the deterministic one) on
the remaining cost and the estimated variance after its removal, and
on its psi score.
"""

TRACE_FIELDNAMES = list(EliminationRecord._fields)


class EliminationOrder(object):
    """
    The sequence of EliminationRecords of a completed loop, plus the
    one case that is never explicitly dropped.

        variant       RISK or DETERMINISTIC
        records       list of n-1 EliminationRecords, in order 1..n-1
        last_caseid   the implicit last case
        n_cases       n
        total_cost    initial pool total (per draw, or point)
        states        PoolState before each round, then the final one
    """

    def __init__(self, variant, records, last_caseid, n_cases, total_cost, states=None):

        self.variant = variant
        self.records = list(records)
        self.last_caseid = last_caseid
        self.n_cases = n_cases
        self.total_cost = total_cost
        self.states = list(states or [])

    def __len__(self):
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def caseids(self, include_last=False):
        """ Return case ids in elimination order (optionally with the last one). """

        caseids = [record.caseid for record in self.records]
        if include_last:
            caseids.append(self.last_caseid)
        return caseids


##############################################################################
# Single rounds


def risk_round(table, state, lower=0.10, upper=0.90, caseid_key=None):
    """
    Run one risk-conscious round on DrawTable table from PoolState state.
    Return (record, new_state); record.order is state.n_dropped + 1.
    """

    if caseid_key is None:
        caseid_key = ids.caseid_key_function(table.caseids)
    scores = psi.risk_scores(table, state)
    case_bounds = bounds.reduce_risk_scores(scores, lower, upper)
    r = selector.select_case(case_bounds, table.caseids, caseid_key)
    position = case_bounds.positions[r]
    record = EliminationRecord(state.n_dropped + 1,
                               table.caseids[position],
                               float(case_bounds.rc_lo[r]),
                               float(case_bounds.rc_hi[r]),
                               float(case_bounds.var_lo[r]),
                               float(case_bounds.var_hi[r]),
                               float(case_bounds.psi_lo[r]),
                               float(case_bounds.psi_hi[r]))
    new_state = pool.fold_dropped(state, position,
                                  table.costs[position],
                                  table.quality[position])
    return record, new_state


def deterministic_round(table, state, caseid_key=None):
    """
    Run one deterministic round on CaseTable table from PoolState state.
    Return (record, new_state).
    """

    if caseid_key is None:
        caseid_key = ids.caseid_key_function(table.caseids)
    scores = psi.deterministic_scores(table, state)
    case_bounds = bounds.reduce_point_scores(scores)
    r = selector.select_case(case_bounds, table.caseids, caseid_key)
    position = case_bounds.positions[r]
    record = EliminationRecord(state.n_dropped + 1,
                               table.caseids[position],
                               float(case_bounds.rc_lo[r]),
                               float(case_bounds.rc_hi[r]),
                               float(case_bounds.var_lo[r]),
                               float(case_bounds.var_hi[r]),
                               float(case_bounds.psi_lo[r]),
                               float(case_bounds.psi_hi[r]))
    new_state = pool.fold_dropped(state, position,
                                  table.costs[position],
                                  table.quality[position])
    return record, new_state


##############################################################################
# The loop


def run_loop(variant, table, state, round_function, trace_name=None):
    """
    Drive rounds from state Running(0) until one case remains (Done).
    round_function(table, state) -> (record, new_state).
    Return EliminationOrder.
    """

    records = []
    states = [state]
    if trace_name is not None:
        utils.log_csv(trace_name, TRACE_FIELDNAMES)
    while state.n_active > 1:
        record, state = round_function(table, state)
        records.append(record)
        states.append(state)
        logger.debug("round %d: dropped case %s (psi_hi=%g, rc_hi=%g); %d active",
                     record.order, record.caseid, record.psi_hi, record.rc_hi,
                     state.n_active)
        if trace_name is not None:
            utils.log_csv(trace_name, record)
    last_caseid = table.caseids[state.active[0]]
    logger.info("%s elimination done: %d case(s) ordered, last case %s",
                variant, len(records), last_caseid)
    return EliminationOrder(variant, records, last_caseid, state.n_cases,
                            states[0].total_cost, states)


def eliminate_risk(table, sunk_cost=0.0, lower=0.10, upper=0.90, n_draws=None,
                   trace_name=None):
    """
    Run the risk-conscious elimination loop over DrawTable table.
    Return EliminationOrder.

    sunk_cost is the cost incurred to date; lower/upper are the
    percentiles used as bounds (selection is by the upper bound on psi).
    If n_draws is given, the table must have exactly that many draws.
    """

    if table.n_cases == 0:
        raise EmptyPoolError("Cannot run elimination on an empty pool.")
    if n_draws is not None and table.n_draws != n_draws:
        # cases x draws array is rectangular, so one check covers every case
        raise InsufficientDrawsError("Every case has {} draws; expected {}."
                                     .format(table.n_draws, n_draws))
    if not 0.0 <= lower <= upper <= 1.0:
        raise ValueError("Need 0 <= lower ({}) <= upper ({}) <= 1.".format(lower, upper))
    logger.info("risk-conscious elimination: %d cases x %d draws, sunk cost %g",
                table.n_cases, table.n_draws, sunk_cost)
    state = pool.initial_pool_state(draws.pool_totals(table, sunk_cost),
                                    table.n_cases, 1)
    caseid_key = ids.caseid_key_function(table.caseids)
    return run_loop(RISK, table, state,
                    lambda t, s: risk_round(t, s, lower, upper, caseid_key),
                    trace_name)


def eliminate_deterministic(table, total_cost=None, sunk_cost=0.0, trace_name=None):
    """
    Run the deterministic elimination loop over CaseTable table.
    Return EliminationOrder.

    total_cost is the total predicted cost for the pool; if None, it is
    sunk_cost plus the sum of the cases' predicted future costs.
    """

    if table.n_cases == 0:
        raise EmptyPoolError("Cannot run elimination on an empty pool.")
    if table.n_variables != N_WEIGHTS:
        raise InputError("Deterministic variant needs exactly {} quality variables, not {}."
                         .format(N_WEIGHTS, table.n_variables))
    if total_cost is None:
        total_cost = draws.pool_total(table, sunk_cost)
    logger.info("deterministic elimination: %d cases, total cost %g",
                table.n_cases, total_cost)
    state = pool.initial_pool_state(total_cost, table.n_cases, table.n_variables)
    caseid_key = ids.caseid_key_function(table.caseids)
    return run_loop(DETERMINISTIC, table, state,
                    lambda t, s: deterministic_round(t, s, caseid_key),
                    trace_name)
