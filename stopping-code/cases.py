# cases.py
# October 2026
# python3

"""
Routines to read in, and hold, the prepared case-level inputs
for a case-elimination run.

There are two table formats, one per variant.

Risk-conscious variant: a "draws" table keyed by (case id, draw index),
one row per case per Monte Carlo draw:

Case id , Draw , Future cost , Quality
1001    , 1    , 212.50      , 0.73
1001    , 2    , 198.00      , 0.73
...
1002    , 1    , 55.10       , -1.20
...

The quality value is a standardized survey variable; it is fixed per
case, so it must be the same on all of a case's rows.  Every case must
have the same number S of draws, and the same set of draw indices,
since draw s is one scenario realized jointly for the whole pool.

Deterministic variant: a "cases" table keyed by case id:

Case id , Future cost , Quality 1 , Quality 2
1001    , 210.00      , 0.73      , -0.11
1002    , 54.00       , -1.20     , 0.40

Input tables are read once and never mutated afterwards; the
elimination loop only removes cases from its active set.
"""

import logging

import numpy as np

import csv_readers
import ids
from errors import InputError, InsufficientDrawsError

logger = logging.getLogger(__name__)

DRAW_FIELDNAMES = ["Case id", "Draw", "Future cost", "Quality"]
CASE_FIELDNAMES = ["Case id", "Future cost", "Quality 1", "Quality 2"]


class Case(object):
    """
    One sampling case: its id, predicted future cost (a point value,
    or a 1-d array with one value per draw), and a tuple of its
    standardized quality variable values.
    """

    def __init__(self, caseid, future_cost, quality):

        self.caseid = ids.clean_id(caseid)
        self.future_cost = future_cost
        self.quality = tuple(quality)

    def __repr__(self):

        return "Case({!r}, {!r}, {!r})".format(self.caseid,
                                                self.future_cost,
                                                self.quality)


##############################################################################
# Risk-conscious input: cases x draws


class DrawTable(object):
    """
    Risk-conscious input, as arrays indexed by case position i
    (0..n-1, in order of first appearance) and draw position s (0..S-1,
    in increasing order of draw index).

        caseids       [n] list of case ids
        draw_indices  [S] list of draw indices (ints) as in the input
        costs         [n, S] future cost of case i in draw s
        quality       [n] standardized quality value of case i
    """

    def __init__(self, caseids, costs, quality, draw_indices=None):

        self.caseids = [ids.clean_id(caseid) for caseid in caseids]
        self.costs = np.asarray(costs, dtype=float)
        self.quality = np.asarray(quality, dtype=float)
        if self.costs.ndim != 2:
            raise InputError("Draw costs must be a 2-d (cases x draws) array.")
        if draw_indices is None:
            draw_indices = list(range(1, self.costs.shape[1] + 1))
        self.draw_indices = list(draw_indices)
        check_unique_caseids(self.caseids)
        if self.costs.shape[0] != len(self.caseids) or \
           self.quality.shape != (len(self.caseids),):
            raise InputError("Draw table has {} case ids but costs of shape {} and quality of shape {}."
                             .format(len(self.caseids), self.costs.shape,
                                     self.quality.shape))
        if len(self.draw_indices) != self.costs.shape[1]:
            raise InputError("Draw table has {} draw indices but {} cost columns."
                             .format(len(self.draw_indices), self.costs.shape[1]))

    @property
    def n_cases(self):
        return len(self.caseids)

    @property
    def n_draws(self):
        return self.costs.shape[1]

    def case(self, i):
        return Case(self.caseids[i], self.costs[i], (self.quality[i],))


def make_draw_table(caseids, costs, quality, n_draws=None, draw_indices=None):
    """
    Return a DrawTable for the given arrays, after checking that it has
    exactly n_draws draws per case (if n_draws is given).
    """

    table = DrawTable(caseids, costs, quality, draw_indices)
    if n_draws is not None and table.n_draws != n_draws:
        raise InsufficientDrawsError("Every case has {} draws; expected {}."
                                     .format(table.n_draws, n_draws))
    return table


def read_draw_table(filename, n_draws=None):
    """
    Read risk-conscious draw table from CSV file filename; return DrawTable.

    If n_draws is given, each case must have exactly that many draws;
    otherwise the number of draws of the first case is used.  In either
    case, every case must have the same set of draw indices.
    """

    rows = csv_readers.read_csv_file(filename, DRAW_FIELDNAMES)
    caseids = []
    costs_cd = {}                   # caseid -> draw -> cost
    quality_c = {}                  # caseid -> quality
    for row in rows:
        caseid = row["Case id"]
        if caseid == "":
            raise InputError("{}: row with empty Case id: {}".format(filename, row))
        draw = csv_readers.to_int(row["Draw"], "Draw", filename)
        cost = csv_readers.to_float(row["Future cost"], "Future cost", filename)
        quality = csv_readers.to_float(row["Quality"], "Quality", filename)
        if caseid not in costs_cd:
            caseids.append(caseid)
            costs_cd[caseid] = {}
            quality_c[caseid] = quality
        elif quality_c[caseid] != quality:
            raise InputError("{}: case {} has quality {} and {} on different draws."
                             .format(filename, caseid, quality_c[caseid], quality))
        if draw in costs_cd[caseid]:
            raise InsufficientDrawsError("{}: case {} has draw {} more than once."
                                         .format(filename, caseid, draw))
        costs_cd[caseid][draw] = cost
    if len(caseids) == 0:
        raise InputError("{}: no cases.".format(filename))

    draw_indices = check_draws(costs_cd, n_draws)
    costs = np.array([[costs_cd[caseid][draw] for draw in draw_indices]
                      for caseid in caseids], dtype=float)
    quality = np.array([quality_c[caseid] for caseid in caseids], dtype=float)
    logger.info("Read %d cases x %d draws from %s",
                len(caseids), len(draw_indices), filename)
    return DrawTable(caseids, costs, quality, draw_indices)


def check_draws(costs_cd, n_draws=None):
    """
    Check that every case in costs_cd (caseid -> draw -> cost) has
    exactly n_draws draws, with the same draw indices for every case.
    Return the sorted list of draw indices.
    """

    caseids = list(costs_cd)
    first_draws = set(costs_cd[caseids[0]])
    if n_draws is None:
        n_draws = len(first_draws)
    for caseid in caseids:
        draws = set(costs_cd[caseid])
        if len(draws) != n_draws:
            raise InsufficientDrawsError("Case {} has {} draws; expected {}."
                                         .format(caseid, len(draws), n_draws))
        if draws != first_draws:
            missing = sorted(first_draws - draws)[:5]
            raise InsufficientDrawsError("Case {} draws are not aligned with case {} (e.g. missing {})."
                                         .format(caseid, caseids[0], missing))
    return sorted(first_draws)


##############################################################################
# Deterministic input: one row per case


class CaseTable(object):
    """
    Deterministic input, as arrays indexed by case position i.

        caseids   [n] list of case ids
        costs     [n] predicted future cost of case i
        quality   [n, k] standardized quality values (k=2) of case i
    """

    def __init__(self, caseids, costs, quality):

        self.caseids = [ids.clean_id(caseid) for caseid in caseids]
        self.costs = np.asarray(costs, dtype=float)
        self.quality = np.asarray(quality, dtype=float)
        check_unique_caseids(self.caseids)
        if self.costs.shape != (len(self.caseids),) or \
           self.quality.ndim != 2 or self.quality.shape[0] != len(self.caseids):
            raise InputError("Case table has {} case ids but costs of shape {} and quality of shape {}."
                             .format(len(self.caseids), self.costs.shape,
                                     self.quality.shape))

    @property
    def n_cases(self):
        return len(self.caseids)

    @property
    def n_variables(self):
        return self.quality.shape[1]

    def case(self, i):
        return Case(self.caseids[i], float(self.costs[i]), self.quality[i])


def case_table_from_cases(cases):
    """ Return CaseTable for a list of Case objects with point costs. """

    return CaseTable([case.caseid for case in cases],
                     [case.future_cost for case in cases],
                     [case.quality for case in cases])


def read_case_table(filename):
    """ Read deterministic case table from CSV file filename; return CaseTable. """

    rows = csv_readers.read_csv_file(filename, CASE_FIELDNAMES)
    cases = []
    for row in rows:
        if row["Case id"] == "":
            raise InputError("{}: row with empty Case id: {}".format(filename, row))
        cases.append(Case(row["Case id"],
                          csv_readers.to_float(row["Future cost"], "Future cost", filename),
                          (csv_readers.to_float(row["Quality 1"], "Quality 1", filename),
                           csv_readers.to_float(row["Quality 2"], "Quality 2", filename))))
    if len(cases) == 0:
        raise InputError("{}: no cases.".format(filename))
    logger.info("Read %d cases from %s", len(cases), filename)
    return case_table_from_cases(cases)


def check_unique_caseids(caseids):

    seen = set()
    for caseid in caseids:
        if caseid in seen:
            raise InputError("Duplicate case id `{}`.".format(caseid))
        seen.add(caseid)
