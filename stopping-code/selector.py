# selector.py
# October 2026
# python3

"""
Greedy selector: pick the single case to stop this round.

The case chosen is the one with the smallest upper bound on psi: for
the risk-conscious variant that is the smallest 90th-percentile psi
(the case whose worst plausible harm is least), and for the
deterministic variant, where upper bound and point value coincide,
simply the smallest psi.  Ties go to the smallest case id (see ids.py).
"""

from errors import EmptyPoolError


def select_case(bounds, caseids, caseid_key):
    """
    Return row r (0 <= r < len(bounds)) of the case to drop.

    bounds is a CaseBounds; caseids maps table positions to case ids;
    caseid_key orders case ids (from ids.caseid_key_function).
    """

    if len(bounds) == 0:
        raise EmptyPoolError("No active cases to select from.")
    return min(range(len(bounds)),
               key=lambda r: (bounds.psi_hi[r],
                              caseid_key(caseids[bounds.positions[r]])))
