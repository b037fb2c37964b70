"""
Tests for truncating an elimination order into a stop set.
"""

import pytest

import eliminate
import syn
import truncate
from errors import NoBudgetSatisfyingCaseError

Record = eliminate.EliminationRecord


def risk_order(rc_his, last="last"):
    records = [Record(i, "c{}".format(i), rc - 1.0, rc, 0.1, 0.2, 1.0, 2.0)
               for i, rc in enumerate(rc_his, start=1)]
    return eliminate.EliminationOrder(eliminate.RISK, records, last,
                                      len(records) + 1, None)


def deterministic_order(psis, total_cost):
    records = [Record(i, "c{}".format(i), 1.0, 1.0, 0.5, 0.5, psi, psi)
               for i, psi in enumerate(psis, start=1)]
    return eliminate.EliminationOrder(eliminate.DETERMINISTIC, records, "last",
                                      len(records) + 1, total_cost)


class TestBudget:

    def test_boundary_is_first_record_under_budget(self):
        stop_set = truncate.truncate_by_budget(risk_order([100.0, 90.0, 80.0, 70.0]), 85.0)

        assert stop_set.boundary.order == 3
        assert stop_set.caseids() == ["c1", "c2", "c3"]
        assert stop_set.caseids(truncate.BOUNDARY) == ["c3"]
        assert stop_set.threshold == 85.0

    def test_later_records_are_not_included(self):
        stop_set = truncate.truncate_by_budget(risk_order([100.0, 80.0, 95.0, 70.0]), 85.0)
        assert stop_set.caseids() == ["c1", "c2"]
        assert len(stop_set) == 2

    def test_budget_comparison_is_strict(self):
        stop_set = truncate.truncate_by_budget(risk_order([100.0, 85.0]), 85.0)
        assert stop_set.is_empty
        assert stop_set.caseids() == []
        assert stop_set.caseids(truncate.BOUNDARY) == []

    def test_strict_when_no_record_qualifies_then_raises(self):
        with pytest.raises(NoBudgetSatisfyingCaseError):
            truncate.truncate_by_budget(risk_order([100.0, 90.0]), 50.0, strict=True)

    def test_unknown_scope_raises(self):
        stop_set = truncate.truncate_by_budget(risk_order([10.0]), 50.0)
        with pytest.raises(ValueError):
            stop_set.caseids("everything")

    def test_three_case_pool(self, three_case_table):
        order = eliminate.eliminate_risk(three_case_table)
        assert truncate.truncate_by_budget(order, 40.0).caseids() == ["3"]
        assert truncate.truncate_by_budget(order, 25.0).caseids() == ["3", "2"]
        assert truncate.truncate_by_budget(order, 10.0).is_empty

    def test_stop_set_never_holds_last_case(self):
        table = syn.generate_draw_table(syn.Syn_Params(n_cases=10, n_draws=40, seed=4))
        order = eliminate.eliminate_risk(table)
        for budget in (0.0, 100.0, 500.0, 1000.0, 1e9):
            caseids = truncate.truncate_by_budget(order, budget).caseids()
            assert len(caseids) <= table.n_cases - 1
            assert order.last_caseid not in caseids


class TestBaseline:

    def test_two_case_pool_stops_cheap_case(self, two_case_table):
        order = eliminate.eliminate_deterministic(two_case_table, total_cost=20.0)
        stop_set = truncate.truncate_by_baseline(order)

        assert truncate.baseline_psi(order) == 10.0
        assert stop_set.caseids() == ["B"]

    def test_nothing_stopped_when_min_psi_not_below_baseline(self):
        table_order = deterministic_order([82.5, 27.5], 30.0)
        stop_set = truncate.truncate_by_baseline(table_order)
        assert stop_set.is_empty
        assert stop_set.threshold == 10.0

    def test_prefix_ends_at_order_of_minimal_psi(self):
        # psi_0 = 40 / 5 = 8; minimum 4 is at order 3
        stop_set = truncate.truncate_by_baseline(deterministic_order([12.0, 9.0, 4.0, 7.0], 40.0))
        assert stop_set.boundary.order == 3
        assert stop_set.caseids() == ["c1", "c2", "c3"]

    def test_ties_take_earliest_record(self):
        stop_set = truncate.truncate_by_baseline(deterministic_order([3.0, 5.0, 3.0], 40.0))
        assert stop_set.boundary.order == 1
        assert stop_set.caseids() == ["c1"]

    def test_strict_when_nothing_below_baseline_then_raises(self):
        with pytest.raises(NoBudgetSatisfyingCaseError):
            truncate.truncate_by_baseline(deterministic_order([50.0], 20.0), strict=True)

    def test_single_case_pool_stops_nothing(self):
        order = eliminate.EliminationOrder(eliminate.DETERMINISTIC, [], "only", 1, 10.0)
        assert truncate.truncate_by_baseline(order).is_empty
