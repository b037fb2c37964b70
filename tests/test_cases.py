"""
Unit tests for reading case and draw tables.
"""

import numpy as np
import pytest

import cases
from errors import InputError, InsufficientDrawsError

from conftest import write_csv


def draw_rows(costs_by_case, quality_by_case):
    rows = [cases.DRAW_FIELDNAMES]
    for caseid, costs in costs_by_case.items():
        for draw, cost in costs.items():
            rows.append([caseid, draw, cost, quality_by_case[caseid]])
    return rows


class TestReadDrawTable:

    def test_read_when_rectangular_then_pivots_by_draw(self, tmp_path):
        path = write_csv(tmp_path / "draws.csv", draw_rows(
            {"7": {2: 12.0, 1: 11.0}, "3": {1: 31.0, 2: 32.0}},
            {"7": 0.5, "3": -1.0}))

        table = cases.read_draw_table(str(path))

        assert table.caseids == ["7", "3"]
        assert table.draw_indices == [1, 2]
        assert table.n_draws == 2
        np.testing.assert_array_equal(table.costs, [[11.0, 12.0], [31.0, 32.0]])
        np.testing.assert_array_equal(table.quality, [0.5, -1.0])

    def test_read_when_case_missing_a_draw_then_raises(self, tmp_path):
        path = write_csv(tmp_path / "draws.csv", draw_rows(
            {"1": {1: 1.0, 2: 2.0}, "2": {1: 1.0}},
            {"1": 0.0, "2": 0.0}))
        with pytest.raises(InsufficientDrawsError, match="Case 2 has 1 draws"):
            cases.read_draw_table(str(path))

    def test_read_when_draws_not_aligned_then_raises(self, tmp_path):
        path = write_csv(tmp_path / "draws.csv", draw_rows(
            {"1": {1: 1.0, 2: 2.0}, "2": {1: 1.0, 3: 3.0}},
            {"1": 0.0, "2": 0.0}))
        with pytest.raises(InsufficientDrawsError, match="not aligned"):
            cases.read_draw_table(str(path))

    def test_read_when_configured_draw_count_differs_then_raises(self, tmp_path):
        path = write_csv(tmp_path / "draws.csv", draw_rows(
            {"1": {1: 1.0, 2: 2.0}}, {"1": 0.0}))
        with pytest.raises(InsufficientDrawsError):
            cases.read_draw_table(str(path), n_draws=1000)

    def test_read_when_duplicate_draw_then_raises(self, tmp_path):
        path = write_csv(tmp_path / "draws.csv",
                         [cases.DRAW_FIELDNAMES, [1, 1, 5.0, 0], [1, 1, 6.0, 0]])
        with pytest.raises(InsufficientDrawsError, match="more than once"):
            cases.read_draw_table(str(path))

    def test_read_when_quality_varies_across_draws_then_raises(self, tmp_path):
        path = write_csv(tmp_path / "draws.csv",
                         [cases.DRAW_FIELDNAMES, [1, 1, 5.0, 0.1], [1, 2, 6.0, 0.2]])
        with pytest.raises(InputError, match="quality"):
            cases.read_draw_table(str(path))

    def test_read_when_cost_not_numeric_then_raises(self, tmp_path):
        path = write_csv(tmp_path / "draws.csv",
                         [cases.DRAW_FIELDNAMES, [1, 1, "lots", 0.1]])
        with pytest.raises(InputError, match="Future cost"):
            cases.read_draw_table(str(path))

    @pytest.mark.parametrize("bad_cost", ["nan", "inf", "-inf"])
    def test_read_when_cost_not_finite_then_raises(self, tmp_path, bad_cost):
        path = write_csv(tmp_path / "draws.csv", draw_rows(
            {"1": {1: bad_cost, 2: 2.0}, "2": {1: 1.0, 2: 2.0}, "3": {1: 1.0, 2: 2.0}},
            {"1": 0.0, "2": 0.0, "3": 0.0}))
        with pytest.raises(InputError, match="not a finite number"):
            cases.read_draw_table(str(path))

    def test_read_when_wrong_header_then_raises(self, tmp_path):
        path = write_csv(tmp_path / "draws.csv",
                         [["Case", "Draw", "Cost", "Quality"], [1, 1, 5.0, 0.1]])
        with pytest.raises(InputError, match="fieldnames"):
            cases.read_draw_table(str(path))

    def test_read_when_no_rows_then_raises(self, tmp_path):
        path = write_csv(tmp_path / "draws.csv", [cases.DRAW_FIELDNAMES])
        with pytest.raises(InputError, match="no cases"):
            cases.read_draw_table(str(path))


class TestReadCaseTable:

    def test_read_when_valid_then_returns_two_quality_columns(self, tmp_path):
        path = write_csv(tmp_path / "cases.csv",
                         [cases.CASE_FIELDNAMES, ["A", 5, 1, 0], [" B ", 15, -1, 0]])

        table = cases.read_case_table(str(path))

        assert table.caseids == ["A", "B"]
        assert table.n_variables == 2
        np.testing.assert_array_equal(table.costs, [5.0, 15.0])
        np.testing.assert_array_equal(table.quality, [[1.0, 0.0], [-1.0, 0.0]])

    def test_read_when_quality_not_finite_then_raises(self, tmp_path):
        path = write_csv(tmp_path / "cases.csv",
                         [cases.CASE_FIELDNAMES, ["A", 5, "NaN", 0], ["B", 15, -1, 0]])
        with pytest.raises(InputError, match="Quality 1"):
            cases.read_case_table(str(path))

    def test_read_when_duplicate_caseid_then_raises(self, tmp_path):
        path = write_csv(tmp_path / "cases.csv",
                         [cases.CASE_FIELDNAMES, ["A", 5, 1, 0], ["A", 15, -1, 0]])
        with pytest.raises(InputError, match="Duplicate case id"):
            cases.read_case_table(str(path))

    def test_read_when_missing_file_then_raises(self, tmp_path):
        with pytest.raises(InputError, match="Cannot read"):
            cases.read_case_table(str(tmp_path / "nope.csv"))

    def test_read_ignores_blank_rows_and_trailing_cells(self, tmp_path):
        path = tmp_path / "cases.csv"
        path.write_text("Case id,Future cost,Quality 1,Quality 2,\n"
                        "A,5,1,0,\n"
                        ",,,,\n"
                        "B,15,-1,0\n")
        table = cases.read_case_table(str(path))
        assert table.caseids == ["A", "B"]


class TestDrawTable:

    def test_make_when_costs_not_2d_then_raises(self):
        with pytest.raises(InputError):
            cases.make_draw_table(["1"], [1.0, 2.0], [0.0])

    def test_make_when_draw_count_differs_then_raises(self):
        with pytest.raises(InsufficientDrawsError):
            cases.make_draw_table(["1"], [[1.0, 2.0]], [0.0], n_draws=3)

    def test_case_returns_case_view(self, three_case_table):
        case = three_case_table.case(2)
        assert case.caseid == "3"
        assert case.quality == (0.0,)
        assert len(case.future_cost) == 10
