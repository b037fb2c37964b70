"""
Tests for synthetic pool generation.
"""

import numpy as np
import pytest

import cases
import syn


def test_same_seed_gives_same_draws():
    first = syn.generate_draw_table(syn.Syn_Params(n_cases=5, n_draws=20, seed=7))
    second = syn.generate_draw_table(syn.Syn_Params(n_cases=5, n_draws=20, seed=7))
    assert np.array_equal(first.costs, second.costs)
    assert np.array_equal(first.quality, second.quality)


def test_different_seed_gives_different_draws():
    first = syn.generate_draw_table(syn.Syn_Params(n_cases=5, n_draws=20, seed=7))
    second = syn.generate_draw_table(syn.Syn_Params(n_cases=5, n_draws=20, seed=8))
    assert not np.array_equal(first.costs, second.costs)


def test_draw_table_shape_and_ids():
    table = syn.generate_draw_table(syn.Syn_Params(n_cases=4, n_draws=25, first_caseid=7))
    assert table.caseids == ["7", "8", "9", "10"]
    assert table.costs.shape == (4, 25)
    assert np.all(table.costs > 0)


def test_case_table_has_two_quality_variables():
    table = syn.generate_case_table(syn.Syn_Params(variant="deterministic", n_cases=6))
    assert table.n_cases == 6
    assert table.n_variables == 2


def test_unknown_parameter_raises():
    with pytest.raises(TypeError):
        syn.Syn_Params(n_households=10)


def test_written_draws_read_back(tmp_path):
    table = syn.write_run(syn.Syn_Params(n_cases=3, n_draws=5), str(tmp_path), "w")
    draws_files = list((tmp_path / "w" / "2-cases").glob("draws-*.csv"))
    assert len(draws_files) == 1

    read_back = cases.read_draw_table(str(draws_files[0]), n_draws=5)

    assert read_back.caseids == table.caseids
    np.testing.assert_allclose(read_back.costs, table.costs, atol=1e-4)
    np.testing.assert_allclose(read_back.quality, table.quality, atol=1e-6)


def test_main_writes_deterministic_run(tmp_path):
    assert syn.main(["d", "--runs_root", str(tmp_path), "--variant", "deterministic",
                     "--cases", "5"]) == 0
    case_files = list((tmp_path / "d" / "2-cases").glob("cases-*.csv"))
    assert len(case_files) == 1
    assert cases.read_case_table(str(case_files[0])).n_cases == 5
