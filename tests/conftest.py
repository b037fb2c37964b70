import sys
from pathlib import Path

import numpy as np
import pytest

# Put stopping-code on sys.path so its modules import by bare name
CODE_PATH = Path(__file__).resolve().parent.parent / "stopping-code"
if CODE_PATH.as_posix() not in sys.path:
    sys.path.insert(0, CODE_PATH.as_posix())

import cases  # noqa: E402
import utils  # noqa: E402


@pytest.fixture(autouse=True)
def reset_warnings():
    """Warnings are counted module-wide; start every test from zero."""
    utils.reset_warnings()
    yield
    utils.reset_warnings()


@pytest.fixture
def three_case_table():
    """Costs 10, 20, 30 in every one of 10 draws; quality 0 throughout."""
    costs = np.repeat(np.array([[10.0], [20.0], [30.0]]), 10, axis=1)
    return cases.make_draw_table(["1", "2", "3"], costs, [0.0, 0.0, 0.0])


@pytest.fixture
def two_case_table():
    """Deterministic pool: futurecosts [5, 15], var1 [1, -1], var2 [0, 0]."""
    return cases.CaseTable(["A", "B"], [5.0, 15.0], [[1.0, 0.0], [-1.0, 0.0]])


def write_csv(path, lines):
    """Write lines (lists of cells) as a simple comma-separated file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(",".join(str(c) for c in line) for line in lines) + "\n")
    return path
