from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from mandel.config import GridConfig
from mandel.engine import compute_field
from mandel.engine.errors import WorkerError
from mandel.engine.parallel import compute_rows, split_range
from mandel.escape import escape_row, escape_time


def test_split_range_is_ordered_and_bounded():
    spans = split_range(0, 103, 10)
    assert spans[0][0] == 0 and spans[-1][1] == 103
    for (a0, a1), (b0, b1) in zip(spans, spans[1:]):
        assert a1 == b0
    assert all(0 < hi - lo <= 10 for lo, hi in spans)


def test_split_range_edges():
    assert split_range(5, 5, 4) == []
    assert split_range(0, 3, 8) == [(0, 3)]
    with pytest.raises(ValueError):
        split_range(0, 10, 0)


@pytest.mark.parametrize("row_grain,column_grain", [(1, 1), (3, 7), (100, 100)])
def test_rows_match_evaluator(row_grain, column_grain):
    cfg = GridConfig(width=30, height=17, max_iterations=96, mapping="offset")
    with ThreadPoolExecutor(max_workers=4) as pool:
        rows = compute_rows(cfg, executor=pool, row_grain=row_grain, column_grain=column_grain)
    assert len(rows) == 17
    assert all(len(r) == 30 for r in rows)
    assert [list(r) for r in rows] == [escape_row(y, cfg) for y in range(17)]


def test_default_process_pool():
    cfg = GridConfig(width=24, height=10)
    rows = compute_rows(cfg, max_workers=2, row_grain=2, column_grain=8)
    assert [list(r) for r in rows] == [escape_row(y, cfg) for y in range(10)]


def test_leaf_failure_fails_whole_computation():
    cfg = GridConfig(width=20, height=12)

    def flaky(x, y, config):
        if (x, y) == (13, 9):
            raise RuntimeError("leaf failed")
        return escape_time(x, y, config)

    with ThreadPoolExecutor(max_workers=2) as pool:
        with pytest.raises(WorkerError) as excinfo:
            compute_rows(cfg, executor=pool, row_grain=2, column_grain=4, evaluator=flaky)
    assert isinstance(excinfo.value.__cause__, RuntimeError)


@pytest.mark.parametrize("mapping,max_iter", [("centered", 64), ("offset", 96)])
def test_strategies_agree(mapping, max_iter):
    cfg = GridConfig(width=48, height=27, max_iterations=max_iter, mapping=mapping)
    locked = compute_field(cfg, "locked", workers=3)
    parallel = compute_field(cfg, "parallel", workers=2)
    assert locked.shape == parallel.shape == (27, 48)
    assert locked.dtype == parallel.dtype == np.uint8
    assert np.array_equal(locked, parallel)


def test_compute_field_unknown_strategy():
    with pytest.raises(ValueError):
        compute_field(GridConfig(width=4, height=4), "gpu")
