import numpy as np
import pytest

from mandel.config import GridConfig
from mandel.palette import build_palette
from mandel.render import compare, render


@pytest.mark.parametrize("strategy", ["locked", "parallel"])
def test_render_is_idempotent(strategy):
    cfg = GridConfig(width=32, height=18)
    a = render(cfg, strategy=strategy, workers=2)
    b = render(cfg, strategy=strategy, workers=2)
    assert a.raster.shape == (18, 32, 3)
    assert a.raster.dtype == np.uint8
    assert np.array_equal(a.raster, b.raster)
    assert a.seconds >= 0.0
    assert a.strategy == strategy


def test_render_strategies_produce_identical_rasters():
    cfg = GridConfig(width=36, height=20, max_iterations=96, mapping="offset")
    a = render(cfg, strategy="locked", workers=3)
    b = render(cfg, strategy="parallel", workers=2)
    assert np.array_equal(a.field, b.field)
    assert np.array_equal(a.raster, b.raster)


def test_interior_is_black_and_palette_follows_mapping():
    cfg = GridConfig(width=24, height=16, max_iterations=96, mapping="offset")
    res = render(cfg, workers=2)
    inside = res.field == 0
    assert inside.any()
    assert not res.raster[inside].any()
    pal = build_palette("magenta")
    y, x = np.argwhere(res.field == 1)[0]
    assert tuple(res.raster[y, x]) == pal[1]


def test_render_uses_injected_cpu_count():
    calls = []

    def fake_cpu_count() -> int:
        calls.append(1)
        return 2

    render(GridConfig(width=8, height=8), strategy="locked", cpu_count=fake_cpu_count)
    assert calls == [1]


def test_compare_reports_agreement():
    report = compare(GridConfig(width=20, height=12), workers=2)
    assert report["identical"] is True
    assert report["mismatched_cells"] == 0
    assert set(report["seconds"]) == {"locked", "parallel"}
