from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

import numpy as np

from . import engine as engine_mod
from . import infra
from .config import GridConfig
from .image import assemble_image
from .palette import build_palette


# Palette band order that goes with each mapping
DEFAULT_PALETTE_ORDER = {
    "centered": "green",
    "offset": "magenta",
}


@dataclass
class RenderResult:
    raster: np.ndarray
    field: np.ndarray
    strategy: str
    seconds: float


def render(
    config: Optional[GridConfig] = None,
    strategy: str = "locked",
    palette_order: Optional[str] = None,
    workers: Optional[int] = None,
    cpu_count: Callable[[], int] = infra.cpu_count,
) -> RenderResult:
    """Compute the iteration field, then color it through the palette.

    Only the compute phase is timed.
    """
    cfg = config or GridConfig()
    palette = build_palette(palette_order or DEFAULT_PALETTE_ORDER[cfg.mapping])
    timed = infra.time_call(
        engine_mod.compute_field,
        cfg,
        strategy,
        workers=workers,
        cpu_count=cpu_count,
        label=f"{strategy} grid",
    )
    raster = assemble_image(timed.result, palette)
    return RenderResult(raster=raster, field=timed.result, strategy=strategy, seconds=timed.seconds)


def compare(
    config: Optional[GridConfig] = None,
    workers: Optional[int] = None,
    cpu_count: Callable[[], int] = infra.cpu_count,
) -> Dict[str, object]:
    """Run every strategy on the same config and check the fields agree."""
    cfg = config or GridConfig()
    fields: Dict[str, np.ndarray] = {}
    seconds: Dict[str, float] = {}
    for name in engine_mod.STRATEGIES:
        timed = infra.time_call(engine_mod.compute_field, cfg, name, workers=workers, cpu_count=cpu_count)
        fields[name] = timed.result
        seconds[name] = timed.seconds
    first = fields[engine_mod.STRATEGIES[0]]
    identical = all(np.array_equal(first, f) for f in fields.values())
    mismatches = sum(int(np.count_nonzero(first != f)) for f in fields.values())
    return {
        "identical": bool(identical),
        "mismatched_cells": mismatches,
        "seconds": seconds,
    }
