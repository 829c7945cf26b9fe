from __future__ import annotations

from concurrent.futures import Executor, ProcessPoolExecutor
from functools import partial
from typing import Callable, List, Optional, Tuple

from .. import infra
from ..config import GridConfig
from ..escape import escape_time
from .errors import WorkerError


Span = Tuple[int, int]
Rows = Tuple[Tuple[int, ...], ...]

DEFAULT_ROW_GRAIN = 16
DEFAULT_COLUMN_GRAIN = 480


def split_range(start: int, stop: int, grain: int) -> List[Span]:
    """Bisect [start, stop) recursively into ordered spans of at most `grain`."""
    if grain < 1:
        raise ValueError("grain must be >= 1")
    if stop <= start:
        return []
    if stop - start <= grain:
        return [(int(start), int(stop))]
    mid = (start + stop) // 2
    return split_range(start, mid, grain) + split_range(mid, stop, grain)


def _compute_tile(
    tile: Tuple[Span, Span],
    config: GridConfig,
    evaluator: Callable[[int, int, GridConfig], int] = escape_time,
) -> Rows:
    (y0, y1), (x0, x1) = tile
    return tuple(
        tuple(evaluator(x, y, config) for x in range(x0, x1))
        for y in range(y0, y1)
    )


def _join_tiles(row_spans: List[Span], col_count: int, tiles: List[Rows]) -> Rows:
    rows: List[Tuple[int, ...]] = []
    for i, (y0, y1) in enumerate(row_spans):
        band = tiles[i * col_count:(i + 1) * col_count]
        for r in range(y1 - y0):
            rows.append(tuple(v for tile in band for v in tile[r]))
    return tuple(rows)


def compute_rows(
    config: Optional[GridConfig] = None,
    executor: Optional[Executor] = None,
    max_workers: Optional[int] = None,
    row_grain: int = DEFAULT_ROW_GRAIN,
    column_grain: int = DEFAULT_COLUMN_GRAIN,
    cpu_count: Callable[[], int] = infra.cpu_count,
    evaluator: Callable[[int, int, GridConfig], int] = escape_time,
) -> Rows:
    """Compute the field as `height` rows of `width` counts with no shared state.

    Rows and columns are bisected into independent tiles, each tile returns
    its counts by value, and the tiles are concatenated back in row-major
    order. Without an `executor` a ProcessPoolExecutor is created and sized by
    `max_workers` or the `cpu_count` capability.

    Any tile failure aborts the whole call with WorkerError.
    """
    cfg = config or GridConfig()
    row_spans = split_range(0, cfg.height, row_grain)
    col_spans = split_range(0, cfg.width, column_grain)
    tiles_in = [(rs, cs) for rs in row_spans for cs in col_spans]
    task = partial(_compute_tile, config=cfg, evaluator=evaluator)

    owns_executor = executor is None
    if executor is None:
        workers = int(max_workers) if max_workers is not None else int(cpu_count())
        executor = ProcessPoolExecutor(max_workers=max(1, workers))
    try:
        tiles = list(executor.map(task, tiles_in))
    except Exception as e:
        raise WorkerError(f"parallel map failed: {e}") from e
    finally:
        if owns_executor:
            executor.shutdown(wait=True, cancel_futures=True)
    return _join_tiles(row_spans, len(col_spans), tiles)
