from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from .. import infra
from ..config import GridConfig
from .errors import ComputeError, PoisonedLockError, WorkerError
from .locked import LockedSharedBufferEngine, SharedIterationField, rows_for_worker
from .parallel import compute_rows, split_range


STRATEGIES = ("locked", "parallel")


def compute_field(
    config: Optional[GridConfig] = None,
    strategy: str = "locked",
    workers: Optional[int] = None,
    cpu_count: Callable[[], int] = infra.cpu_count,
) -> np.ndarray:
    """Compute the iteration field with the named strategy.

    Returns a read-only (height, width) uint8 array. Both strategies block
    until every cell is computed or raise ComputeError.
    """
    cfg = config or GridConfig()
    key = strategy.lower()
    if key == "locked":
        engine = LockedSharedBufferEngine(cfg, worker_count=workers, cpu_count=cpu_count)
        return engine.run().snapshot()
    if key == "parallel":
        rows = compute_rows(cfg, max_workers=workers, cpu_count=cpu_count)
        field = np.array(rows, dtype=np.uint8).reshape(cfg.height, cfg.width)
        field.setflags(write=False)
        return field
    raise ValueError(f"Unknown strategy: {strategy}")


__all__ = [
    "STRATEGIES",
    "compute_field",
    "ComputeError",
    "WorkerError",
    "PoisonedLockError",
    "LockedSharedBufferEngine",
    "SharedIterationField",
    "rows_for_worker",
    "compute_rows",
    "split_range",
]
