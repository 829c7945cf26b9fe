from __future__ import annotations

import threading
from contextlib import contextmanager
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple

import numpy as np

from .. import infra
from ..config import GridConfig
from ..constants import COUNT_MAX
from ..escape import escape_time
from .errors import PoisonedLockError, WorkerError


Evaluator = Callable[[int, int, GridConfig], int]


class EngineState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    JOINED = "joined"


def rows_for_worker(worker_id: int, worker_count: int, height: int) -> range:
    """Rows owned by one worker under strided partitioning (y % T == id)."""
    if worker_count < 1:
        raise ValueError("worker_count must be >= 1")
    if not 0 <= worker_id < worker_count:
        raise ValueError("worker_id must be in [0, worker_count)")
    return range(int(worker_id), int(height), int(worker_count))


class SharedIterationField:
    """Flat row-major uint8 buffer guarded by a single lock.

    Any exception raised while the lock is held poisons the field; every
    later acquisition then raises PoisonedLockError.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self._lock = threading.Lock()
        self._data = np.zeros(self.width * self.height, dtype=np.uint8)
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    @contextmanager
    def locked(self) -> Iterator[np.ndarray]:
        with self._lock:
            if self._poisoned:
                raise PoisonedLockError("iteration field is poisoned by a failed writer")
            try:
                yield self._data
            except BaseException:
                self._poisoned = True
                raise

    def write(self, x: int, y: int, value: int) -> None:
        with self.locked() as data:
            if not 0 <= int(value) <= COUNT_MAX:
                raise ValueError(f"iteration count out of range: {value}")
            data[int(y) * self.width + int(x)] = value

    def snapshot(self) -> np.ndarray:
        """Copy of the field as a read-only (height, width) array."""
        with self.locked() as data:
            grid = data.reshape(self.height, self.width).copy()
        grid.setflags(write=False)
        return grid


class LockedSharedBufferEngine:
    """Fixed thread pool writing one shared buffer, one locked write per cell.

    Worker i owns every row y with y % worker_count == i. The worker count is
    fixed when run() starts: the explicit `worker_count` if given, otherwise
    the injected `cpu_count` capability.
    """

    def __init__(
        self,
        config: Optional[GridConfig] = None,
        worker_count: Optional[int] = None,
        cpu_count: Callable[[], int] = infra.cpu_count,
        evaluator: Evaluator = escape_time,
    ) -> None:
        self.config = config or GridConfig()
        self.worker_count = worker_count
        self._cpu_count = cpu_count
        self._evaluator = evaluator
        self.state = EngineState.IDLE
        self.field = SharedIterationField(self.config.width, self.config.height)
        self.workers_used: int = 0
        self._errors: List[Tuple[int, Exception]] = []
        self._errors_lock = threading.Lock()

    def _worker(self, worker_id: int, worker_count: int) -> None:
        cfg = self.config
        try:
            for y in rows_for_worker(worker_id, worker_count, cfg.height):
                for x in range(cfg.width):
                    value = self._evaluator(x, y, cfg)
                    self.field.write(x, y, value)
        except Exception as e:
            with self._errors_lock:
                self._errors.append((worker_id, e))

    def run(self) -> SharedIterationField:
        if self.state is not EngineState.IDLE:
            raise RuntimeError(f"engine already {self.state.value}")
        count = self.worker_count if self.worker_count is not None else self._cpu_count()
        count = int(count)
        if count < 1:
            raise ValueError("worker count must be >= 1")
        self.workers_used = count

        self.state = EngineState.RUNNING
        threads = [
            threading.Thread(target=self._worker, args=(i, count), name=f"mandel-worker-{i}")
            for i in range(count)
        ]
        for t in threads:
            t.start()
        # No cancellation: every worker is always joined
        for t in threads:
            t.join()
        self.state = EngineState.JOINED

        if self._errors:
            worker_id, exc = self._errors[0]
            raise WorkerError(f"worker {worker_id} failed: {exc}", worker_id=worker_id) from exc
        return self.field


def compute_locked(
    config: Optional[GridConfig] = None,
    worker_count: Optional[int] = None,
    cpu_count: Callable[[], int] = infra.cpu_count,
) -> SharedIterationField:
    engine = LockedSharedBufferEngine(config, worker_count=worker_count, cpu_count=cpu_count)
    return engine.run()
