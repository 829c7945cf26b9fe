from __future__ import annotations

from typing import Optional


class ComputeError(RuntimeError):
    """Fatal failure of a grid computation. No partial result is valid."""


class WorkerError(ComputeError):
    def __init__(self, message: str, worker_id: Optional[int] = None) -> None:
        super().__init__(message)
        self.worker_id = worker_id


class PoisonedLockError(ComputeError):
    """The shared field was left in an unknown state by a failed writer."""
