from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional


def cpu_count() -> int:
    """Number of logical processors, at least 1."""
    n = os.cpu_count()
    return int(n) if n else 1


@dataclass
class Timed:
    result: Any
    seconds: float
    label: str = ""

    def report(self) -> str:
        name = self.label or "call"
        return f"{name} executed in {self.seconds:.2f}s"


def time_call(func: Callable[..., Any], *args: Any, label: Optional[str] = None, **kwargs: Any) -> Timed:
    """Run func(*args, **kwargs) synchronously and measure wall-clock time.

    Purely observational: the result is returned untouched.
    """
    name = label if label is not None else getattr(func, "__name__", "call")
    start = time.perf_counter()
    result = func(*args, **kwargs)
    elapsed = time.perf_counter() - start
    return Timed(result=result, seconds=float(elapsed), label=str(name))
