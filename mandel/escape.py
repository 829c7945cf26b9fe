from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from .config import GridConfig
from .constants import ESCAPE_RADIUS


def pixel_to_complex(x: int, y: int, config: GridConfig) -> complex:
    """Map pixel (x, y) to the complex parameter c.

    - "centered": the grid center maps to 0, 4 units across each axis.
    - "offset":   x spans [-2, 1) and y spans [-1, 1).
    """
    w = float(config.width)
    h = float(config.height)
    if config.mapping == "centered":
        return complex((x - w / 2.0) * 4.0 / w, (y - h / 2.0) * 4.0 / h)
    return complex(x / w * 3.0 - 2.0, y / h * 2.0 - 1.0)


def escape_time(x: int, y: int, config: GridConfig) -> int:
    """Iteration count at which z <- z*z + c escapes, as an 8-bit value.

    Returns 0 when the bound is reached without escaping (inside the set).
    Touches no shared state, so it can run on any number of threads.
    """
    c = pixel_to_complex(x, y, config)
    max_iter = int(config.max_iterations)
    z = 0j
    n = 0
    while abs(z) <= ESCAPE_RADIUS and n < max_iter:
        z = z * z + c
        n += 1
    if n == max_iter:
        return 0
    return n & 0xFF


def escape_row(y: int, config: GridConfig, start: int = 0, stop: Optional[int] = None) -> List[int]:
    if stop is None:
        stop = int(config.width)
    return [escape_time(x, y, config) for x in range(int(start), int(stop))]


def complex_axes(config: GridConfig) -> Tuple[np.ndarray, np.ndarray]:
    """Real parts of c per column and imaginary parts of c per row."""
    w = float(config.width)
    h = float(config.height)
    xs = np.arange(int(config.width), dtype=float)
    ys = np.arange(int(config.height), dtype=float)
    if config.mapping == "centered":
        return (xs - w / 2.0) * 4.0 / w, (ys - h / 2.0) * 4.0 / h
    return xs / w * 3.0 - 2.0, ys / h * 2.0 - 1.0
