from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Tuple

import numpy as np
import pandas as pd

from .constants import BAND_SIZE


RGB = Tuple[int, int, int]


# Each band ramps its channels from shade i in [0, 32)
BANDS: Dict[str, Callable[[int], RGB]] = {
    "green": lambda i: (0, i * 8, 0),
    "blue": lambda i: (0, 0, i * 8),
    "magenta": lambda i: (i * 8, 0, i * 8),
    "red": lambda i: (i * 8, 0, 0),
    "cyan": lambda i: (0, i * 8, i * 8),
    "purple": lambda i: (i * 4, 0, i * 8),  # red ramps at half rate
    "orange": lambda i: (i * 8, i * 4, 0),
    "grey": lambda i: (i * 8, i * 8, i * 8),
}

BAND_ORDERS: Dict[str, Tuple[str, ...]] = {
    "green": ("green", "blue", "magenta", "red", "cyan", "purple", "orange", "grey"),
    "magenta": ("magenta", "blue", "green", "red", "cyan", "purple", "orange", "grey"),
}


def build_palette(order: str = "green") -> Tuple[RGB, ...]:
    """Build the 256-entry color table as 8 bands of 32 shades.

    `order` names the first band and selects one of BAND_ORDERS. Entry 0 is
    always the darkest shade of the first band, i.e. black.
    """
    key = order.lower()
    if key not in BAND_ORDERS:
        raise ValueError(f"Unknown palette order: {order}")
    colors: List[RGB] = []
    for band in BAND_ORDERS[key]:
        ramp = BANDS[band]
        colors.extend(ramp(i) for i in range(BAND_SIZE))
    return tuple(colors)


def palette_array(palette: Sequence[RGB]) -> np.ndarray:
    arr = np.asarray(palette, dtype=np.uint8).reshape(-1, 3)
    arr.setflags(write=False)
    return arr


def palette_dataframe(palette: Sequence[RGB], order: str = "green") -> pd.DataFrame:
    bands = BAND_ORDERS[order.lower()]
    rows = []
    for idx, (r, g, b) in enumerate(palette):
        rows.append({
            "index": idx,
            "band": bands[idx // BAND_SIZE] if idx // BAND_SIZE < len(bands) else "",
            "shade": idx % BAND_SIZE,
            "r": int(r),
            "g": int(g),
            "b": int(b),
        })
    return pd.DataFrame(rows, columns=["index", "band", "shade", "r", "g", "b"])
