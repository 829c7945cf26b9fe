from __future__ import annotations

import os
from typing import Sequence, Union

import numpy as np
import pandas as pd
from PIL import Image

from .config import GridConfig
from .escape import complex_axes
from .palette import RGB, palette_array


Field = Union[np.ndarray, Sequence[Sequence[int]]]


def assemble_image(field: Field, palette: Sequence[RGB]) -> np.ndarray:
    """Map every iteration count through the palette into an RGB raster.

    Accepts a (height, width) array or a sequence of rows. Returns a
    (height, width, 3) uint8 array. Counts outside the palette leave the
    pixel at its default (black).
    """
    counts = np.asarray(field)
    if counts.ndim != 2:
        raise ValueError("field must be two-dimensional (height x width)")
    colors = palette_array(palette)
    raster = np.zeros(counts.shape + (3,), dtype=np.uint8)
    idx = counts.astype(np.int64)
    valid = (idx >= 0) & (idx < colors.shape[0])
    raster[valid] = colors[idx[valid]]
    return raster


def save_image(raster: np.ndarray, path: str) -> None:
    """Write an RGB raster to disk with Pillow; format follows the extension."""
    arr = np.ascontiguousarray(raster, dtype=np.uint8)
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError("raster must have shape (height, width, 3)")
    img = Image.fromarray(arr)
    if os.path.splitext(str(path))[1]:
        img.save(path)
    else:
        img.save(path, format="PNG")


def field_to_dataframe(field: Field, config: GridConfig) -> pd.DataFrame:
    counts = np.asarray(field)
    H, W = counts.shape
    if (H, W) != (config.height, config.width):
        raise ValueError("field shape does not match config")
    re, im = complex_axes(config)
    xx, yy = np.meshgrid(np.arange(W), np.arange(H))
    rr, ii = np.meshgrid(re, im)
    df = pd.DataFrame({
        "x": xx.ravel(),
        "y": yy.ravel(),
        "re": rr.ravel(),
        "im": ii.ravel(),
        "iter": counts.ravel().astype(int),
    })
    return df
