from .constants import WIDTH, HEIGHT, MAX_ITERATIONS, PALETTE_SIZE
from .config import GridConfig, CENTERED, OFFSET
# Note: submodules are intentionally NOT imported here so that importing the
# package does not pull in pandas or Pillow. Import them explicitly.

__all__ = [
    "WIDTH",
    "HEIGHT",
    "MAX_ITERATIONS",
    "PALETTE_SIZE",
    "GridConfig",
    "CENTERED",
    "OFFSET",
    "escape",
    "palette",
    "engine",
    "image",
    "infra",
    "render",
]
