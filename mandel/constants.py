# Default grid and rendering constants
WIDTH: int = 1920
HEIGHT: int = 1080
MAX_ITERATIONS: int = 64

ESCAPE_RADIUS: float = 2.0

# Palette layout: 8 bands x 32 shades
BAND_SIZE: int = 32
BAND_COUNT: int = 8
PALETTE_SIZE: int = BAND_SIZE * BAND_COUNT

# Iteration counts are stored as unsigned 8-bit values
COUNT_MAX: int = 255
