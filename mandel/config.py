from __future__ import annotations

from dataclasses import dataclass, replace

from .constants import WIDTH, HEIGHT, MAX_ITERATIONS, COUNT_MAX


MAPPINGS = ("centered", "offset")


@dataclass(frozen=True)
class GridConfig:
    width: int = WIDTH
    height: int = HEIGHT
    max_iterations: int = MAX_ITERATIONS  # must fit in 8 bits
    mapping: str = "centered"             # "centered" or "offset"

    def __post_init__(self) -> None:
        if int(self.width) < 1 or int(self.height) < 1:
            raise ValueError("width and height must be >= 1")
        if not 1 <= int(self.max_iterations) <= COUNT_MAX:
            raise ValueError(f"max_iterations must be in [1, {COUNT_MAX}]")
        if self.mapping not in MAPPINGS:
            raise ValueError(f"Unknown mapping: {self.mapping}")

    @property
    def size(self) -> int:
        return int(self.width) * int(self.height)

    def with_overrides(self, **kwargs) -> "GridConfig":
        """Return a copy with the non-None keyword values replaced."""
        changes = {k: v for k, v in kwargs.items() if v is not None}
        return replace(self, **changes)


# Symmetric mapping with 64 iterations
CENTERED = GridConfig()
# Asymmetric mapping with 96 iterations
OFFSET = GridConfig(max_iterations=96, mapping="offset")

PRESETS = {
    "centered": CENTERED,
    "offset": OFFSET,
}


def get_preset(name: str) -> GridConfig:
    try:
        return PRESETS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown preset: {name}") from None
