# core/tolerance.py
import math
from dataclasses import dataclass

import numpy as np

from core.errors import ConfigurationError

# One inch when the scene is authored in feet.
DEFAULT_TOLERANCE = 1.0 / 12


@dataclass(frozen=True)
class TolerancePolicy:
    volume: float = DEFAULT_TOLERANCE
    position: float = DEFAULT_TOLERANCE

    def __post_init__(self):
        for name in ("volume", "position"):
            value = getattr(self, name)
            try:
                ok = math.isfinite(value) and value >= 0
            except TypeError:
                ok = False
            if not ok:
                raise ConfigurationError(f"{name} tolerance must be a finite number >= 0, got {value!r}")

    def almost_equal_volume(self, a: float, b: float) -> bool:
        return abs(a - b) <= self.volume

    def almost_equal_position(self, a, b) -> bool:
        return distance(a, b) <= self.position


def distance(a, b) -> float:
    return float(np.linalg.norm(np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)))


def almost_equal_volume(a: float, b: float, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    return TolerancePolicy(volume=tolerance).almost_equal_volume(a, b)


def almost_equal_position(a, b, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    return TolerancePolicy(position=tolerance).almost_equal_position(a, b)
