import math
import random
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from FPT.config import config
from FPT.functions.math_function import MathFunction, Annotation, MarkerKind


def clamp(x: float, lower: float, upper: float) -> float:
    if x < lower:
        return lower
    if x > upper:
        return upper
    return x


def smoothstep(x: float) -> float:
    x = clamp(x, 0.0, 1.0)
    return x * x * (3 - 2 * x)


def smoothstep_between(x: float, edge0: float, edge1: float) -> float:
    return smoothstep((x - edge0) / (edge1 - edge0))


@dataclass(frozen=True)
class NoiseScale:
    var: float
    off: float

    def __call__(self, y: float) -> float:
        return self.var * y + self.off


class SmoothNoise(MathFunction):
    """
    1D value noise: random control values at integer positions, eased with
    smoothstep in between. Control values are drawn on first use and kept
    for the lifetime of the object; ``t < 0`` evaluates to 0.

    The annotation provider marks every control point generated so far.
    Confined to the thread that evaluates it (the cache is not locked).
    """

    def __init__(self, seed=None, value_range: Optional[Tuple[float, float]] = None,
                 scale: Optional[NoiseScale] = None):
        low, high = value_range if value_range is not None else config.noise.value_range
        if not (math.isfinite(low) and math.isfinite(high)) or low >= high:
            raise ValueError(f"value_range must be an increasing finite pair, got {(low, high)!r}")
        super().__init__(annotation_provider=self._control_point_markers)
        self.value_range = (float(low), float(high))
        self.scale = scale
        self._rng = random.Random(seed)
        self._control_points: Dict[int, float] = {}

    @classmethod
    def scaled(cls, seed=None) -> "SmoothNoise":
        return cls(seed=seed, value_range=config.noise.scaled_value_range,
                   scale=NoiseScale(config.noise.scale_var, config.noise.scale_off))

    @property
    def control_points(self) -> Mapping[int, float]:
        return MappingProxyType(self._control_points)

    def control_value(self, index: int) -> Optional[float]:
        return self._control_points.get(index)

    def _next_random(self) -> float:
        return self._rng.uniform(*self.value_range)

    def _control(self, index: int) -> float:
        value = self._control_points.get(index)
        if value is None:
            value = self._control_points[index] = self._next_random()
        return value

    def evaluate(self, t: float) -> float:
        if t < 0:
            return 0.0
        current = math.floor(t)
        r0 = self._control(current)
        r1 = self._control(current + 1)
        raw = r0 + smoothstep(t - current) * (r1 - r0)
        return self.scale(raw) if self.scale is not None else raw

    def _control_point_markers(self, min_x: float, max_x: float) -> Iterator[Annotation]:
        # snapshot of the keys: evaluating a marker may generate its right neighbour
        for index in sorted(self._control_points):
            if min_x <= index <= max_x:
                yield Annotation(float(index), MarkerKind.FILL_CIRCLE)

    def __repr__(self):
        return f"SmoothNoise(points={len(self._control_points)}, range={self.value_range})"
