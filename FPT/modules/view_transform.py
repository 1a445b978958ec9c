import math
from enum import Enum
from typing import Tuple

import numpy as np

from FPT.config import config


class ZoomAxis(Enum):
    BOTH = "both"
    X_ONLY = "x"
    Y_ONLY = "y"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class ViewTransform:
    """
    Pixel <-> domain mapping of the plot panel.

    ``x_unit``/``y_unit`` are pixels per domain unit, ``x_offset``/``y_offset``
    the pixel position of the domain origin. Screen Y grows downwards, domain
    Y upwards.
    """

    def __init__(self, width: int, height: int, unit: float = None):
        unit = config.view.default_unit if unit is None else unit
        self._x_unit = 1.0
        self._y_unit = 1.0
        self.x_unit = unit
        self.y_unit = unit
        self.width = int(width)
        self.height = int(height)
        self.x_offset = self.width // 2
        self.y_offset = self.height // 2

    @staticmethod
    def _check_unit(name, value):
        value = float(value)
        if not math.isfinite(value) or value <= 0:
            raise ValueError(f"{name} must be a positive finite number, got {value!r}")
        return value

    @property
    def x_unit(self) -> float:
        return self._x_unit

    @x_unit.setter
    def x_unit(self, value):
        self._x_unit = self._check_unit("x_unit", value)

    @property
    def y_unit(self) -> float:
        return self._y_unit

    @y_unit.setter
    def y_unit(self, value):
        self._y_unit = self._check_unit("y_unit", value)

    @property
    def origin(self) -> Tuple[int, int]:
        return self.to_x_pixel(0), self.to_y_pixel(0)

    def to_x_pixel(self, x: float) -> int:
        return round_half_up(self._x_unit * x) + self.x_offset

    def from_x_pixel(self, px) -> float:
        return (px - self.x_offset) / self._x_unit

    def to_y_pixel(self, y: float) -> int:
        return round_half_up(self._y_unit * -y + self.y_offset)

    def from_y_pixel(self, py) -> float:
        return (-py + self.y_offset) / self._y_unit

    def from_x_pixels(self, columns) -> np.ndarray:
        return (np.asarray(columns, dtype=np.float64) - self.x_offset) / self._x_unit

    def to_y_pixels(self, values) -> np.ndarray:
        """Vectorized to_y_pixel; non-finite inputs stay non-finite."""
        values = np.asarray(values, dtype=np.float64)
        return np.floor(self._y_unit * -values + self.y_offset + 0.5)

    def visible_domain(self, margin: float = 0) -> Tuple[float, float]:
        return self.from_x_pixel(-margin), self.from_x_pixel(self.width - 1 + margin)

    def pan(self, dx: int, dy: int):
        self.x_offset += int(dx)
        self.y_offset += int(dy)

    def _scaled_factor(self, unit: float, factor: float) -> float:
        new_unit = unit * factor
        if not config.view.min_unit <= new_unit <= config.view.max_unit:
            return 1.0
        return factor

    def zoom(self, direction: int, axis_mode: ZoomAxis, cursor_x: int, cursor_y: int) -> bool:
        """
        Scale the selected unit(s) by the zoom factor (or its inverse) keeping
        the domain point under (cursor_x, cursor_y) fixed on screen.

        Returns False when nothing changed.
        """
        if not isinstance(axis_mode, ZoomAxis):
            raise ValueError(f"Unknown zoom axis mode: {axis_mode!r}")
        if direction == 0:
            return False
        step = config.view.zoom_factor if direction > 0 else 1 / config.view.zoom_factor
        x_scale = step if axis_mode in (ZoomAxis.BOTH, ZoomAxis.X_ONLY) else 1.0
        y_scale = step if axis_mode in (ZoomAxis.BOTH, ZoomAxis.Y_ONLY) else 1.0
        x_scale = self._scaled_factor(self._x_unit, x_scale)
        y_scale = self._scaled_factor(self._y_unit, y_scale)
        if x_scale == 1.0 and y_scale == 1.0:
            return False

        self.x_unit = self._x_unit * x_scale
        self.y_unit = self._y_unit * y_scale
        self.x_offset = round_half_up(cursor_x - x_scale * (cursor_x - self.x_offset))
        self.y_offset = round_half_up(cursor_y - y_scale * (cursor_y - self.y_offset))
        return True

    def resize(self, new_width: int, new_height: int):
        self.x_offset = int(self.x_offset + (new_width - self.width) / 2.0)
        self.y_offset = int(self.y_offset + (new_height - self.height) / 2.0)
        self.width = int(new_width)
        self.height = int(new_height)

    def reset(self, width: int, height: int):
        self.width = int(width)
        self.height = int(height)
        self.x_offset = self.width // 2
        self.y_offset = self.height // 2

    def __repr__(self):
        return (f"ViewTransform(x_unit={self._x_unit:.4g}, y_unit={self._y_unit:.4g}, "
                f"offset=({self.x_offset}, {self.y_offset}), size=({self.width}, {self.height}))")
