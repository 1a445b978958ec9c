import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple

import numpy as np

from FPT.config import config
from FPT.debug.debug_manager import Debug
from FPT.functions.math_function import MarkerKind
from FPT.modules.input_handler import Cursor
from FPT.modules.plot_set import Plot, PlotSet
from FPT.modules.profiler import profile
from FPT.modules.view_transform import ViewTransform

INT16_MIN, INT16_MAX = -32768, 32767


class CommandType(Enum):
    TEXT = "text"
    LINE = "line"
    POLYLINE = "polyline"
    CIRCLE = "circle"


@dataclass
class DrawCommand:
    command_type: CommandType
    points: Tuple[Tuple[int, int], ...]
    color: Tuple[int, int, int] = (0, 0, 0)
    text: str = ""
    radius: int = 0
    filled: bool = True


def safe_coord(v) -> int:
    return max(INT16_MIN, min(INT16_MAX, int(v)))


class Renderer:
    def __init__(self, view: ViewTransform, plots: PlotSet, cursor: Cursor):
        self.view = view
        self.plots = plots
        self.cursor = cursor

    def build_frame(self) -> List[DrawCommand]:
        commands: List[DrawCommand] = []
        if config.debug.show_diagnostics:
            commands.extend(self._diagnostics())
        commands.extend(self._axes())
        for plot in self.plots:
            commands.extend(self._curve(plot))
            if plot.function.supports_annotations:
                commands.extend(self._annotations(plot))
        return commands

    @profile("draw", "renderer")
    def draw(self, surface) -> int:
        if surface is None:
            return 0
        commands = self.build_frame()
        surface.antialias = config.render.antialias
        for command in commands:
            if command.command_type == CommandType.TEXT:
                surface.text(command.points[0], command.text, command.color)
            elif command.command_type == CommandType.LINE:
                surface.line(command.points[0], command.points[1], command.color)
            elif command.command_type == CommandType.POLYLINE:
                surface.polyline(command.points, command.color)
            elif command.command_type == CommandType.CIRCLE:
                surface.circle(command.points[0], command.radius, command.color, command.filled)
        Debug.increment_stat("frames")
        return len(commands)

    def diagnostic_lines(self) -> List[str]:
        view, cursor = self.view, self.cursor
        ox, oy = view.origin
        return [
            f"xUnit: {view.x_unit:.2f} px",
            f"yUnit: {view.y_unit:.2f} px",
            f"xOffset: {view.x_offset:d} px",
            f"yOffset: {view.y_offset:d} px",
            f"Origin: ({ox:d}, {oy:d}) px",
            f"MouseX: {cursor.x:4d} px -> {view.from_x_pixel(cursor.x):6.2f}",
            f"MouseY: {cursor.y:4d} px -> {view.from_y_pixel(cursor.y):6.2f}",
        ]

    def _diagnostics(self) -> List[DrawCommand]:
        rc = config.render
        return [DrawCommand(CommandType.TEXT, ((rc.text_x, rc.line_spacing * (i + 1)),), rc.text_color, text=line)
                for i, line in enumerate(self.diagnostic_lines())]

    def _axes(self) -> List[DrawCommand]:
        view, rc = self.view, config.render
        color = rc.axis_color
        tick = rc.tick_half_length
        w, h = view.width, view.height
        ox, oy = view.origin
        x0, y0 = safe_coord(ox), safe_coord(oy)
        x_lo, x_hi = safe_coord(x0 - tick), safe_coord(x0 + tick)
        y_lo, y_hi = safe_coord(y0 - tick), safe_coord(y0 + tick)

        commands = [DrawCommand(CommandType.LINE, ((0, y0), (w, y0)), color)]
        if view.x_unit >= rc.min_tick_spacing:
            phase = ox % view.x_unit
            for i in range(int(w / view.x_unit) + 2):
                tx = safe_coord(math.floor(phase + i * view.x_unit + 0.5))
                commands.append(DrawCommand(CommandType.LINE, ((tx, y_lo), (tx, y_hi)), color))

        commands.append(DrawCommand(CommandType.LINE, ((x0, 0), (x0, h)), color))
        if view.y_unit >= rc.min_tick_spacing:
            phase = oy % view.y_unit
            for i in range(int(h / view.y_unit) + 2):
                ty = safe_coord(math.floor(phase + i * view.y_unit + 0.5))
                commands.append(DrawCommand(CommandType.LINE, ((x_lo, ty), (x_hi, ty)), color))
        return commands

    def sample_columns(self) -> np.ndarray:
        stride = max(1, int(config.render.sample_stride))
        columns = np.arange(0, self.view.width + 1, stride)
        if columns[-1] != self.view.width:
            columns = np.append(columns, self.view.width)
        return columns

    @staticmethod
    def _safe_evaluate(plot: Plot, x: float) -> float:
        try:
            return float(plot.function.evaluate(x))
        except (ArithmeticError, ValueError):
            return float("nan")

    def _curve(self, plot: Plot) -> List[DrawCommand]:
        columns = self.sample_columns()
        xs = self.view.from_x_pixels(columns)
        ys = np.fromiter((self._safe_evaluate(plot, float(x)) for x in xs), dtype=np.float64, count=len(xs))
        rows = self.view.to_y_pixels(ys)
        finite = np.isfinite(rows)

        commands = []
        run: List[Tuple[int, int]] = []
        for column, row, ok in zip(columns, rows, finite):
            if ok:
                run.append((int(column), safe_coord(row)))
                continue
            commands.extend(self._polyline(run, plot.color))
            run = []
        commands.extend(self._polyline(run, plot.color))
        return commands

    @staticmethod
    def _polyline(points: Sequence[Tuple[int, int]], color) -> List[DrawCommand]:
        if len(points) >= 2:
            return [DrawCommand(CommandType.POLYLINE, tuple(points), color)]
        if len(points) == 1:
            return [DrawCommand(CommandType.LINE, (points[0], points[0]), color)]
        return []

    def _annotations(self, plot: Plot) -> List[DrawCommand]:
        radius = config.render.marker_radius
        min_x, max_x = self.view.visible_domain(radius)
        commands = []
        for annotation in plot.function.provide_annotations(min_x, max_x):
            y = self._safe_evaluate(plot, annotation.x)
            if not math.isfinite(y):
                continue
            center = (safe_coord(self.view.to_x_pixel(annotation.x)), safe_coord(self.view.to_y_pixel(y)))
            commands.append(DrawCommand(CommandType.CIRCLE, (center,), plot.color, radius=radius,
                                        filled=annotation.kind == MarkerKind.FILL_CIRCLE))
        return commands
