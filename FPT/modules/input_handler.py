import time
from dataclasses import dataclass
from typing import Callable, List, Optional

import pygame

from FPT.config import config
from FPT.debug.debug_manager import Debug
from FPT.modules.plot_set import PlotSet
from FPT.modules.view_transform import ViewTransform, ZoomAxis

POINTER_BUTTONS = (1, 2, 3)
PRIMARY_BUTTON = 1


@dataclass
class Cursor:
    x: int
    y: int


def axis_mode_for(mods: int) -> ZoomAxis:
    if mods & pygame.KMOD_CTRL:
        return ZoomAxis.X_ONLY
    elif mods & pygame.KMOD_SHIFT:
        return ZoomAxis.Y_ONLY
    return ZoomAxis.BOTH


class InteractionController:
    """
    Turns pointer, wheel and resize input into ViewTransform changes.

    ``request_repaint`` is called after every change that affects the frame;
    ``readout_sink`` receives one line per plot when the panel is clicked.
    """

    def __init__(self, view: ViewTransform, plots: PlotSet,
                 request_repaint: Optional[Callable[[], None]] = None,
                 readout_sink: Callable[[str], None] = print,
                 clock: Callable[[], float] = time.time):
        self.view = view
        self.plots = plots
        self.request_repaint = request_repaint
        self.readout_sink = readout_sink
        self.clock = clock
        self.cursor = Cursor(view.width // 2, view.height // 2)
        self.dragged = False
        self.captured = False
        self.last_click = None

    def _repaint(self):
        if self.request_repaint:
            self.request_repaint()

    def capture_pointer(self):
        """A press went to another widget; ignore its drag and release."""
        self.captured = True
        self.dragged = False

    def release_pointer(self):
        self.captured = False

    def on_press(self, x: int, y: int):
        self.cursor.x, self.cursor.y = x, y
        self.dragged = False

    def on_drag(self, x: int, y: int):
        dx = x - self.cursor.x
        dy = y - self.cursor.y
        self.cursor.x, self.cursor.y = x, y
        if dx or dy:
            self.dragged = True
        self.view.pan(dx, dy)
        self._repaint()

    def on_move(self, x: int, y: int):
        self.cursor.x, self.cursor.y = x, y
        self._repaint()

    def on_release(self, x: int, y: int, button: int = PRIMARY_BUTTON):
        if self.dragged:
            self.dragged = False
            return
        self.on_click(button)

    def on_click(self, button: int = PRIMARY_BUTTON):
        if button == PRIMARY_BUTTON:
            now = self.clock()
            threshold = config.input.double_click_ms / 1000.0
            if self.last_click is not None and now - self.last_click < threshold:
                self.last_click = None
                self.on_double_click()
                return
            self.last_click = now
        self.print_readout()

    def on_double_click(self):
        self.view.reset(self.view.width, self.view.height)
        Debug.log(f"View reset to {self.view.origin}", "Input")
        self._repaint()

    def readout(self) -> List[str]:
        precision = config.input.readout_precision
        x = self.view.from_x_pixel(self.cursor.x)
        lines = []
        for plot in self.plots:
            try:
                y = plot.function.evaluate(x)
            except (ArithmeticError, ValueError) as e:
                Debug.log_warning(f"{plot.name}({x}) failed: {e}", "Input")
                y = float("nan")
            lines.append(f"{plot.name}({x:.{precision}f}) = {y:.{precision}f}")
        return lines

    def print_readout(self):
        for line in self.readout():
            self.readout_sink(line)

    def on_wheel(self, delta: float, mods: int = 0):
        # a single event may report several notches; only the sign counts
        if delta == 0:
            return
        direction = 1 if delta > 0 else -1
        if self.view.zoom(direction, axis_mode_for(mods), self.cursor.x, self.cursor.y):
            self._repaint()

    def on_resize(self, width: int, height: int):
        if (width, height) == (self.view.width, self.view.height):
            return
        self.view.resize(width, height)
        self._repaint()

    def handle_event(self, event) -> bool:
        if self.captured:
            if event.type == pygame.MOUSEBUTTONUP and event.button in POINTER_BUTTONS:
                self.release_pointer()
                return True
            if event.type == pygame.MOUSEMOTION and any(event.buttons):
                return True
        if event.type == pygame.MOUSEBUTTONDOWN and event.button in POINTER_BUTTONS:
            self.on_press(*event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button in POINTER_BUTTONS:
            self.on_release(*event.pos, button=event.button)
        elif event.type == pygame.MOUSEMOTION:
            if any(event.buttons):
                self.on_drag(*event.pos)
            else:
                self.on_move(*event.pos)
        elif event.type == pygame.MOUSEWHEEL:
            self.on_wheel(event.y, pygame.key.get_mods())
        elif event.type == pygame.VIDEORESIZE:
            self.on_resize(event.w, event.h)
        elif event.type == pygame.WINDOWSIZECHANGED:
            self.on_resize(event.x, event.y)
        else:
            return False
        return True
