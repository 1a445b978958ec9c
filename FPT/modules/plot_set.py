import queue
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from FPT.config import config
from FPT.debug.debug_manager import Debug
from FPT.functions.math_function import MathFunction, as_math_function

Color = Tuple[int, int, int]


@dataclass
class Plot:
    function: MathFunction
    name: str
    color: Color


class PlotSet:
    """
    Ordered plots; insertion order is draw order.

    Must be mutated from the UI thread only. Other threads hand additions
    over with ``submit`` and the UI loop applies them with ``flush_pending``.
    """

    def __init__(self, palette: Optional[List[Color]] = None, on_change: Optional[Callable[[], None]] = None):
        self.palette: List[Color] = list(palette or config.render.palette)
        self.on_change = on_change
        self._plots: List[Plot] = []
        self._pending: "queue.Queue[Tuple[object, Optional[Color], Optional[str]]]" = queue.Queue()

    def _changed(self):
        if self.on_change:
            self.on_change()

    def add(self, function, color: Optional[Color] = None, name: Optional[str] = None) -> Plot:
        index = len(self._plots)
        plot = Plot(function=as_math_function(function),
                    name=name if name is not None else f"f{index + 1}",
                    color=tuple(color) if color is not None else self.palette[index % len(self.palette)])
        self._plots.append(plot)
        Debug.log(f"Added plot {plot.name} {plot.function!r}", "Plots")
        self._changed()
        return plot

    def clear(self):
        count = len(self._plots)
        self._plots.clear()
        Debug.log(f"Cleared {count} plots", "Plots")
        self._changed()

    def submit(self, function, color: Optional[Color] = None, name: Optional[str] = None):
        """Thread-safe: queue an addition for the next ``flush_pending`` call."""
        as_math_function(function)
        self._pending.put((function, color, name))

    def flush_pending(self) -> int:
        applied = 0
        while True:
            try:
                function, color, name = self._pending.get_nowait()
            except queue.Empty:
                return applied
            self.add(function, color, name)
            applied += 1

    @property
    def plots(self) -> Tuple[Plot, ...]:
        return tuple(self._plots)

    def __iter__(self) -> Iterator[Plot]:
        return iter(list(self._plots))

    def __len__(self):
        return len(self._plots)

    def __getitem__(self, index) -> Plot:
        return self._plots[index]
