from enum import Enum
from dataclasses import dataclass
from typing import Callable, Iterator, Optional


class MarkerKind(Enum):
    FILL_CIRCLE = "fill_circle"
    DRAW_CIRCLE = "draw_circle"


@dataclass(frozen=True)
class Annotation:
    x: float
    kind: MarkerKind = MarkerKind.FILL_CIRCLE


AnnotationProvider = Callable[[float, float], Iterator[Annotation]]


class MathFunction:
    """
    A real function of one real variable that the plotter can sample.

    Wrap a plain callable, or subclass and override ``evaluate``. A function
    may carry an annotation provider: a callable ``(min_x, max_x)`` returning
    a lazy iterator of ``Annotation`` markers inside that domain window. The
    provider is wired at construction time; the renderer only checks
    ``supports_annotations``.
    """

    def __init__(self, func: Optional[Callable[[float], float]] = None,
                 annotation_provider: Optional[AnnotationProvider] = None):
        self._func = func
        self.annotation_provider = annotation_provider

    def evaluate(self, x: float) -> float:
        if self._func is None:
            raise NotImplementedError(f"{type(self).__name__} does not define evaluate()")
        return self._func(x)

    def __call__(self, x: float) -> float:
        return self.evaluate(x)

    @property
    def supports_annotations(self) -> bool:
        return self.annotation_provider is not None

    def provide_annotations(self, min_x: float, max_x: float) -> Iterator[Annotation]:
        if self.annotation_provider is None:
            return iter(())
        return iter(self.annotation_provider(min_x, max_x))

    def __repr__(self):
        target = getattr(self._func, "__name__", None) or type(self).__name__
        return f"MathFunction({target})"


def as_math_function(obj) -> MathFunction:
    if isinstance(obj, MathFunction):
        return obj
    if callable(obj):
        return MathFunction(obj)
    raise TypeError(f"Cannot plot {type(obj).__name__!r}: expected a callable or MathFunction")
