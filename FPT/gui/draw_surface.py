from typing import Sequence, Tuple

import pygame
import pygame.gfxdraw

from FPT.config import config

Point = Tuple[int, int]


class PygameDrawSurface:
    """The drawing primitives the Renderer needs, on top of a pygame Surface."""

    def __init__(self, surface: pygame.Surface, font: pygame.font.Font = None, antialias: bool = True):
        self.surface = surface
        self.antialias = antialias
        self.font = font or pygame.font.SysFont(config.render.font_name, config.render.font_size)

    def line(self, start: Point, end: Point, color):
        if self.antialias:
            pygame.draw.aaline(self.surface, color, start, end)
        else:
            pygame.draw.line(self.surface, color, start, end)

    def polyline(self, points: Sequence[Point], color):
        if len(points) < 2:
            return
        if self.antialias:
            pygame.draw.aalines(self.surface, color, False, points)
        else:
            pygame.draw.lines(self.surface, color, False, points)

    def circle(self, center: Point, radius: int, color, filled: bool = True):
        x, y = center
        if filled:
            pygame.gfxdraw.filled_circle(self.surface, x, y, radius, color)
        if self.antialias:
            pygame.gfxdraw.aacircle(self.surface, x, y, radius, color)
        elif not filled:
            pygame.gfxdraw.circle(self.surface, x, y, radius, color)

    def text(self, position: Point, text: str, color):
        rendered = self.font.render(text, self.antialias, color)
        # position is the text baseline
        self.surface.blit(rendered, (position[0], position[1] - self.font.get_ascent()))

    def fill(self, color):
        self.surface.fill(color)
