# renderer.py
"""
Draws particle snapshots onto a pygame surface.

The renderer is stateless with respect to particles: every call to draw()
paints the whole snapshot again. Shapes are painted in ascending depth
order, each one on a small transparent canvas that is rotated and then
blitted centered on the particle's pixel position.
"""
import logging
import math
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pygame

from constants import (
    DEFAULT_COLOR, DEFAULT_SHAPE_COLORS, CANVAS_RADIUS_RATIO, ICON_SIZE_RATIO,
    HEART_CURVE_SEGMENTS
)
from particle import CustomShape, IconShape, Particle, ParticleSnapshot

Point = Tuple[float, float]

# --- Data Contracts ---
#
# class ShapeRenderer:
#   - __init__(self, colors: Optional[Dict[str, Any]] = None,
#              default_color=DEFAULT_COLOR):
#     - Inputs:
#       - colors: Mapping of shape kind to any value pygame.Color accepts
#         (name, "#rrggbb", RGB list). Kinds match case-insensitively.
#         Invalid entries are logged and ignored.
#       - default_color: Used for kinds without a colour entry.
#
#   - resolve_color(self, kind: str, opacity: float) -> pygame.Color:
#     - Outputs: The kind's colour with alpha int(opacity * 255).
#
#   - draw(self, surface: pygame.Surface, snapshot: ParticleSnapshot) -> None:
#     - Side Effects: Paints every particle onto surface in ascending
#       depth order (stable for ties). Unknown kinds draw nothing.
#       Exceptions raised by custom draw callbacks propagate.


def triangle_points(center: Point, size: float) -> List[Point]:
    """Equilateral triangle, apex up, centered on its centroid."""
    cx, cy = center
    height = size * math.sqrt(3) / 2
    return [
        (cx, cy - (2 / 3) * height),
        (cx - size / 2, cy + height / 3),
        (cx + size / 2, cy + height / 3),
    ]


def rectangle_points(center: Point, size: float) -> List[Point]:
    """Square of side size centered on the point."""
    cx, cy = center
    half = size / 2
    return [
        (cx - half, cy - half),
        (cx + half, cy - half),
        (cx + half, cy + half),
        (cx - half, cy + half),
    ]


def _cubic_bezier(p0, p1, p2, p3, segments: int) -> np.ndarray:
    t = np.linspace(0.0, 1.0, segments + 1)[:, np.newaxis]
    p0, p1, p2, p3 = (np.asarray(p, dtype=np.float64) for p in (p0, p1, p2, p3))
    return (
        (1 - t) ** 3 * p0
        + 3 * (1 - t) ** 2 * t * p1
        + 3 * (1 - t) * t ** 2 * p2
        + t ** 3 * p3
    )


def heart_points(center: Point, size: float, segments: int = HEART_CURVE_SEGMENTS) -> List[Point]:
    """
    Outline of a heart made of two mirrored cubic curves.

    The curves run from a cusp above the center down to a point below it.
    The heart is 2.5 * size wide and 2 * size tall.
    """
    cx, cy = center
    width = size * 2.5
    height = size * 2
    cusp = (cx, cy - height * 0.3)
    tip = (cx, cy + height * 0.5)

    left = _cubic_bezier(
        cusp,
        (cx - width * 0.4, cy - height * 0.5),
        (cx - width * 0.55, cy + height * 0.2),
        tip,
        segments,
    )
    right = _cubic_bezier(
        tip,
        (cx + width * 0.55, cy + height * 0.2),
        (cx + width * 0.4, cy - height * 0.5),
        cusp,
        segments,
    )
    # Drop the duplicated tip and the closing cusp.
    outline = np.vstack([left, right[1:-1]])
    return [(float(x), float(y)) for x, y in outline]


def _draw_circle(canvas, center, radius, color):
    pygame.draw.circle(canvas, color, center, radius)


def _draw_rectangle(canvas, center, radius, color):
    pygame.draw.polygon(canvas, color, rectangle_points(center, radius))


def _draw_triangle(canvas, center, radius, color):
    pygame.draw.polygon(canvas, color, triangle_points(center, radius))


def _draw_heart(canvas, center, radius, color):
    pygame.draw.polygon(canvas, color, heart_points(center, radius))


SHAPE_DRAWERS = {
    "circle": _draw_circle,
    "rectangle": _draw_rectangle,
    "triangle": _draw_triangle,
    "heart": _draw_heart,
}


class ShapeRenderer:
    """
    Paints particle snapshots with a per-kind colour map.
    """
    def __init__(self, colors: Optional[Dict[str, Any]] = None, default_color=DEFAULT_COLOR):
        self.default_color = pygame.Color(default_color)
        self.colors = self._initialize_colors(colors)
        self._fonts: Dict[Tuple[Optional[str], int], pygame.font.Font] = {}

    def _initialize_colors(self, config_colors: Optional[Dict[str, Any]]) -> Dict[str, pygame.Color]:
        """Parses the kind -> colour map, dropping entries pygame cannot read."""
        if config_colors is None:
            logging.info("No shape colors provided. Using the default palette.")
            config_colors = DEFAULT_SHAPE_COLORS

        colors = {}
        for kind, value in config_colors.items():
            try:
                if isinstance(value, (list, tuple)):
                    colors[str(kind).lower()] = pygame.Color(*value)
                else:
                    colors[str(kind).lower()] = pygame.Color(value)
            except (ValueError, TypeError) as e:
                logging.error(
                    f"Could not parse color {value!r} for shape '{kind}': {e}. "
                    f"Falling back to the default color."
                )
        logging.debug(f"Loaded {len(colors)} shape colors.")
        return colors

    def resolve_color(self, kind: str, opacity: float) -> pygame.Color:
        """The colour configured for kind, with opacity applied as alpha."""
        base = self.colors.get(str(kind).lower(), self.default_color)
        alpha = int(min(max(opacity, 0.0), 1.0) * 255)
        return pygame.Color(base.r, base.g, base.b, alpha)

    def _font(self, name: Optional[str], size: int) -> pygame.font.Font:
        key = (name, size)
        font = self._fonts.get(key)
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.SysFont(name, size) if name else pygame.font.Font(None, size)
            self._fonts[key] = font
        return font

    def _draw_icon(self, canvas, shape: IconShape, center, radius, color):
        size = max(1, int(round(radius * ICON_SIZE_RATIO)))
        font = self._font(shape.font_name, size)
        glyph = font.render(shape.glyph, True, (color.r, color.g, color.b))
        glyph.set_alpha(color.a)
        canvas.blit(glyph, glyph.get_rect(center=center))

    def draw_particle(self, surface: pygame.Surface, particle: Particle) -> None:
        """Paints a single particle at its position on the surface."""
        shape = particle.shape
        drawer = None
        if not isinstance(shape, (CustomShape, IconShape)):
            drawer = SHAPE_DRAWERS.get(str(shape.kind).lower())
            if drawer is None:
                return

        width, height = surface.get_size()
        center = (particle.x * width, particle.y * height)
        color = self.resolve_color(particle.kind, particle.opacity)

        half = int(math.ceil(max(particle.radius, 0.0) * CANVAS_RADIUS_RATIO)) + 2
        canvas = pygame.Surface((half * 2, half * 2), pygame.SRCALPHA)
        local_center = (half, half)

        if isinstance(shape, CustomShape):
            shape.draw(canvas, local_center, particle.radius, color)
        elif isinstance(shape, IconShape):
            self._draw_icon(canvas, shape, local_center, particle.radius, color)
        else:
            drawer(canvas, local_center, particle.radius, color)

        if particle.rotation:
            # pygame rotates counter-clockwise; positive rotation is clockwise on screen.
            canvas = pygame.transform.rotate(canvas, -math.degrees(particle.rotation))

        target = canvas.get_rect(center=(int(round(center[0])), int(round(center[1]))))
        surface.blit(canvas, target)

    def draw(self, surface: pygame.Surface, snapshot: ParticleSnapshot) -> None:
        """Paints the whole snapshot, nearest depth values first."""
        for index in snapshot.depth_order():
            self.draw_particle(surface, snapshot[int(index)])
