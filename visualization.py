# visualization.py
"""
Hosts the floating shapes animation in a Pygame window.
"""
import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pygame

from constants import DEFAULT_BACKDROP, WINDOW_CAPTION, WINDOW_SIZE
from particle import ParticleSnapshot
from renderer import ShapeRenderer
from settings import AnimationSettings

# --- Data Contracts ---
#
# class Visualizer:
#   - __init__(self, settings: AnimationSettings, backdrop: Optional[list] = None,
#              size=WINDOW_SIZE, caption=WINDOW_CAPTION):
#     - Inputs:
#       - settings: Supplies the kind -> colour map for the renderer.
#       - backdrop: Optional list of RGB colours for the vertical
#         gradient, top to bottom. Falls back to DEFAULT_BACKDROP.
#     - Side Effects: Initializes Pygame and creates a resizable window.
#
#   - draw(self, snapshot: ParticleSnapshot) -> bool:
#     - Outputs: False if the user has quit, True otherwise.
#     - Side Effects: Handles window events, repaints the backdrop and
#       every particle at the window's current size, flips the display.


def gradient_pixels(stops: Sequence[Sequence[int]], width: int, height: int) -> np.ndarray:
    """
    Builds a (width, height, 3) array of a top-to-bottom linear gradient.

    The colour stops are spread evenly over the height.
    """
    stops = np.asarray(stops, dtype=np.float64)
    if len(stops) == 1:
        stops = np.vstack([stops, stops])
    positions = np.linspace(0.0, 1.0, len(stops))
    rows = np.linspace(0.0, 1.0, max(height, 1))
    column = np.stack(
        [np.interp(rows, positions, stops[:, channel]) for channel in range(3)],
        axis=1
    )
    # surfarray expects (x, y, channel) order.
    return np.repeat(column[np.newaxis, :, :], max(width, 1), axis=0).astype(np.uint8)


class Visualizer:
    """
    Window that paints a gradient backdrop with the animation on top.
    """
    def __init__(
        self,
        settings: AnimationSettings,
        backdrop: Optional[list] = None,
        size: Tuple[int, int] = WINDOW_SIZE,
        caption: str = WINDOW_CAPTION,
    ):
        pygame.init()
        pygame.font.init()

        self.screen = pygame.display.set_mode(size, pygame.RESIZABLE)
        pygame.display.set_caption(caption)
        self.clock = pygame.time.Clock()

        self.backdrop_colors = self._initialize_backdrop(backdrop)
        self.backdrop_surface = self._pre_render_backdrop(size)
        self.renderer = ShapeRenderer(settings.colors)

        logging.info(f"Visualizer initialized with Pygame display ({size[0]}x{size[1]}).")

    def _initialize_backdrop(self, config_colors: Optional[list]) -> List[Tuple[int, int, int]]:
        """Parses backdrop colours from config, falling back to the default gradient."""
        if not config_colors:
            logging.info("No backdrop found in config. Using default gradient.")
            return list(DEFAULT_BACKDROP)
        try:
            colors = []
            for value in config_colors:
                color = pygame.Color(*value) if isinstance(value, (list, tuple)) else pygame.Color(value)
                colors.append((color.r, color.g, color.b))
            return colors
        except (ValueError, TypeError) as e:
            logging.error(f"Could not parse backdrop colors from config: {e}. Using default gradient.")
            return list(DEFAULT_BACKDROP)

    def _pre_render_backdrop(self, size: Tuple[int, int]) -> pygame.Surface:
        """
        Pre-renders the gradient once per window size.
        """
        width, height = size
        logging.debug(f"Pre-rendering {width}x{height} backdrop gradient...")
        return pygame.surfarray.make_surface(gradient_pixels(self.backdrop_colors, width, height))

    def draw(self, snapshot: ParticleSnapshot) -> bool:
        """
        Draws the backdrop and all particles, and handles events.

        Returns:
            bool: False if the animation should exit, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down visualizer.")
                return False

            if event.type == pygame.VIDEORESIZE:
                size = (max(event.w, 1), max(event.h, 1))
                self.backdrop_surface = self._pre_render_backdrop(size)
                logging.info(f"Window resized to {size[0]}x{size[1]}.")

        if self.backdrop_surface.get_size() != self.screen.get_size():
            self.backdrop_surface = self._pre_render_backdrop(self.screen.get_size())

        self.screen.blit(self.backdrop_surface, (0, 0))
        self.renderer.draw(self.screen, snapshot)

        pygame.display.flip()
        return True

    def close(self):
        """Shuts down Pygame."""
        pygame.font.quit()
        pygame.quit()
