# settings.py
"""
Configuration for the floating shapes animation.

This module defines AnimationSettings, the validated, read-only set of
parameters the engine is built from. Settings are usually created from
the "animation" section of config.json via AnimationSettings.from_dict.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from constants import DEFAULT_SHAPE_COLORS
from particle import Direction

# --- Data Contracts ---
#
# class AnimationSettings (frozen dataclass):
#   - Fields: see the class body. All have defaults.
#   - Invariants (checked on construction):
#     - spawn_rate is a finite number > 0 (shapes per second).
#     - max_particles is an integer >= 0.
#     - speed_multiplier, size_multiplier and rotation_speed_multiplier
#       are finite numbers > 0.
#     - direction is a Direction (strings "up"/"down" are converted).
#   - Side Effects: Logs at CRITICAL and raises ConfigurationError when
#     an invariant does not hold.
#
# AnimationSettings.from_dict(params: Dict[str, Any]) -> AnimationSettings:
#   - Inputs: The "animation" section of the config file. Missing keys
#     fall back to the field defaults.
#   - Outputs: A validated AnimationSettings instance.


class ConfigurationError(ValueError):
    """Raised when the animation configuration is invalid."""


def _fail(msg: str) -> None:
    logging.critical(msg)
    raise ConfigurationError(msg)


def _parse_direction(value: Any) -> Direction:
    if isinstance(value, Direction):
        return value
    name = str(value).strip().lower()
    if name in ("left", "right"):
        _fail(
            f"Configuration error: direction '{name}' is not supported. "
            f"Shapes can only travel 'up' or 'down'."
        )
    try:
        return Direction(name)
    except ValueError:
        _fail(f"Configuration error: unknown direction '{value}'. Use 'up' or 'down'.")


@dataclass(frozen=True)
class AnimationSettings:
    """
    Parameters shared by the spawner, the updater and the renderer.
    """
    max_particles: int = 50
    speed_multiplier: float = 1.0
    size_multiplier: float = 1.0
    kind: str = "circle"
    colors: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_SHAPE_COLORS))
    direction: Direction = Direction.UP
    spawn_rate: float = 10.0
    # A text glyph drawn instead of the default geometry.
    icon: Optional[str] = None
    icon_font: Optional[str] = None
    # Called as custom_draw(surface, center, radius, color); overrides the icon.
    custom_draw: Optional[Callable] = None
    enable_rotation: bool = False
    rotation_speed_multiplier: float = 1.0
    enable_pulse: bool = False
    pulse_speed: float = 2.0
    pulse_amplitude: float = 0.3
    seed: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "direction", _parse_direction(self.direction))

        rate = self.spawn_rate
        if isinstance(rate, bool) or not isinstance(rate, (int, float)):
            _fail(f"Configuration error: spawn_rate must be a number, got {rate!r}.")
        if not math.isfinite(rate) or rate <= 0:
            _fail(
                f"Configuration error: spawn_rate must be greater than zero "
                f"(shapes per second), got {rate}."
            )

        for name in ("speed_multiplier", "size_multiplier", "rotation_speed_multiplier"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                _fail(f"Configuration error: {name} must be a number, got {value!r}.")
            if not math.isfinite(value) or value <= 0:
                _fail(f"Configuration error: {name} must be greater than zero, got {value}.")

        count = self.max_particles
        if isinstance(count, bool) or not isinstance(count, int):
            _fail(f"Configuration error: max_particles must be an integer, got {count!r}.")
        if count < 0:
            _fail(f"Configuration error: max_particles must not be negative, got {count}.")

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "AnimationSettings":
        """Builds settings from a config section, using defaults for missing keys."""
        defaults = cls()
        settings = cls(
            max_particles=params.get('max_particles', defaults.max_particles),
            speed_multiplier=float(params.get('speed_multiplier', defaults.speed_multiplier)),
            size_multiplier=float(params.get('size_multiplier', defaults.size_multiplier)),
            kind=params.get('kind', defaults.kind),
            colors=params.get('colors') or defaults.colors,
            direction=params.get('direction', defaults.direction),
            spawn_rate=params.get('spawn_rate', defaults.spawn_rate),
            icon=params.get('icon'),
            icon_font=params.get('icon_font'),
            enable_rotation=bool(params.get('enable_rotation', defaults.enable_rotation)),
            rotation_speed_multiplier=float(
                params.get('rotation_speed_multiplier', defaults.rotation_speed_multiplier)
            ),
            enable_pulse=bool(params.get('enable_pulse', defaults.enable_pulse)),
            pulse_speed=float(params.get('pulse_speed', defaults.pulse_speed)),
            pulse_amplitude=float(params.get('pulse_amplitude', defaults.pulse_amplitude)),
            seed=params.get('seed'),
        )
        logging.debug(f"Animation settings parsed: {settings}")
        return settings
