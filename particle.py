# particle.py
"""
Particle value objects and the immutable collection that holds them.

A Particle describes one floating shape: where it is, how fast it moves,
how it looks. A ParticleSnapshot is a point-in-time, insertion-ordered
collection of particles. It keeps the numeric state in read-only NumPy
arrays so the updater can advance every particle in one vectorized pass
and the renderer can sort by depth cheaply.

Neither type is ever mutated. Spawning and updating produce new
snapshots, so a reader holding an older snapshot never sees a
half-updated particle.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Iterator, Optional, Tuple, Union

import numpy as np

# --- Data Contracts ---
#
# class Particle (frozen dataclass):
#   - x, y: float, normalized position relative to the drawing surface.
#   - radius: float > 0, base size in pixels.
#   - velocity: float, speed along the travel axis in normalized units/s.
#   - opacity, base_opacity: float in [0, 1]. base_opacity defaults to
#     opacity. Pulsing oscillates opacity around base_opacity.
#   - depth: float in [0, 1], 0 is nearest. Fixed for the particle's life.
#   - shape: DefaultShape | IconShape | CustomShape.
#   - direction: Direction, captured at spawn time.
#   - rotation, angular_velocity: float, radians and radians/s.
#   - pulse_phase, pulse_frequency, pulse_amplitude: float.
#   - pulsing: bool, whether the updater drives opacity from the phase.
#
# class ParticleSnapshot:
#   - __init__(self, shapes=(), **arrays):
#     - Inputs: one shape per particle and one 1-D array per numeric field
#       (see _ARRAY_FIELDS). Missing arrays are zero-filled.
#     - Invariants: all arrays have length len(shapes) and are read-only.
#   - append(particle) -> ParticleSnapshot: new snapshot with one more row.
#   - replace(mask=None, **arrays) -> ParticleSnapshot: new snapshot with
#     the given arrays substituted, then rows filtered by the boolean mask.
#   - depth_order() -> np.ndarray: indices sorted by ascending depth,
#     stable for equal depths.


class Direction(Enum):
    """Travel direction along the vertical axis."""
    UP = "up"
    DOWN = "down"

    @property
    def sign(self) -> int:
        # Screen y grows downwards.
        return -1 if self is Direction.UP else 1


@dataclass(frozen=True)
class DefaultShape:
    """Built-in geometry selected by kind (circle, rectangle, triangle, heart)."""
    kind: str


@dataclass(frozen=True)
class IconShape:
    """A text glyph rendered with a pygame font."""
    kind: str
    glyph: str
    font_name: Optional[str] = None


@dataclass(frozen=True)
class CustomShape:
    """
    A caller-supplied drawing routine.

    draw(surface, center, radius, color) is called with the local canvas
    the shape is painted on, the canvas-space center, the particle radius
    and a pygame.Color carrying the particle's alpha.
    """
    kind: str
    draw: Callable


Shape = Union[DefaultShape, IconShape, CustomShape]


@dataclass(frozen=True)
class Particle:
    """
    State of one floating shape.
    """
    x: float
    y: float
    radius: float
    velocity: float
    opacity: float
    depth: float
    shape: Shape = DefaultShape("circle")
    direction: Direction = Direction.UP
    rotation: float = 0.0
    angular_velocity: float = 0.0
    base_opacity: Optional[float] = None
    pulse_phase: float = 0.0
    pulse_frequency: float = 0.0
    pulse_amplitude: float = 0.0
    pulsing: bool = False

    def __post_init__(self):
        if self.base_opacity is None:
            object.__setattr__(self, "base_opacity", self.opacity)

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def kind(self) -> str:
        return self.shape.kind


# Numeric particle fields stored column-wise in a snapshot.
_ARRAY_FIELDS = {
    "x": np.float64,
    "y": np.float64,
    "radius": np.float64,
    "velocity": np.float64,
    "opacity": np.float64,
    "base_opacity": np.float64,
    "depth": np.float64,
    "rotation": np.float64,
    "angular_velocity": np.float64,
    "pulse_phase": np.float64,
    "pulse_frequency": np.float64,
    "pulse_amplitude": np.float64,
    "direction": np.int8,
    "pulsing": np.bool_,
}


def _column_value(particle: Particle, name: str):
    if name == "direction":
        return particle.direction.sign
    return getattr(particle, name)


class ParticleSnapshot:
    """
    An immutable, insertion-ordered collection of particles.
    """
    def __init__(self, shapes: Iterable[Shape] = (), **arrays):
        self.shapes = tuple(shapes)
        count = len(self.shapes)

        for name, dtype in _ARRAY_FIELDS.items():
            values = arrays.pop(name, None)
            if values is None:
                column = np.zeros(count, dtype=dtype)
            else:
                # Always copy so a snapshot never aliases a caller's array.
                column = np.array(values, dtype=dtype)
            if column.shape != (count,):
                raise ValueError(
                    f"Field '{name}' has shape {column.shape}, expected ({count},)."
                )
            column.setflags(write=False)
            setattr(self, name, column)

        if arrays:
            raise TypeError(f"Unknown particle fields: {', '.join(sorted(arrays))}")

    @classmethod
    def empty(cls) -> "ParticleSnapshot":
        return cls()

    @classmethod
    def from_particles(cls, particles: Iterable[Particle]) -> "ParticleSnapshot":
        particles = list(particles)
        arrays = {
            name: [_column_value(p, name) for p in particles]
            for name in _ARRAY_FIELDS
        }
        return cls([p.shape for p in particles], **arrays)

    def __len__(self) -> int:
        return len(self.shapes)

    def __getitem__(self, index: int) -> Particle:
        return Particle(
            x=float(self.x[index]),
            y=float(self.y[index]),
            radius=float(self.radius[index]),
            velocity=float(self.velocity[index]),
            opacity=float(self.opacity[index]),
            depth=float(self.depth[index]),
            shape=self.shapes[index],
            direction=Direction.UP if self.direction[index] < 0 else Direction.DOWN,
            rotation=float(self.rotation[index]),
            angular_velocity=float(self.angular_velocity[index]),
            base_opacity=float(self.base_opacity[index]),
            pulse_phase=float(self.pulse_phase[index]),
            pulse_frequency=float(self.pulse_frequency[index]),
            pulse_amplitude=float(self.pulse_amplitude[index]),
            pulsing=bool(self.pulsing[index]),
        )

    def __iter__(self) -> Iterator[Particle]:
        for i in range(len(self)):
            yield self[i]

    def __repr__(self) -> str:
        return f"ParticleSnapshot({len(self)} particles)"

    def append(self, particle: Particle) -> "ParticleSnapshot":
        """Returns a new snapshot with the particle added at the end."""
        arrays = {
            name: np.append(getattr(self, name), _column_value(particle, name))
            for name in _ARRAY_FIELDS
        }
        return ParticleSnapshot(self.shapes + (particle.shape,), **arrays)

    def replace(self, mask: Optional[np.ndarray] = None, **arrays) -> "ParticleSnapshot":
        """
        Returns a new snapshot with some arrays substituted.

        Args:
            mask (Optional[np.ndarray]): Boolean array; rows where it is
                False are dropped from the result.
            **arrays: Replacement arrays keyed by field name.
        """
        columns = {name: getattr(self, name) for name in _ARRAY_FIELDS}
        columns.update(arrays)
        shapes = self.shapes
        if mask is not None:
            mask = np.asarray(mask, dtype=bool)
            columns = {name: np.asarray(values)[mask] for name, values in columns.items()}
            shapes = tuple(shape for shape, keep in zip(shapes, mask) if keep)
        return ParticleSnapshot(shapes, **columns)

    def depth_order(self) -> np.ndarray:
        """Indices that paint the snapshot from depth 0 upwards."""
        return np.argsort(self.depth, kind="stable")
