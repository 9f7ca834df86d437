# spawner.py
"""
Creates new particles at a randomized cadence.

This module defines the Spawner class. Each new particle gets a random
depth, and every depth-dependent property (speed, opacity, size) is
derived from it so that near shapes look larger, faster and more opaque
than far ones.
"""
import logging

import numpy as np

from constants import (
    BASE_SPEED, DEPTH_SPEED_FALLOFF, BASE_OPACITY, DEPTH_OPACITY_FALLOFF,
    MIN_RADIUS, MAX_RADIUS, DEPTH_RADIUS_FALLOFF, MAX_ANGULAR_SPEED,
    SPAWN_JITTER_MIN, SPAWN_JITTER_SPAN, START_EDGE_UP, START_EDGE_DOWN, TWO_PI
)
from particle import (
    CustomShape, DefaultShape, Direction, IconShape, Particle, ParticleSnapshot, Shape
)
from settings import AnimationSettings

# --- Data Contracts ---
#
# class Spawner:
#   - __init__(self, settings: AnimationSettings, rng=None):
#     - Inputs:
#       - settings: Validated animation settings.
#       - rng: Anything with random() -> float in [0, 1) and
#         uniform(low, high) -> float. Defaults to a NumPy Generator
#         seeded from settings.seed.
#
#   - create_particle(self) -> Particle:
#     - Outputs: A new particle at the start edge for settings.direction.
#     - Invariants: velocity == (0.2 - 0.15 * depth) * speed_multiplier,
#       opacity == base_opacity == 0.8 - 0.5 * depth.
#
#   - spawn(self, snapshot: ParticleSnapshot) -> ParticleSnapshot:
#     - Outputs: The snapshot with one new particle appended, or the
#       same snapshot when it already holds max_particles.
#     - Invariants: len(result) <= max(max_particles, len(snapshot)).
#
#   - next_delay(self) -> float:
#     - Outputs: Seconds until the next spawn attempt,
#       (1 / spawn_rate) * (0.8 + 0.4 * U[0, 1)).


class Spawner:
    """
    Synthesizes particles from the current settings.
    """
    def __init__(self, settings: AnimationSettings, rng=None):
        self.settings = settings
        # Rule 12: All randomness is controlled by a single master seed.
        self.rng = rng if rng is not None else np.random.default_rng(settings.seed)

    def _shape(self) -> Shape:
        settings = self.settings
        if settings.custom_draw is not None:
            return CustomShape(settings.kind, settings.custom_draw)
        if settings.icon is not None:
            return IconShape(settings.kind, settings.icon, settings.icon_font)
        return DefaultShape(settings.kind)

    def create_particle(self) -> Particle:
        """Builds one particle with depth-derived speed, opacity and size."""
        settings = self.settings
        depth = float(self.rng.random())
        velocity = (BASE_SPEED - DEPTH_SPEED_FALLOFF * depth) * settings.speed_multiplier
        opacity = BASE_OPACITY - DEPTH_OPACITY_FALLOFF * depth
        base_radius = float(self.rng.uniform(MIN_RADIUS, MAX_RADIUS))
        radius = base_radius * settings.size_multiplier * (1.0 - DEPTH_RADIUS_FALLOFF * depth)

        start_y = START_EDGE_UP if settings.direction is Direction.UP else START_EDGE_DOWN
        x = float(self.rng.random())

        angular_velocity = 0.0
        if settings.enable_rotation:
            angular_velocity = float(
                self.rng.uniform(-MAX_ANGULAR_SPEED, MAX_ANGULAR_SPEED)
            ) * settings.rotation_speed_multiplier

        pulse_phase = 0.0
        pulse_frequency = 0.0
        if settings.enable_pulse:
            pulse_phase = float(self.rng.uniform(0.0, TWO_PI))
            pulse_frequency = settings.pulse_speed

        return Particle(
            x=x,
            y=start_y,
            radius=radius,
            velocity=velocity,
            opacity=opacity,
            depth=depth,
            shape=self._shape(),
            direction=settings.direction,
            angular_velocity=angular_velocity,
            pulse_phase=pulse_phase,
            pulse_frequency=pulse_frequency,
            pulse_amplitude=settings.pulse_amplitude if settings.enable_pulse else 0.0,
            pulsing=settings.enable_pulse,
        )

    def spawn(self, snapshot: ParticleSnapshot) -> ParticleSnapshot:
        """Appends a new particle unless the population cap is reached."""
        if len(snapshot) >= self.settings.max_particles:
            return snapshot
        particle = self.create_particle()
        logging.debug(
            f"Spawned {particle.kind} at x={particle.x:.3f} "
            f"(depth {particle.depth:.2f}, radius {particle.radius:.1f}); "
            f"population {len(snapshot) + 1}/{self.settings.max_particles}."
        )
        return snapshot.append(particle)

    def next_delay(self) -> float:
        """Seconds to wait before the next spawn attempt."""
        jitter = SPAWN_JITTER_MIN + SPAWN_JITTER_SPAN * float(self.rng.random())
        return (1.0 / self.settings.spawn_rate) * jitter
