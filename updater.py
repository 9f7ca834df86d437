# updater.py
"""
Advances particles by elapsed time and culls the ones that left the view.

This module defines the Updater class, which turns one particle snapshot
into the next. Motion, rotation and opacity pulsing are computed by a
Numba-jitted kernel that writes into freshly allocated arrays, so the
input snapshot is left untouched.
"""
import numpy as np
from numba import jit

from constants import CULL_MIN, CULL_MAX, MAX_DELTA_TIME
from particle import ParticleSnapshot

# --- Data Contracts ---
#
# class Updater:
#   - reset(self, now: float) -> None:
#     - Side Effects: Records now as the time of the previous tick.
#
#   - delta_time(self, now: float) -> float:
#     - Outputs: Seconds since the previous tick, clamped to
#       [0, max_delta_time]. 0 on the very first call.
#     - Side Effects: Records now as the time of the previous tick.
#
#   - advance(self, snapshot, delta_time: float) -> ParticleSnapshot:
#     - Outputs: A new snapshot. Every particle is moved with the same
#       delta_time. Particles travelling up are kept while y >= -0.1,
#       particles travelling down while y <= 1.1.
#     - Invariants: Opacity of pulsing particles is clamped to [0, 1].
#       Depth, radius and velocity are carried over unchanged.
#
#   - step(self, snapshot, now: float) -> ParticleSnapshot:
#     - advance(snapshot, delta_time(now)).

@jit(nopython=True)
def _advance_numba(
    y, velocity, direction, rotation, angular_velocity,
    pulse_phase, pulse_frequency, pulse_amplitude, pulsing,
    base_opacity, opacity, delta_time, cull_min, cull_max,
    new_y, new_rotation, new_phase, new_opacity, keep
):
    """
    Numba-jitted per-particle update.
    Kept separate from the class for Numba compatibility.
    """
    particle_count = y.shape[0]
    for i in range(particle_count):
        moved_y = y[i] + direction[i] * velocity[i] * delta_time
        new_y[i] = moved_y

        # Angular velocity is zero for particles spawned without rotation.
        new_rotation[i] = rotation[i] + angular_velocity[i] * delta_time

        if pulsing[i]:
            phase = pulse_phase[i] + pulse_frequency[i] * delta_time
            value = base_opacity[i] + pulse_amplitude[i] * np.sin(phase)
            if value < 0.0:
                value = 0.0
            elif value > 1.0:
                value = 1.0
            new_phase[i] = phase
            new_opacity[i] = value
        else:
            new_phase[i] = pulse_phase[i]
            new_opacity[i] = opacity[i]

        if direction[i] < 0:
            keep[i] = moved_y >= cull_min
        else:
            keep[i] = moved_y <= cull_max


class Updater:
    """
    Produces the next particle snapshot for each animation tick.
    """
    def __init__(self, max_delta_time: float = MAX_DELTA_TIME):
        self.max_delta_time = max_delta_time
        self.last_tick = None

    def reset(self, now: float) -> None:
        self.last_tick = now

    def delta_time(self, now: float) -> float:
        """
        Seconds since the previous tick, clamped so a stalled host
        (debugger, backgrounded window) does not make shapes jump.
        """
        elapsed = 0.0 if self.last_tick is None else now - self.last_tick
        self.last_tick = now
        return min(max(elapsed, 0.0), self.max_delta_time)

    def advance(self, snapshot: ParticleSnapshot, delta_time: float) -> ParticleSnapshot:
        """
        Moves, rotates and pulses every particle by delta_time seconds.

        Args:
            snapshot (ParticleSnapshot): The current particles. Not modified.
            delta_time (float): Step length in seconds. Not clamped here.

        Returns:
            ParticleSnapshot: The advanced particles, without culled ones.
        """
        count = len(snapshot)
        if count == 0:
            return snapshot

        new_y = np.empty(count, dtype=np.float64)
        new_rotation = np.empty(count, dtype=np.float64)
        new_phase = np.empty(count, dtype=np.float64)
        new_opacity = np.empty(count, dtype=np.float64)
        keep = np.empty(count, dtype=np.bool_)

        _advance_numba(
            snapshot.y, snapshot.velocity, snapshot.direction,
            snapshot.rotation, snapshot.angular_velocity,
            snapshot.pulse_phase, snapshot.pulse_frequency,
            snapshot.pulse_amplitude, snapshot.pulsing,
            snapshot.base_opacity, snapshot.opacity,
            float(delta_time), CULL_MIN, CULL_MAX,
            new_y, new_rotation, new_phase, new_opacity, keep
        )

        return snapshot.replace(
            mask=keep,
            y=new_y,
            rotation=new_rotation,
            pulse_phase=new_phase,
            opacity=new_opacity,
        )

    def step(self, snapshot: ParticleSnapshot, now: float) -> ParticleSnapshot:
        """Advances the snapshot by the clamped time since the previous tick."""
        return self.advance(snapshot, self.delta_time(now))
