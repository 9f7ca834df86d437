# engine.py
"""
Composition root of the floating shapes animation.

The Engine owns the current particle snapshot. Spawning runs on a
cooperative scheduler as a chain of events, each one rescheduling the
next after a jittered delay measured from its own due time. Updating
is tied to the host's frame: every pump() advances all particles once.
The host calls pump() once per frame and reads the snapshot property
to paint.
"""
import logging
import sched
import time
from typing import Callable, Optional

from particle import ParticleSnapshot
from settings import AnimationSettings
from spawner import Spawner
from updater import Updater

# --- Data Contracts ---
#
# class Engine:
#   - __init__(self, settings, clock=time.monotonic, rng=None):
#     - Inputs:
#       - settings: Validated AnimationSettings.
#       - clock: Monotonic time source in seconds.
#       - rng: Optional random source passed to the Spawner.
#     - Side Effects: None until start() is called.
#
#   - start(self) -> None / stop(self) -> None:
#     - Side Effects: start() schedules the first spawn, due immediately.
#       stop() clears the running flag and cancels the pending spawn.
#       Both are idempotent.
#     - Invariants: After stop() returns, the snapshot is never replaced.
#
#   - pump(self) -> None:
#     - Side Effects: Reads the clock once, runs every spawn due at or
#       before that instant, then advances the particles by one tick.
#       Never blocks.
#     - Invariants: A spawn that is not yet due when pump() starts waits
#       for the next pump. Catch-up after a stall covers at most
#       max_delta_time, and stops as soon as the population cap is hit.
#
#   - configure(self, settings) -> None:
#     - Side Effects: New spawns use the new settings. Particles already
#       in flight are kept and keep their own parameters.
#
#   - snapshot (property) -> ParticleSnapshot: the current particles.


def _no_wait(_delay: float) -> None:
    pass


class Engine:
    """
    Owns the particle collection and schedules spawning and updating.
    """
    def __init__(
        self,
        settings: AnimationSettings,
        clock: Callable[[], float] = time.monotonic,
        rng=None,
    ):
        self.settings = settings
        self._clock = clock
        # The scheduler sees the time frozen at the start of the current pump.
        self._now = clock()
        self._scheduler = sched.scheduler(self._pump_time, _no_wait)
        self._spawner = Spawner(settings, rng)
        self._updater = Updater()
        self._snapshot = ParticleSnapshot.empty()
        self._running = False
        self._spawn_event: Optional[sched.Event] = None

        logging.info(
            f"Engine initialized: up to {settings.max_particles} '{settings.kind}' shapes "
            f"at {settings.spawn_rate:.1f}/s travelling {settings.direction.value}."
        )

    @property
    def snapshot(self) -> ParticleSnapshot:
        return self._snapshot

    @property
    def running(self) -> bool:
        return self._running

    def _pump_time(self) -> float:
        return self._now

    def configure(self, settings: AnimationSettings) -> None:
        """Swaps the configuration without resetting the particles in flight."""
        self.settings = settings
        self._spawner.settings = settings
        logging.info(
            f"Engine reconfigured: '{settings.kind}' shapes, max {settings.max_particles}, "
            f"{settings.spawn_rate:.1f}/s; {len(self._snapshot)} particles kept."
        )

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._now = self._clock()
        self._updater.reset(self._now)
        self._spawn_event = self._scheduler.enterabs(self._now, 0, self._spawn_task)
        logging.info("Engine started.")

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self._spawn_event is not None and self._spawn_event in self._scheduler.queue:
            self._scheduler.cancel(self._spawn_event)
        self._spawn_event = None
        logging.info(f"Engine stopped with {len(self._snapshot)} particles on screen.")

    def pump(self) -> None:
        """Runs the spawns that are due and advances one frame. Call once per frame."""
        if not self._running:
            return
        self._now = self._clock()
        self._scheduler.run(blocking=False)
        if self._running:
            self._snapshot = self._updater.step(self._snapshot, self._now)

    def _spawn_task(self) -> None:
        if not self._running:
            return
        due = self._spawn_event.time if self._spawn_event is not None else self._now
        before = self._snapshot
        self._snapshot = self._spawner.spawn(before)

        # Chain from the due time so spawns faster than the frame rate all
        # land. Restart from now when capped or too far behind.
        anchor = due
        if self._snapshot is before or self._now - due > self._updater.max_delta_time:
            anchor = self._now
        self._spawn_event = self._scheduler.enterabs(
            anchor + self._spawner.next_delay(), 0, self._spawn_task
        )
