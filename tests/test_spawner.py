"""Spawner tests"""

import math

import numpy as np
import pytest

from particle import CustomShape, DefaultShape, Direction, IconShape, ParticleSnapshot
from settings import AnimationSettings
from spawner import Spawner


class TestCreateParticle:

    def test_nearest_particle_travelling_up(self, scripted_rng):
        """depth=0: full speed, full size, starts at the bottom edge"""
        spawner = Spawner(AnimationSettings(), scripted_rng(0.0))
        particle = spawner.create_particle()
        assert particle.depth == 0.0
        assert particle.velocity == pytest.approx(0.2)
        assert particle.y == 1.0
        assert particle.opacity == pytest.approx(0.8)
        assert particle.base_opacity == pytest.approx(0.8)
        assert particle.radius == pytest.approx(10.0)
        assert particle.direction is Direction.UP

    def test_depth_scales_speed_opacity_and_size(self, scripted_rng):
        settings = AnimationSettings(speed_multiplier=2.0, size_multiplier=3.0)
        particle = Spawner(settings, scripted_rng(0.5)).create_particle()
        assert particle.depth == 0.5
        assert particle.velocity == pytest.approx((0.2 - 0.15 * 0.5) * 2.0)
        assert particle.opacity == pytest.approx(0.8 - 0.5 * 0.5)
        assert particle.radius == pytest.approx(20.0 * 3.0 * 0.75)
        assert particle.x == 0.5

    def test_downward_particles_start_above_top_edge(self, scripted_rng):
        settings = AnimationSettings(direction=Direction.DOWN)
        particle = Spawner(settings, scripted_rng(0.0)).create_particle()
        assert particle.y == -0.1
        assert particle.direction is Direction.DOWN

    def test_rotation_disabled_gives_zero_angular_velocity(self):
        spawner = Spawner(AnimationSettings(seed=3))
        assert all(spawner.create_particle().angular_velocity == 0.0 for _ in range(20))

    def test_rotation_enabled_stays_in_range(self):
        settings = AnimationSettings(enable_rotation=True, rotation_speed_multiplier=2.0, seed=3)
        spawner = Spawner(settings)
        speeds = [spawner.create_particle().angular_velocity for _ in range(200)]
        assert all(-0.25 <= s <= 0.25 for s in speeds)
        assert any(s != 0.0 for s in speeds)

    def test_pulse_disabled(self):
        particle = Spawner(AnimationSettings(seed=3)).create_particle()
        assert particle.pulse_phase == 0.0
        assert particle.pulse_frequency == 0.0
        assert particle.pulsing is False

    def test_pulse_enabled(self):
        settings = AnimationSettings(enable_pulse=True, pulse_speed=3.0, pulse_amplitude=0.2, seed=3)
        spawner = Spawner(settings)
        for _ in range(50):
            particle = spawner.create_particle()
            assert 0.0 <= particle.pulse_phase < 2 * math.pi
            assert particle.pulse_frequency == 3.0
            assert particle.pulse_amplitude == 0.2
            assert particle.pulsing is True

    def test_default_shape(self):
        particle = Spawner(AnimationSettings(kind="triangle", seed=1)).create_particle()
        assert particle.shape == DefaultShape("triangle")

    def test_icon_shape(self):
        settings = AnimationSettings(kind="heart", icon="♥", icon_font="dejavusans", seed=1)
        particle = Spawner(settings).create_particle()
        assert particle.shape == IconShape("heart", "♥", "dejavusans")

    def test_custom_draw_takes_priority_over_icon(self):
        def draw(surface, center, radius, color):
            pass

        settings = AnimationSettings(icon="*", custom_draw=draw, seed=1)
        shape = Spawner(settings).create_particle().shape
        assert isinstance(shape, CustomShape)
        assert shape.draw is draw


class TestSpawn:

    def test_spawn_appends_one_particle(self):
        spawner = Spawner(AnimationSettings(seed=1))
        empty = ParticleSnapshot.empty()
        result = spawner.spawn(empty)
        assert len(result) == 1
        assert len(empty) == 0

    def test_population_never_exceeds_cap(self):
        spawner = Spawner(AnimationSettings(max_particles=5, seed=1))
        snapshot = ParticleSnapshot.empty()
        for _ in range(20):
            snapshot = spawner.spawn(snapshot)
            assert len(snapshot) <= 5
        assert len(snapshot) == 5

    def test_spawn_at_cap_returns_same_snapshot(self):
        spawner = Spawner(AnimationSettings(max_particles=1, seed=1))
        full = spawner.spawn(ParticleSnapshot.empty())
        assert spawner.spawn(full) is full

    def test_zero_cap_never_spawns(self):
        spawner = Spawner(AnimationSettings(max_particles=0, seed=1))
        assert len(spawner.spawn(ParticleSnapshot.empty())) == 0

    def test_new_settings_apply_to_later_spawns(self, scripted_rng):
        spawner = Spawner(AnimationSettings(kind="circle"), scripted_rng(0.0))
        spawner.settings = AnimationSettings(kind="heart")
        assert spawner.create_particle().kind == "heart"


class TestNextDelay:

    def test_delay_is_jittered_around_rate(self):
        spawner = Spawner(AnimationSettings(spawn_rate=10.0, seed=5))
        delays = np.array([spawner.next_delay() for _ in range(500)])
        assert delays.min() >= 0.08
        assert delays.max() < 0.12
        assert delays.std() > 0

    def test_delay_bounds(self, scripted_rng):
        settings = AnimationSettings(spawn_rate=4.0)
        assert Spawner(settings, scripted_rng(0.0)).next_delay() == pytest.approx(0.2)
        assert Spawner(settings, scripted_rng(0.5)).next_delay() == pytest.approx(0.25)
