"""AnimationSettings validation tests"""

import math

import pytest

from particle import Direction
from settings import AnimationSettings, ConfigurationError


class TestAnimationSettings:

    def test_defaults(self):
        settings = AnimationSettings()
        assert settings.max_particles == 50
        assert settings.spawn_rate == 10.0
        assert settings.direction is Direction.UP
        assert settings.kind == "circle"
        assert set(settings.colors) == {"circle", "rectangle", "heart", "triangle"}

    @pytest.mark.parametrize("rate", [0, -1.0, math.nan, math.inf])
    def test_invalid_spawn_rate_rejected(self, rate):
        with pytest.raises(ConfigurationError):
            AnimationSettings(spawn_rate=rate)

    def test_non_numeric_spawn_rate_rejected(self):
        with pytest.raises(ConfigurationError):
            AnimationSettings(spawn_rate="fast")

    def test_negative_max_particles_rejected(self):
        with pytest.raises(ConfigurationError):
            AnimationSettings(max_particles=-1)

    def test_fractional_max_particles_rejected(self):
        with pytest.raises(ConfigurationError):
            AnimationSettings(max_particles=2.5)

    @pytest.mark.parametrize("name", ["speed_multiplier", "size_multiplier", "rotation_speed_multiplier"])
    @pytest.mark.parametrize("value", [0, -0.5, math.inf])
    def test_non_positive_multiplier_rejected(self, name, value):
        with pytest.raises(ConfigurationError):
            AnimationSettings(**{name: value})

    def test_zero_max_particles_allowed(self):
        assert AnimationSettings(max_particles=0).max_particles == 0

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            AnimationSettings(spawn_rate=0)

    def test_direction_string_is_parsed(self):
        assert AnimationSettings(direction="Down").direction is Direction.DOWN

    @pytest.mark.parametrize("direction", ["left", "right", "sideways"])
    def test_unsupported_direction_rejected(self, direction):
        with pytest.raises(ConfigurationError):
            AnimationSettings(direction=direction)

    def test_from_dict_uses_defaults_for_missing_keys(self):
        settings = AnimationSettings.from_dict({"kind": "heart", "spawn_rate": 5})
        assert settings.kind == "heart"
        assert settings.spawn_rate == 5
        assert settings.max_particles == 50
        assert settings.pulse_amplitude == pytest.approx(0.3)

    def test_from_dict_reads_every_option(self):
        settings = AnimationSettings.from_dict({
            "max_particles": 200,
            "speed_multiplier": 4,
            "size_multiplier": 0.3,
            "direction": "down",
            "spawn_rate": 100,
            "icon": "*",
            "icon_font": "dejavusans",
            "enable_rotation": True,
            "rotation_speed_multiplier": 2,
            "enable_pulse": True,
            "pulse_speed": 3,
            "pulse_amplitude": 0.1,
            "seed": 7,
        })
        assert settings.max_particles == 200
        assert settings.speed_multiplier == 4.0
        assert settings.size_multiplier == pytest.approx(0.3)
        assert settings.direction is Direction.DOWN
        assert settings.icon == "*"
        assert settings.icon_font == "dejavusans"
        assert settings.enable_rotation and settings.enable_pulse
        assert settings.rotation_speed_multiplier == 2.0
        assert settings.pulse_speed == 3.0
        assert settings.pulse_amplitude == pytest.approx(0.1)
        assert settings.seed == 7

    def test_from_dict_rejects_invalid_values(self):
        with pytest.raises(ConfigurationError):
            AnimationSettings.from_dict({"spawn_rate": 0})
