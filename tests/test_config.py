"""Test suite for package configuration."""

import pytest

import orrery
from orrery import config, temp_config, ScaleConfig, OrreryConfig


@pytest.fixture(autouse=True)
def restore_config():
    yield
    config.reset()


def test_defaults():
    fresh = OrreryConfig()
    assert fresh.MAX_SUBSTEPS == 100
    assert fresh.MAX_SUBSTEP == 0.01
    assert fresh.TRAIL_LENGTH == 1000
    assert fresh.SCALE.au_to_sim == 215.0


def test_reset():
    config.MAX_SUBSTEPS = 3
    config.SCALE = ScaleConfig(au_to_sim=1.0)
    config.reset()
    assert config.MAX_SUBSTEPS == 100
    assert config.SCALE == ScaleConfig()


def test_temp_config_restores():
    with temp_config(TRAIL_LENGTH=5, STRICT_VALIDATION=False) as cfg:
        assert cfg.TRAIL_LENGTH == 5
        assert orrery.config.STRICT_VALIDATION is False
    assert config.TRAIL_LENGTH == 1000
    assert config.STRICT_VALIDATION is True


def test_temp_config_restores_after_error():
    with pytest.raises(RuntimeError):
        with temp_config(MAX_SUBSTEPS=1):
            raise RuntimeError("boom")
    assert config.MAX_SUBSTEPS == 100


def test_temp_config_unknown_key():
    with pytest.raises(AttributeError, match="no attribute"):
        with temp_config(NOT_A_SETTING=1):
            pass


def test_repr_lists_sections():
    text = repr(config)
    assert "Root Finding" in text
    assert "MAX_SUBSTEPS = 100" in text
    assert "au_to_sim = 215.0" in text


class TestScaleConfig:

    def test_frozen(self):
        with pytest.raises(AttributeError):
            ScaleConfig().au_to_sim = 2150.0

    @pytest.mark.parametrize("field", ["au_to_sim", "km_per_au",
                                       "seconds_per_day"])
    def test_positive(self, field):
        with pytest.raises(ValueError, match=field):
            ScaleConfig(**{field: 0.0})

    def test_conversions(self):
        scale = ScaleConfig()
        assert scale.position_to_sim(2.0) == 430.0
        assert scale.velocity_to_sim(86400.0) == pytest.approx(215.0)
        assert scale.km_to_sim(149597870.7) == pytest.approx(215.0)

    def test_versions_distinguish_scales(self):
        assert ScaleConfig() != ScaleConfig(version="2", au_to_sim=2150.0)
