"""Tests for process-wide parallax settings resolution."""

from pathlib import Path

import pytest
from parallaxanimator.content.settings import (
    DEFAULT_IMAGE_DIR,
    DELAY_ENV_VAR,
    IMAGE_DIR_ENV_VAR,
    ParallaxSettings,
    coerce_delay,
    load_settings,
)


def test_defaults_without_sources():
    settings = load_settings({}, env={})
    assert settings.default_delay == 60
    assert settings.image_dir == DEFAULT_IMAGE_DIR
    assert settings.image_suffix == ".png"


def test_parameter_wins_over_env():
    settings = load_settings({"DefaultDelay": "45"}, env={DELAY_ENV_VAR: "10"})
    assert settings.default_delay == 45


def test_env_used_when_parameter_missing():
    assert load_settings(None, env={DELAY_ENV_VAR: "12"}).default_delay == 12


def test_invalid_parameter_falls_through_to_env():
    assert load_settings({"DefaultDelay": "fast"}, env={DELAY_ENV_VAR: "20"}).default_delay == 20


@pytest.mark.parametrize("raw", ["0", "-3", "abc", "", "1.5"])
def test_invalid_env_falls_back_to_builtin(raw):
    assert load_settings({}, env={DELAY_ENV_VAR: raw}).default_delay == 60


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv(DELAY_ENV_VAR, "90")
    assert load_settings().default_delay == 90


def test_image_dir_sources():
    assert load_settings({"ImageDir": "assets/bg"}, env={}).image_dir == Path("assets/bg")
    assert load_settings({}, env={IMAGE_DIR_ENV_VAR: "/srv/px"}).image_dir == Path("/srv/px")


@pytest.mark.parametrize("value,expected", [
    (5, 5), ("7", 7), (" 8 ", 8), (0, None), (None, None), (True, None), ("x", None),
])
def test_coerce_delay(value, expected):
    assert coerce_delay(value) == expected


def test_settings_reject_bad_delay():
    with pytest.raises(ValueError, match="default_delay must be a positive int"):
        ParallaxSettings(default_delay=0)


@pytest.mark.parametrize("bad", [True, False, 2.0, "60"])
def test_settings_reject_non_int_delay(bad):
    with pytest.raises(ValueError, match="default_delay must be a positive int"):
        ParallaxSettings(default_delay=bad)
