from __future__ import annotations

import pytest
from pydantic import ValidationError

from calastro.config import SettingsError, SolverSettings, get_settings, load_settings, system_clock


def test_defaults():
    settings = load_settings({})
    assert settings == SolverSettings()
    assert settings.max_iterations == 12
    assert settings.tolerance_hours == pytest.approx(1e-5)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CALASTRO_MAX_ITERATIONS", "30")
    monkeypatch.setenv("CALASTRO_TOLERANCE_HOURS", "0.001")
    settings = get_settings()
    assert settings.max_iterations == 30
    assert settings.tolerance_hours == pytest.approx(0.001)
    assert get_settings() is settings


def test_invalid_environment(monkeypatch):
    monkeypatch.setenv("CALASTRO_MAX_ITERATIONS", "zero")
    with pytest.raises(SettingsError) as excinfo:
        get_settings()
    assert isinstance(excinfo.value.__cause__, ValidationError)


def test_settings_are_frozen_and_bounded():
    settings = SolverSettings()
    with pytest.raises(ValidationError):
        settings.max_iterations = 3
    with pytest.raises(ValidationError):
        SolverSettings(tolerance_hours=0)


def test_system_clock_is_timezone_aware():
    assert system_clock().tzinfo is not None
