from __future__ import annotations

from src.main.config import AppSettings, get_settings
from src.shared.consts import EnumEnvironment


def test_get_settings_loads_defaults(monkeypatch) -> None:
    monkeypatch.delenv("FORECAST_WINDOW_SIZE", raising=False)
    monkeypatch.delenv("SIMULATION_SEED", raising=False)
    settings = get_settings()
    assert settings.environment == EnumEnvironment.DEVELOPMENT
    assert settings.ge.title == "Risk Forecast Dashboard"
    assert settings.forecast.window_size == 50
    assert settings.forecast.rank is None
    assert settings.simulation.seed == 12345
    assert settings.simulation.roll_forward_interval_seconds == 0.0


def test_settings_respect_environment_variables(monkeypatch) -> None:
    monkeypatch.setenv("GE_TITLE", "Testing")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("FORECAST_HORIZON", "10")
    monkeypatch.setenv("FORECAST_RANK", "4")
    monkeypatch.setenv("SIMULATION_FACTOR_COUNT", "3")
    monkeypatch.setenv("SIMULATION_ROLL_FORWARD_INTERVAL_SECONDS", "2.5")
    monkeypatch.setenv("ENVIRONMENT", "production")

    settings = AppSettings()

    assert settings.ge.title == "Testing"
    assert settings.logging.level.value == "DEBUG"
    assert settings.forecast.horizon == 10
    assert settings.forecast.rank == 4
    assert settings.simulation.factor_count == 3
    assert settings.simulation.roll_forward_interval_seconds == 2.5
    assert settings.environment.is_production
