from pathlib import Path

import pytest
from pydantic import ValidationError

from zipweather.settings import EnvSettings, ZipWeatherYamlSettings, _load_yaml_settings


def test_missing_config_file_uses_defaults(tmp_path: Path):
    settings = _load_yaml_settings(tmp_path / "missing.yaml")

    assert settings == ZipWeatherYamlSettings()
    assert settings.geocoder.base_url == "https://nominatim.openstreetmap.org"
    assert settings.geocoder.country == "Brazil"
    assert settings.weather.base_url == "https://api.weatherapi.com/v1"


def test_config_file_overrides(tmp_path: Path):
    config_path = tmp_path / "zipweather.yaml"
    config_path.write_text(
        "geocoder:\n"
        "  base_url: https://geo.example.com/\n"
        "  country: Portugal\n"
        "  timeout_seconds: 2.5\n"
        "weather:\n"
        "  timeout_seconds: 4\n"
        "unknown: ignored\n",
        encoding="utf-8",
    )

    settings = _load_yaml_settings(config_path)

    assert settings.geocoder.base_url == "https://geo.example.com"
    assert settings.geocoder.country == "Portugal"
    assert settings.geocoder.timeout_seconds == 2.5
    assert settings.weather.timeout_seconds == 4


def test_empty_config_file_uses_defaults(tmp_path: Path):
    config_path = tmp_path / "zipweather.yaml"
    config_path.write_text("", encoding="utf-8")

    assert _load_yaml_settings(config_path) == ZipWeatherYamlSettings()


def test_config_must_be_a_mapping(tmp_path: Path):
    config_path = tmp_path / "zipweather.yaml"
    config_path.write_text("- geocoder\n- weather\n", encoding="utf-8")

    with pytest.raises(ValueError, match="mapping"):
        _load_yaml_settings(config_path)


@pytest.mark.parametrize(
    "raw",
    [
        {"geocoder": {"base_url": "ftp://example.com"}},
        {"geocoder": {"provider": "google"}},
        {"geocoder": {"country": "  "}},
        {"weather": {"timeout_seconds": 0}},
    ],
)
def test_invalid_config_values(raw):
    with pytest.raises(ValidationError):
        ZipWeatherYamlSettings.model_validate(raw)


def test_env_settings_read_environment(monkeypatch):
    monkeypatch.setenv("WEATHER_API_KEY", "abc123")
    monkeypatch.setenv("ZIPWEATHER_ENV", "prod")
    monkeypatch.setenv("ZIPWEATHER_LOG_LEVEL", "debug")
    monkeypatch.setenv("ZIPWEATHER_PORT", "9090")

    env = EnvSettings(_env_file=None)

    assert env.weather_api_key == "abc123"
    assert env.zipweather_env == "prod"
    assert env.zipweather_log_level == "DEBUG"
    assert env.zipweather_port == 9090


def test_env_settings_defaults(monkeypatch):
    for name in ("WEATHER_API_KEY", "ZIPWEATHER_ENV", "ZIPWEATHER_LOG_LEVEL", "ZIPWEATHER_PORT"):
        monkeypatch.delenv(name, raising=False)

    env = EnvSettings(_env_file=None)

    assert env.weather_api_key == ""
    assert env.zipweather_env == "dev"
    assert env.zipweather_port == 8080
