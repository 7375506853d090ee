from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from zipweather.domain.models import Coordinates, WeatherReading
from zipweather.lookup.service import TemperatureLookupService
from zipweather.main import create_app
from zipweather.settings import AppSettings, EnvSettings, ZipWeatherYamlSettings


@pytest.fixture
def geocoder() -> MagicMock:
    mock = MagicMock()
    mock.get_location.return_value = Coordinates(lat="80", lon="100")
    return mock


@pytest.fixture
def weather_provider() -> MagicMock:
    mock = MagicMock()
    mock.get_weather.return_value = WeatherReading(temp_c=20.0, temp_f=40.0)
    return mock


@pytest.fixture
def lookup_service(geocoder: MagicMock, weather_provider: MagicMock) -> TemperatureLookupService:
    return TemperatureLookupService(geocoder=geocoder, weather_provider=weather_provider)


@pytest.fixture
def app_settings(tmp_path: Path) -> AppSettings:
    env = EnvSettings(
        _env_file=None,
        weather_api_key="test-key",
        zipweather_env="test",
        zipweather_config_path=tmp_path / "zipweather.yaml",
    )
    return AppSettings(
        env=env,
        yaml=ZipWeatherYamlSettings(),
        project_root=tmp_path,
        config_path=tmp_path / "zipweather.yaml",
    )


@pytest.fixture
def client(app_settings: AppSettings, lookup_service: TemperatureLookupService):
    app = create_app(app_settings, lookup_service=lookup_service)
    with TestClient(app) as test_client:
        yield test_client
