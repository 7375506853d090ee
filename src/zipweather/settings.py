from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .adapters.geocoding.nominatim import (
    DEFAULT_COUNTRY,
    DEFAULT_USER_AGENT,
    NOMINATIM_BASE_URL,
)
from .adapters.weather.weatherapi import WEATHER_API_BASE_URL

PROJECT_ROOT = Path(__file__).resolve().parents[2]

LOGGER = logging.getLogger(__name__)


def _validate_http_url(value: str, *, field_name: str) -> str:
    text = value.strip()
    parsed = urlparse(text)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"{field_name} must be an absolute http(s) URL")
    return text.rstrip("/")


class GeocoderSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    provider: Literal["nominatim"] = "nominatim"
    base_url: str = NOMINATIM_BASE_URL
    country: str = DEFAULT_COUNTRY
    timeout_seconds: float = Field(default=10, gt=0, le=60)
    user_agent: str = DEFAULT_USER_AGENT

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        return _validate_http_url(value, field_name="geocoder.base_url")

    @field_validator("country", "user_agent")
    @classmethod
    def validate_non_empty_text(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("geocoder text fields must not be empty")
        return text


class WeatherSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    provider: Literal["weatherapi"] = "weatherapi"
    base_url: str = WEATHER_API_BASE_URL
    timeout_seconds: float = Field(default=10, gt=0, le=60)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        return _validate_http_url(value, field_name="weather.base_url")


class ZipWeatherYamlSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    geocoder: GeocoderSettings = Field(default_factory=GeocoderSettings)
    weather: WeatherSettings = Field(default_factory=WeatherSettings)


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    weather_api_key: str = ""
    zipweather_env: Literal["dev", "test", "prod"] = "dev"
    zipweather_config_path: Path = Path("config/zipweather.yaml")
    zipweather_log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    zipweather_host: str = "0.0.0.0"
    zipweather_port: int = Field(default=8080, ge=1, le=65535)

    @field_validator("zipweather_log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class AppSettings(BaseModel):
    env: EnvSettings
    yaml: ZipWeatherYamlSettings
    project_root: Path
    config_path: Path


def _resolve_project_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


def _load_yaml_settings(path: Path) -> ZipWeatherYamlSettings:
    if not path.exists():
        LOGGER.info("Config file %s not found, using defaults", path)
        return ZipWeatherYamlSettings()

    raw_config = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ValueError("zipweather config must be a YAML mapping/object at the top level")
    return ZipWeatherYamlSettings.model_validate(raw_config)


@lru_cache(maxsize=1)
def load_settings() -> AppSettings:
    env = EnvSettings()
    config_path = _resolve_project_path(env.zipweather_config_path)
    return AppSettings(
        env=env,
        yaml=_load_yaml_settings(config_path),
        project_root=PROJECT_ROOT,
        config_path=config_path,
    )
