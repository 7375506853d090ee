from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .adapters.geocoding import NominatimGeocoder
from .adapters.weather import WeatherApiProvider
from .domain.models import ErrorResult
from .lookup.service import TemperatureLookupService
from .settings import AppSettings, load_settings

LOGGER = logging.getLogger(__name__)

SERVICE_NAME = "zipweather"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


def _build_geocoder(settings: AppSettings) -> NominatimGeocoder:
    geocoder_settings = settings.yaml.geocoder
    if geocoder_settings.provider != "nominatim":
        raise ValueError(f"Unsupported geocoder provider: {geocoder_settings.provider}")
    return NominatimGeocoder(
        base_url=geocoder_settings.base_url,
        country=geocoder_settings.country,
        timeout_seconds=geocoder_settings.timeout_seconds,
        user_agent=geocoder_settings.user_agent,
    )


def _build_weather_provider(settings: AppSettings) -> WeatherApiProvider:
    weather_settings = settings.yaml.weather
    if weather_settings.provider != "weatherapi":
        raise ValueError(f"Unsupported weather provider: {weather_settings.provider}")
    if not settings.env.weather_api_key.strip():
        raise ValueError("WEATHER_API_KEY must be set to use the weatherapi provider")
    return WeatherApiProvider(
        settings.env.weather_api_key,
        base_url=weather_settings.base_url,
        timeout_seconds=weather_settings.timeout_seconds,
    )


def build_lookup_service(settings: AppSettings) -> TemperatureLookupService:
    return TemperatureLookupService(
        geocoder=_build_geocoder(settings),
        weather_provider=_build_weather_provider(settings),
    )


def _get_lookup_service(request: Request) -> TemperatureLookupService:
    return request.app.state.lookup_service


def create_app(
    settings: AppSettings | None = None,
    *,
    lookup_service: TemperatureLookupService | None = None,
) -> FastAPI:
    """Build the HTTP application.

    Settings are loaded and the lookup service is constructed at startup
    unless provided by the caller.
    """

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        app_settings = settings or load_settings()
        configure_logging(app_settings.env.zipweather_log_level)

        application.state.settings = app_settings
        application.state.lookup_service = lookup_service or build_lookup_service(app_settings)
        application.state.started_at_utc = datetime.now(timezone.utc)
        LOGGER.info(
            "zipweather started (env=%s, geocoder=%s, weather=%s)",
            app_settings.env.zipweather_env,
            app_settings.yaml.geocoder.provider,
            app_settings.yaml.weather.provider,
        )
        yield

    application = FastAPI(title="zipweather", version="0.1.0", lifespan=lifespan)

    @application.get("/health", response_class=JSONResponse)
    def health(request: Request) -> JSONResponse:
        app_settings: AppSettings = request.app.state.settings
        return JSONResponse(
            {
                "status": "ok",
                "service": SERVICE_NAME,
                "environment": app_settings.env.zipweather_env,
                "geocoder": app_settings.yaml.geocoder.provider,
                "weather_provider": app_settings.yaml.weather.provider,
                "started_at_utc": request.app.state.started_at_utc.isoformat(),
                "timestamp_utc": datetime.now(timezone.utc).isoformat(),
            }
        )

    # Plain def so the blocking upstream calls run in the threadpool.
    @application.get("/{postal_code}", response_class=JSONResponse)
    def postal_code_temperature(request: Request, postal_code: str) -> JSONResponse:
        result = _get_lookup_service(request).lookup(postal_code)
        if isinstance(result, ErrorResult):
            return JSONResponse(result.model_dump(), status_code=result.code)
        return JSONResponse(result.model_dump(), status_code=200)

    return application


def run() -> None:
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.env.zipweather_host,
        port=settings.env.zipweather_port,
        log_level=settings.env.zipweather_log_level.lower(),
    )


if __name__ == "__main__":
    run()
