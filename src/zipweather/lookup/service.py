from __future__ import annotations

import logging

from ..adapters.geocoding import Geocoder, LocationNotFoundError
from ..adapters.weather import WeatherProvider
from ..domain.models import ErrorResult, LookupErrorKind, TemperatureResult

LOGGER = logging.getLogger(__name__)

POSTAL_CODE_LENGTH = 8


class TemperatureLookupService:
    """Resolve a postal code to its current temperature in C, F and K.

    The geocoder and weather provider are called in sequence; the first
    failure decides the error kind. No state is kept between lookups.
    """

    def __init__(self, geocoder: Geocoder, weather_provider: WeatherProvider) -> None:
        self._geocoder = geocoder
        self._weather_provider = weather_provider

    def lookup(self, postal_code: str) -> TemperatureResult | ErrorResult:
        if len(postal_code) != POSTAL_CODE_LENGTH:
            return ErrorResult.from_kind(LookupErrorKind.INVALID_INPUT)

        try:
            coordinates = self._geocoder.get_location(postal_code)
        except LocationNotFoundError:
            LOGGER.info("Postal code %s did not resolve to a location", postal_code)
            return ErrorResult.from_kind(LookupErrorKind.NOT_FOUND)
        except Exception:
            LOGGER.exception("Geocoding failed for postal code %s", postal_code)
            return ErrorResult.from_kind(LookupErrorKind.UPSTREAM_FAILURE)

        try:
            reading = self._weather_provider.get_weather(coordinates.lat, coordinates.lon)
        except Exception:
            LOGGER.exception(
                "Weather fetch failed for %s,%s (postal code %s)",
                coordinates.lat,
                coordinates.lon,
                postal_code,
            )
            return ErrorResult.from_kind(LookupErrorKind.UPSTREAM_FAILURE)

        try:
            return TemperatureResult.from_reading(reading)
        except (OverflowError, ValueError):
            LOGGER.exception("Weather reading for postal code %s is out of range", postal_code)
            return ErrorResult.from_kind(LookupErrorKind.UPSTREAM_FAILURE)
