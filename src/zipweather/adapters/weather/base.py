from __future__ import annotations

from typing import Protocol

from ...domain.models import WeatherReading


class WeatherProviderError(RuntimeError):
    """Raised when current conditions cannot be fetched or parsed."""


class WeatherProvider(Protocol):
    def get_weather(self, lat: str, lon: str) -> WeatherReading:
        """Return the current Celsius/Fahrenheit reading at ``lat``/``lon``.

        Coordinates are passed as the geocoder's decimal strings.
        """
