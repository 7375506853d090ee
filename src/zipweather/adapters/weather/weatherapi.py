from __future__ import annotations

import json
import math
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from ...domain.models import FLOAT32_MAX, WeatherReading
from .base import WeatherProviderError

WEATHER_API_BASE_URL = "https://api.weatherapi.com/v1"
DEFAULT_TIMEOUT_SECONDS = 10


def _coerce_float(value: Any, *, field_name: str) -> float:
    if isinstance(value, bool):
        raise WeatherProviderError(f"Invalid numeric value for {field_name}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise WeatherProviderError(f"Invalid numeric value for {field_name}") from exc
    if not math.isfinite(number) or abs(number) > FLOAT32_MAX:
        raise WeatherProviderError(f"Out of range value for {field_name}")
    return number


class WeatherApiProvider:
    """Current conditions from WeatherAPI.com."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = WEATHER_API_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        if not api_key.strip():
            raise ValueError("WeatherAPI key must not be empty")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    def _fetch_json(self, url: str) -> dict[str, Any]:
        request = Request(url, headers={"Accept": "application/json"})
        try:
            with urlopen(request, timeout=self._timeout_seconds) as response:
                payload = json.loads(response.read().decode("utf-8"))
        except HTTPError as exc:
            # The request URL carries the key, so only the status is reported.
            raise WeatherProviderError(f"WeatherAPI returned HTTP {exc.code}") from None
        except (URLError, TimeoutError, json.JSONDecodeError) as exc:
            raise WeatherProviderError(
                f"Failed to fetch weather data from WeatherAPI: {type(exc).__name__}"
            ) from None

        if not isinstance(payload, dict):
            raise WeatherProviderError("Unexpected WeatherAPI response shape")
        return payload

    def get_weather(self, lat: str, lon: str) -> WeatherReading:
        params = {
            "key": self._api_key,
            "q": f"{lat},{lon}",
            "aqi": "no",
        }
        payload = self._fetch_json(f"{self._base_url}/current.json?{urlencode(params)}")

        current = payload.get("current")
        if not isinstance(current, dict):
            raise WeatherProviderError("WeatherAPI response did not include current conditions")

        return WeatherReading(
            temp_c=_coerce_float(current.get("temp_c"), field_name="current.temp_c"),
            temp_f=_coerce_float(current.get("temp_f"), field_name="current.temp_f"),
        )
