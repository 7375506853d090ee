from __future__ import annotations

import json
import logging
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from pydantic import BaseModel, ConfigDict, ValidationError

from ...domain.models import Coordinates
from .base import GeocoderError, LocationNotFoundError

LOGGER = logging.getLogger(__name__)

NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
DEFAULT_COUNTRY = "Brazil"
DEFAULT_TIMEOUT_SECONDS = 10
DEFAULT_USER_AGENT = "zipweather/0.1"


class NominatimPlace(BaseModel):
    model_config = ConfigDict(extra="ignore")

    place_id: int | None = None
    lat: str
    lon: str
    display_name: str | None = None
    addresstype: str | None = None
    importance: float | None = None


class NominatimGeocoder:
    """Postal code search against the Nominatim (OpenStreetMap) API."""

    def __init__(
        self,
        *,
        base_url: str = NOMINATIM_BASE_URL,
        country: str = DEFAULT_COUNTRY,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._country = country
        self._timeout_seconds = timeout_seconds
        self._user_agent = user_agent

    def _fetch_json(self, url: str) -> Any:
        request = Request(url, headers={"User-Agent": self._user_agent})
        try:
            with urlopen(request, timeout=self._timeout_seconds) as response:
                return json.loads(response.read().decode("utf-8"))
        except (HTTPError, URLError, TimeoutError, json.JSONDecodeError) as exc:
            raise GeocoderError("Failed to fetch location data from Nominatim") from exc

    def get_location(self, postal_code: str) -> Coordinates:
        params = {
            "postalcode": postal_code,
            "country": self._country,
            "format": "json",
            "limit": 1,
        }
        url = f"{self._base_url}/search?{urlencode(params)}"
        payload = self._fetch_json(url)

        if not isinstance(payload, list):
            raise GeocoderError("Unexpected Nominatim response shape")
        if not payload:
            raise LocationNotFoundError(f"No location found for postal code {postal_code}")

        try:
            place = NominatimPlace.model_validate(payload[0])
        except ValidationError as exc:
            raise GeocoderError("Nominatim result did not include coordinates") from exc

        LOGGER.debug("Resolved postal code %s to %s", postal_code, place.display_name)
        try:
            return Coordinates(lat=place.lat, lon=place.lon, display_name=place.display_name)
        except ValidationError as exc:
            raise GeocoderError("Nominatim returned empty coordinates") from exc
