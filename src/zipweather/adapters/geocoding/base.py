from __future__ import annotations

from typing import Protocol

from ...domain.models import Coordinates


class GeocoderError(RuntimeError):
    """Raised when a geocoding request cannot be completed."""


class LocationNotFoundError(GeocoderError):
    """Raised when the geocoder has no match for the postal code."""


class Geocoder(Protocol):
    def get_location(self, postal_code: str) -> Coordinates:
        """Resolve a postal code to coordinates."""
