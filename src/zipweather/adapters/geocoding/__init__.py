from .base import Geocoder, GeocoderError, LocationNotFoundError
from .nominatim import NominatimGeocoder

__all__ = ["Geocoder", "GeocoderError", "LocationNotFoundError", "NominatimGeocoder"]
