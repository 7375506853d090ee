from .base import WeatherProvider, WeatherProviderError
from .weatherapi import WeatherApiProvider

__all__ = ["WeatherProvider", "WeatherProviderError", "WeatherApiProvider"]
