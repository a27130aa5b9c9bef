from __future__ import annotations

from .base import DecodeError, FetchError, FetchTimeout, HttpStatusError, NetworkError, WeatherProvider
from .openmeteo import OpenMeteoClient

__all__ = [
    "DecodeError",
    "FetchError",
    "FetchTimeout",
    "HttpStatusError",
    "NetworkError",
    "OpenMeteoClient",
    "WeatherProvider",
]
