from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from .base import DecodeError, WeatherProvider
from ..entities import WeatherReading


CURRENT_FIELDS = ("temperature_2m", "relative_humidity_2m", "surface_pressure", "uv_index")


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class OpenMeteoClient(WeatherProvider):
    base_url = "https://api.open-meteo.com/v1/forecast"
    default_location = "Berlin"

    def __init__(
        self,
        base_url: Optional[str] = None,
        default_location: Optional[str] = None,
        clock: Callable[[], datetime] = _utcnow,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url or self.base_url
        self.default_location = default_location or self.default_location
        self._clock = clock
        self._log = logging.getLogger(self.__class__.__name__)

    def current(self, latitude: float, longitude: float, location: Optional[str] = None) -> WeatherReading:
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": ",".join(CURRENT_FIELDS),
            "timezone": "auto",
        }
        response = self._request("GET", self.base_url, params=params)
        data = self._json(response)
        current = data.get("current") if isinstance(data, dict) else None
        if not isinstance(current, dict):
            raise DecodeError("missing current conditions")
        uv_index = _within("uv_index", _optional_float(current, "uv_index") or 0.0, low=0.0)
        humidity = _within("relative_humidity_2m", _required_float(current, "relative_humidity_2m"), low=0.0, high=100.0)
        reading = WeatherReading(
            temperature_c=_required_float(current, "temperature_2m"),
            uv_index=_round_half_up(uv_index),
            humidity_percent=_round_half_up(humidity),
            pressure_hpa=_round_half_up(_required_float(current, "surface_pressure")),
            location=location or self.default_location,
            observed_at=self._clock(),
        )
        self._log.debug("Decoded reading for %.3f,%.3f: %s", latitude, longitude, reading)
        return reading

    # helpers ------------------------------------------------------------
    def _json(self, response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise DecodeError("invalid json") from exc


def _optional_float(payload: dict, key: str) -> Optional[float]:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise DecodeError(f"{key} is not a number")
    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"{key} is not a number") from exc
    if not math.isfinite(result):
        raise DecodeError(f"{key} is not a finite number")
    return result


def _required_float(payload: dict, key: str) -> float:
    value = _optional_float(payload, key)
    if value is None:
        raise DecodeError(f"missing {key}")
    return value


def _within(key: str, value: float, low: Optional[float] = None, high: Optional[float] = None) -> float:
    if (low is not None and value < low) or (high is not None and value > high):
        raise DecodeError(f"{key}={value} out of range")
    return value


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


__all__ = ["OpenMeteoClient", "CURRENT_FIELDS"]
