from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Generic, Optional, TypeVar

if TYPE_CHECKING:  # pragma: no cover
    from .providers.base import FetchError


T = TypeVar("T")


@dataclass(frozen=True)
class WeatherReading:
    """Canonical current-conditions observation.

    Units match what the risk thresholds expect:
    - temperature in Celsius
    - relative humidity in percent
    - surface pressure in hectopascal (hPa)
    - UV index as a whole number
    """

    temperature_c: float
    uv_index: int
    humidity_percent: int
    pressure_hpa: int
    location: str
    observed_at: datetime

    def __post_init__(self) -> None:
        for name in ("temperature_c", "uv_index", "humidity_percent", "pressure_hpa"):
            if getattr(self, name) is None:
                raise ValueError(f"{name} is required for a weather reading")


@dataclass(frozen=True)
class ComponentScores:
    temperature: int
    uv: int
    humidity: int
    pressure: int

    @property
    def total(self) -> int:
        """Raw sum before clamping; may exceed the maximum level."""
        return self.temperature + self.uv + self.humidity + self.pressure

    def as_dict(self) -> dict:
        return {
            "temperature": self.temperature,
            "uv": self.uv,
            "humidity": self.humidity,
            "pressure": self.pressure,
            "total": self.total,
        }


@dataclass(frozen=True)
class RiskAssessment:
    level: int
    advisory: str
    component_scores: ComponentScores


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of a fetch: exactly one of ``value`` or ``error`` is set."""

    value: Optional[T] = None
    error: Optional["FetchError"] = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("FetchResult needs exactly one of value or error")

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: "FetchError") -> "FetchResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


__all__ = ["WeatherReading", "ComponentScores", "RiskAssessment", "FetchResult"]
