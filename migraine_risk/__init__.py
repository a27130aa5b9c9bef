"""Weather-derived migraine risk scoring."""
from __future__ import annotations

from .entities import ComponentScores, FetchResult, RiskAssessment, WeatherReading
from .providers.base import DecodeError, FetchError, FetchTimeout, HttpStatusError, NetworkError
from .risk import assess_risk
from .services.risk import RiskService, fetch_weather, get_risk_for_location

__all__ = [
    "ComponentScores",
    "DecodeError",
    "FetchError",
    "FetchResult",
    "FetchTimeout",
    "HttpStatusError",
    "NetworkError",
    "RiskAssessment",
    "RiskService",
    "WeatherReading",
    "assess_risk",
    "fetch_weather",
    "get_risk_for_location",
]
