from __future__ import annotations

from .risk import RiskService, fetch_weather, get_risk_for_location

__all__ = ["RiskService", "fetch_weather", "get_risk_for_location"]
