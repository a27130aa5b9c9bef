from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from ..entities import FetchResult, RiskAssessment, WeatherReading
from ..providers.base import FetchError, FetchTimeout
from ..providers.openmeteo import OpenMeteoClient
from ..risk import assess_risk


class RiskService:
    """Fetch current weather and score it for the dashboard.

    Fetch failures are returned as failed :class:`FetchResult` values and the
    risk engine only ever sees a complete reading.
    """

    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        client: Optional[Any] = None,
        *,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.client = client or OpenMeteoClient()
        self.timeout = timeout if timeout is not None else self.DEFAULT_TIMEOUT
        self._log = logger or logging.getLogger(self.__class__.__name__)

    # Public API ---------------------------------------------------------
    def fetch(self, latitude: float, longitude: float, label: Optional[str] = None) -> FetchResult[WeatherReading]:
        try:
            reading = self.client.current(latitude, longitude, label)
        except FetchError as exc:
            self._log.warning("Weather fetch for %.3f,%.3f failed: %s", latitude, longitude, exc)
            return FetchResult.failure(exc)
        return FetchResult.success(reading)

    async def fetch_weather(
        self, latitude: float, longitude: float, label: Optional[str] = None
    ) -> FetchResult[WeatherReading]:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.fetch, latitude, longitude, label),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            self._log.warning("Weather fetch for %.3f,%.3f exceeded %ss", latitude, longitude, self.timeout)
            return FetchResult.failure(FetchTimeout(f"timed out after {self.timeout}s"))

    def assess(self, reading: WeatherReading) -> RiskAssessment:
        return assess_risk(reading)

    async def get_risk_for_location(
        self, latitude: float, longitude: float, label: Optional[str] = None
    ) -> FetchResult[RiskAssessment]:
        result = await self.fetch_weather(latitude, longitude, label)
        if not result.ok:
            return FetchResult.failure(result.error)  # type: ignore[arg-type]
        return FetchResult.success(self.assess(result.unwrap()))


_default_service: Optional[RiskService] = None


def _service() -> RiskService:
    global _default_service
    if _default_service is None:
        _default_service = RiskService()
    return _default_service


async def fetch_weather(latitude: float, longitude: float, label: Optional[str] = None) -> FetchResult[WeatherReading]:
    return await _service().fetch_weather(latitude, longitude, label)


async def get_risk_for_location(
    latitude: float, longitude: float, label: Optional[str] = None
) -> FetchResult[RiskAssessment]:
    return await _service().get_risk_for_location(latitude, longitude, label)


__all__ = ["RiskService", "fetch_weather", "get_risk_for_location"]
