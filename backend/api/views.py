"""REST API views for the migraine risk dashboard."""
from __future__ import annotations

from functools import lru_cache
from typing import Optional, Tuple

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from migraine_risk.entities import RiskAssessment, WeatherReading
from migraine_risk.providers.base import FetchError, FetchTimeout, HttpStatusError, RequestConfig
from migraine_risk.providers.openmeteo import OpenMeteoClient
from migraine_risk.services.risk import RiskService


class IncompleteLocation(ValueError):
    """Only one of latitude and longitude was supplied."""


@lru_cache(maxsize=1)
def get_risk_service() -> RiskService:
    client = OpenMeteoClient(
        base_url=settings.WEATHER_API_URL,
        default_location=settings.MIGRAINE_DEFAULT_LOCATION,
        request_config=RequestConfig(timeout=settings.WEATHER_FETCH_TIMEOUT),
    )
    return RiskService(client, timeout=settings.WEATHER_FETCH_TIMEOUT)


def resolve_location(
    latitude: Optional[str], longitude: Optional[str], label: Optional[str]
) -> Tuple[float, float, Optional[str]]:
    """Turn raw coordinates into floats, falling back to the configured city."""
    if latitude is None and longitude is None:
        return (
            settings.MIGRAINE_DEFAULT_LATITUDE,
            settings.MIGRAINE_DEFAULT_LONGITUDE,
            label or settings.MIGRAINE_DEFAULT_LOCATION,
        )
    if latitude is None or longitude is None:
        raise IncompleteLocation("lat and lon must be provided together")
    return float(latitude), float(longitude), label


def _serialize_reading(reading: WeatherReading) -> dict:
    return {
        "temperature_c": reading.temperature_c,
        "uv_index": reading.uv_index,
        "humidity_percent": reading.humidity_percent,
        "pressure_hpa": reading.pressure_hpa,
        "location": reading.location,
        "observed_at": reading.observed_at.astimezone(settings.DEFAULT_TIMEZONE).isoformat().replace("+00:00", "Z"),
    }


def _serialize_assessment(assessment: RiskAssessment, reading: WeatherReading) -> dict:
    return {
        "level": assessment.level,
        "advisory": assessment.advisory,
        "component_scores": assessment.component_scores.as_dict(),
        "reading": _serialize_reading(reading),
    }


def _serialize_error(error: FetchError) -> dict:
    payload = {"detail": str(error), "error": error.kind}
    if isinstance(error, HttpStatusError):
        payload["upstream_status"] = error.status_code
    return payload


def _error_status(error: FetchError) -> int:
    if isinstance(error, FetchTimeout):
        return status.HTTP_504_GATEWAY_TIMEOUT
    return status.HTTP_502_BAD_GATEWAY


class _LocationView(APIView):
    permission_classes = [AllowAny]

    def _fetch(self, request):
        params = request.query_params
        try:
            latitude, longitude, label = resolve_location(params.get("lat"), params.get("lon"), params.get("label"))
        except IncompleteLocation:
            return None, Response({"detail": "lat and lon query parameters are required together"}, status=status.HTTP_400_BAD_REQUEST)
        except ValueError:
            return None, Response({"detail": "lat and lon must be valid floating point numbers"}, status=status.HTTP_400_BAD_REQUEST)

        result = get_risk_service().fetch(latitude, longitude, label)
        if not result.ok:
            return None, Response(_serialize_error(result.error), status=_error_status(result.error))
        return result.unwrap(), None


class WeatherView(_LocationView):
    """Provide the canonical weather reading for requested coordinates."""

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the current reading, or an error payload when the fetch failed."""
        reading, error_response = self._fetch(request)
        if error_response is not None:
            return error_response
        return Response(_serialize_reading(reading), status=status.HTTP_200_OK)


class RiskView(_LocationView):
    """Score today's migraine risk for requested coordinates."""

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the risk level, advisory and component scores."""
        reading, error_response = self._fetch(request)
        if error_response is not None:
            return error_response
        assessment = get_risk_service().assess(reading)
        return Response(_serialize_assessment(assessment, reading), status=status.HTTP_200_OK)
