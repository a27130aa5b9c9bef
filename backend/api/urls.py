"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from backend.api.views import RiskView, WeatherView

urlpatterns = [
    path("weather", WeatherView.as_view(), name="weather"),
    path("risk", RiskView.as_view(), name="risk"),
]
