"""Migraine risk scoring from current weather conditions.

Each weather factor contributes a small integer score. The scores are summed
and clamped to the 0..5 scale shown on the dashboard, so several extreme
factors saturate at the top level instead of growing past it. The raw sum is
kept in :class:`ComponentScores` for debugging.

Everything in here is pure: no I/O, no shared state, safe to call from any
thread or task.
"""
from __future__ import annotations

from typing import Tuple

from .entities import ComponentScores, RiskAssessment, WeatherReading


MIN_LEVEL = 0
MAX_LEVEL = 5

ADVISORIES: Tuple[str, ...] = (
    "Very low risk today. Enjoy your day!",
    "Low risk today. Stay hydrated and keep to your usual routine.",
    "Moderate risk today. Take regular breaks and drink enough water.",
    "Today's migraine risk is slightly elevated. Try to keep your environment quiet and stay well-rested.",
    "High risk today. Avoid bright light and strenuous activity, and keep your medication at hand.",
    "Very high risk today. Stay in a dark, quiet room and rest as much as you can.",
)


def temperature_score(temperature_c: float) -> int:
    if temperature_c < 5 or temperature_c > 25:
        return 2
    if temperature_c < 10 or temperature_c > 20:
        return 1
    return 0


def uv_score(uv_index: int) -> int:
    if uv_index >= 8:
        return 2
    if uv_index >= 6:
        return 1
    return 0


def humidity_score(humidity_percent: int) -> int:
    if humidity_percent < 30 or humidity_percent > 80:
        return 1
    return 0


def pressure_score(pressure_hpa: int) -> int:
    if pressure_hpa < 1005 or pressure_hpa > 1025:
        return 2
    if pressure_hpa < 1010 or pressure_hpa > 1020:
        return 1
    return 0


def component_scores(reading: WeatherReading) -> ComponentScores:
    return ComponentScores(
        temperature=temperature_score(reading.temperature_c),
        uv=uv_score(reading.uv_index),
        humidity=humidity_score(reading.humidity_percent),
        pressure=pressure_score(reading.pressure_hpa),
    )


def clamp_level(total: int) -> int:
    return min(MAX_LEVEL, max(MIN_LEVEL, total))


def advisory_for(level: int) -> str:
    """Return the advisory text for a level in ``MIN_LEVEL..MAX_LEVEL``."""
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise ValueError(f"risk level {level} outside {MIN_LEVEL}..{MAX_LEVEL}")
    return ADVISORIES[level]


def assess_risk(reading: WeatherReading) -> RiskAssessment:
    scores = component_scores(reading)
    level = clamp_level(scores.total)
    return RiskAssessment(level=level, advisory=advisory_for(level), component_scores=scores)


__all__ = [
    "ADVISORIES",
    "MAX_LEVEL",
    "MIN_LEVEL",
    "advisory_for",
    "assess_risk",
    "clamp_level",
    "component_scores",
    "humidity_score",
    "pressure_score",
    "temperature_score",
    "uv_score",
]
