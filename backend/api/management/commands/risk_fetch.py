"""Management command to score migraine risk using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api.views import IncompleteLocation, _serialize_assessment, get_risk_service, resolve_location


class Command(BaseCommand):
    help = "Fetch current weather and print the migraine risk assessment"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--lat", type=str, help="Latitude")
        parser.add_argument("--lon", type=str, help="Longitude")
        parser.add_argument("--label", type=str, help="Location label shown with the reading")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        try:
            latitude, longitude, label = resolve_location(options.get("lat"), options.get("lon"), options.get("label"))
        except IncompleteLocation as exc:
            raise CommandError("--lat and --lon must be given together") from exc
        except ValueError as exc:
            raise CommandError("--lat and --lon must be numbers") from exc

        service = get_risk_service()
        result = service.fetch(latitude, longitude, label)
        if not result.ok:
            raise CommandError(f"Weather fetch failed: {result.error}") from result.error

        reading = result.unwrap()
        payload = _serialize_assessment(service.assess(reading), reading)
        self.stdout.write(json.dumps(payload))
