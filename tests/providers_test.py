from __future__ import annotations

from datetime import datetime, timezone
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from migraine_risk.providers.base import DecodeError, FetchTimeout, HttpStatusError, NetworkError
from migraine_risk.providers.openmeteo import OpenMeteoClient


BASE_URL = "https://openmeteo.test/v1/forecast"
FETCHED_AT = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


def make_client(**kwargs) -> OpenMeteoClient:
    return OpenMeteoClient(base_url=BASE_URL, default_location="Berlin", clock=lambda: FETCHED_AT, **kwargs)


def current_payload(**overrides):
    current = {
        "time": "2024-05-01T11:30",
        "temperature_2m": 18.4,
        "relative_humidity_2m": 62,
        "surface_pressure": 1013.6,
        "uv_index": 4.5,
    }
    current.update(overrides)
    return {"latitude": 52.52, "longitude": 13.41, "current": current}


def test_current_normalization(requests_mock):
    requests_mock.get(BASE_URL, json=current_payload())

    reading = make_client().current(52.52, 13.41, "Home")

    assert reading.temperature_c == 18.4
    assert reading.humidity_percent == 62
    assert reading.pressure_hpa == 1014
    assert reading.uv_index == 5
    assert reading.location == "Home"
    assert reading.observed_at == FETCHED_AT


def test_current_requests_expected_fields(requests_mock):
    requests_mock.get(BASE_URL, json=current_payload())

    make_client().current(47.37, 8.54)

    assert requests_mock.call_count == 1
    query = parse_qs(urlparse(requests_mock.last_request.url).query)
    assert query["latitude"] == ["47.37"]
    assert query["longitude"] == ["8.54"]
    assert query["current"] == ["temperature_2m,relative_humidity_2m,surface_pressure,uv_index"]
    assert query["timezone"] == ["auto"]


def test_label_defaults_to_configured_city(requests_mock):
    requests_mock.get(BASE_URL, json=current_payload())

    reading = make_client().current(52.52, 13.41)

    assert reading.location == "Berlin"


WITHOUT_UV = {"current": {"temperature_2m": 18.4, "relative_humidity_2m": 62, "surface_pressure": 1013.6}}


@pytest.mark.parametrize("payload", [current_payload(uv_index=None), WITHOUT_UV])
def test_missing_uv_index_defaults_to_zero(requests_mock, payload):
    requests_mock.get(BASE_URL, json=payload)

    reading = make_client().current(52.52, 13.41)

    assert reading.uv_index == 0


@pytest.mark.parametrize("field", ["temperature_2m", "relative_humidity_2m", "surface_pressure"])
def test_missing_mandatory_field_is_decode_error(requests_mock, field):
    payload = current_payload()
    del payload["current"][field]
    requests_mock.get(BASE_URL, json=payload)

    with pytest.raises(DecodeError, match=field):
        make_client().current(52.52, 13.41)


def test_non_numeric_field_is_decode_error(requests_mock):
    requests_mock.get(BASE_URL, json=current_payload(surface_pressure="high"))

    with pytest.raises(DecodeError):
        make_client().current(52.52, 13.41)


def test_missing_current_block_is_decode_error(requests_mock):
    requests_mock.get(BASE_URL, json={"latitude": 52.52, "longitude": 13.41})

    with pytest.raises(DecodeError, match="current"):
        make_client().current(52.52, 13.41)


def test_invalid_json_is_decode_error(requests_mock):
    requests_mock.get(BASE_URL, text="<html>maintenance</html>")

    with pytest.raises(DecodeError):
        make_client().current(52.52, 13.41)


@pytest.mark.parametrize("status_code", [400, 404, 429, 503])
def test_non_success_status_carries_code(requests_mock, status_code):
    requests_mock.get(BASE_URL, status_code=status_code, json={"error": True, "reason": "nope"})

    with pytest.raises(HttpStatusError) as excinfo:
        make_client().current(52.52, 13.41)

    assert excinfo.value.status_code == status_code
    assert str(status_code) in str(excinfo.value)


def test_connection_failure_is_network_error(requests_mock):
    requests_mock.get(BASE_URL, exc=requests.ConnectionError("name resolution failed"))

    with pytest.raises(NetworkError) as excinfo:
        make_client().current(52.52, 13.41)

    assert not isinstance(excinfo.value, FetchTimeout)


def test_timeout_is_reported(requests_mock):
    requests_mock.get(BASE_URL, exc=requests.ConnectTimeout)

    with pytest.raises(FetchTimeout):
        make_client().current(52.52, 13.41)


@pytest.mark.parametrize("field", ["temperature_2m", "relative_humidity_2m", "surface_pressure", "uv_index"])
@pytest.mark.parametrize("value", [float("inf"), float("-inf")])
def test_non_finite_field_is_decode_error(requests_mock, field, value):
    requests_mock.get(BASE_URL, json=current_payload(**{field: value}))

    with pytest.raises(DecodeError, match=field):
        make_client().current(52.52, 13.41)


def test_overflowing_literal_is_decode_error(requests_mock):
    requests_mock.get(
        BASE_URL,
        text='{"current": {"temperature_2m": 18.4, "relative_humidity_2m": 62, "surface_pressure": 1e400}}',
    )

    with pytest.raises(DecodeError, match="surface_pressure"):
        make_client().current(52.52, 13.41)


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"relative_humidity_2m": 140}, "relative_humidity_2m"),
        ({"relative_humidity_2m": -1}, "relative_humidity_2m"),
        ({"uv_index": -3}, "uv_index"),
    ],
)
def test_out_of_range_value_is_decode_error(requests_mock, overrides, field):
    requests_mock.get(BASE_URL, json=current_payload(**overrides))

    with pytest.raises(DecodeError, match=field):
        make_client().current(52.52, 13.41)


def test_range_limits_are_inclusive(requests_mock):
    requests_mock.get(BASE_URL, json=current_payload(relative_humidity_2m=100, uv_index=0))

    reading = make_client().current(52.52, 13.41)

    assert reading.humidity_percent == 100
    assert reading.uv_index == 0
