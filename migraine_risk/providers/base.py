from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests
from requests import Response


logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Base error for a weather fetch that produced no reading."""

    kind = "fetch_error"


class NetworkError(FetchError):
    """Transport level failure (DNS, refused connection, ...)."""

    kind = "network_error"


class FetchTimeout(NetworkError):
    """The provider did not answer within the configured timeout."""

    kind = "timeout"


class HttpStatusError(FetchError):
    """Raised when the provider answers with a non-2xx status."""

    kind = "http_status"

    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code


class DecodeError(FetchError):
    """The response body does not match the expected schema."""

    kind = "decode_error"


@dataclass
class RequestConfig:
    timeout: float = 10.0


class WeatherProvider:
    """Base class that owns the HTTP session and maps transport failures."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def _handle_response(self, response: Response) -> Response:
        if not 200 <= response.status_code < 300:
            self._log.error("Provider returned %s: %s", response.status_code, response.text[:200])
            raise HttpStatusError(response.status_code)
        return response

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise FetchTimeout(f"timed out after {self.request_config.timeout}s") from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise NetworkError(f"network error: {exc}") from exc
        return self._handle_response(response)


__all__ = [
    "WeatherProvider",
    "RequestConfig",
    "FetchError",
    "NetworkError",
    "FetchTimeout",
    "HttpStatusError",
    "DecodeError",
]
