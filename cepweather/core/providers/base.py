from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Type

import requests
from opentelemetry.context import Context
from opentelemetry.trace import Tracer
from requests import Response

from cepweather.core.config import DEFAULT_TIMEOUT_SECONDS
from cepweather.core.exceptions import CepWeatherError
from cepweather.core.tracing import inject_headers


@dataclass(frozen=True)
class RequestConfig:
    timeout: float = DEFAULT_TIMEOUT_SECONDS


def _strip_query(url: str) -> str:
    return url.split("?", 1)[0]


class HttpProvider:
    """Base class for upstream HTTP lookups with bounded timeouts and traced calls.

    Subclasses set ``unavailable_error`` to the exception raised for transport
    failures and error statuses. Raised errors never carry the request URL, whose
    query string may hold credentials.
    """

    name = "http"
    unavailable_error: Type[CepWeatherError] = CepWeatherError

    def __init__(
        self,
        *,
        tracer: Tracer,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.tracer = tracer
        self.request_config = request_config or RequestConfig()
        self._log = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _handle_response(self, response: Response) -> Response:
        if response.status_code >= 400:
            raise self.unavailable_error(f"HTTP {response.status_code}")
        return response

    def _request(self, method: str, url: str, trace_context: Optional[Context] = None, **kwargs) -> Response:
        headers: Dict[str, str] = {"Accept": "application/json"}
        inject_headers(headers, trace_context)
        try:
            with requests.Session() as session:
                response = session.request(
                    method,
                    url,
                    headers=headers,
                    timeout=self.request_config.timeout,
                    **kwargs,
                )
        except requests.Timeout as exc:
            raise self.unavailable_error(f"timeout ({type(exc).__name__}) calling {_strip_query(url)}") from None
        except requests.RequestException as exc:
            raise self.unavailable_error(f"request failed ({type(exc).__name__}) calling {_strip_query(url)}") from None
        self._log.info(
            "Provider response",
            extra={"provider": self.name, "url": _strip_query(response.url), "status": response.status_code},
        )
        return self._handle_response(response)


__all__ = ["HttpProvider", "RequestConfig"]
