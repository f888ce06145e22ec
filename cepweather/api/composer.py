"""Map pipeline outcomes to HTTP status codes and JSON bodies."""
from __future__ import annotations

from typing import Dict, Tuple, Type

from rest_framework import status
from rest_framework.response import Response

from cepweather.core.abstractions import WeatherResult
from cepweather.core.exceptions import (
    CepWeatherError,
    InvalidZipcodeError,
    LocationLookupError,
    WeatherUnavailable,
)

CONTENT_TYPE = "application/json"

# Checked in order; subclasses of LocationLookupError all collapse to 404.
ERROR_RESPONSES: Tuple[Tuple[Type[CepWeatherError], int, str], ...] = (
    (InvalidZipcodeError, status.HTTP_422_UNPROCESSABLE_ENTITY, "invalid zipcode"),
    (LocationLookupError, status.HTTP_404_NOT_FOUND, "can not find zipcode"),
    (WeatherUnavailable, status.HTTP_502_BAD_GATEWAY, "weather lookup failed"),
)


def problem_for(error: CepWeatherError) -> Tuple[int, Dict[str, str]]:
    """Return ``(status, body)`` for a pipeline failure."""
    for error_class, status_code, message in ERROR_RESPONSES:
        if isinstance(error, error_class):
            return status_code, {"message": message}
    return status.HTTP_500_INTERNAL_SERVER_ERROR, {"message": "internal error"}


def compose_error(error: CepWeatherError) -> Response:
    status_code, body = problem_for(error)
    return Response(body, status=status_code, content_type=CONTENT_TYPE)


def compose_success(result: WeatherResult) -> Response:
    return Response(result.as_payload(), status=status.HTTP_200_OK, content_type=CONTENT_TYPE)


__all__ = ["ERROR_RESPONSES", "compose_error", "compose_success", "problem_for"]
