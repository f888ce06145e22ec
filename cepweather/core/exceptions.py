"""Error taxonomy for the CEP weather pipeline."""
from __future__ import annotations


class CepWeatherError(RuntimeError):
    """Base error for every pipeline stage."""


class InvalidZipcodeError(CepWeatherError):
    """Raised when the postal code is not exactly eight ASCII digits."""


class LocationLookupError(CepWeatherError):
    """Base class for failures while resolving a postal code to a city."""


class NotFoundError(LocationLookupError):
    """The lookup provider reports the postal code as unknown."""


class UpstreamParseError(LocationLookupError):
    """The lookup provider answered with a payload we cannot interpret."""


class UpstreamUnavailable(LocationLookupError):
    """The lookup provider could not be reached or answered with an error status."""


class WeatherUnavailable(CepWeatherError):
    """The weather provider could not be reached or its payload was unusable."""


__all__ = [
    "CepWeatherError",
    "InvalidZipcodeError",
    "LocationLookupError",
    "NotFoundError",
    "UpstreamParseError",
    "UpstreamUnavailable",
    "WeatherUnavailable",
]
