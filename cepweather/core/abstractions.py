"""Core abstractions for the CEP weather domain."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Protocol

from opentelemetry.context import Context


@dataclass(frozen=True, slots=True)
class Location:
    """City resolved from a postal code."""

    city: str


@dataclass(frozen=True, slots=True)
class WeatherSample:
    """Current weather reading as returned by the provider, temperatures in Kelvin."""

    temp_kelvin: float
    temp_min_kelvin: Optional[float] = None
    temp_max_kelvin: Optional[float] = None
    pressure: Optional[float] = None
    humidity: Optional[float] = None


@dataclass(frozen=True, slots=True)
class WeatherResult:
    """Success body of ``GET /weather/{cep}``."""

    city: str
    temp_c: float
    temp_f: float
    temp_k: float

    def as_payload(self) -> Dict[str, object]:
        return {
            "city": self.city,
            "temp_C": self.temp_c,
            "temp_F": self.temp_f,
            "temp_K": self.temp_k,
        }


class LocationLookup(Protocol):
    """A data source capable of resolving a postal code to a city."""

    name: str

    def resolve(self, cep: str, trace_context: Optional[Context] = None) -> Location:
        """Return the location for ``cep`` or raise a ``LocationLookupError``."""
        ...


class WeatherLookup(Protocol):
    """A data source capable of returning the current weather for a city."""

    name: str

    def fetch_weather(self, city: str, trace_context: Optional[Context] = None) -> WeatherSample:
        """Return the current reading for ``city`` or raise ``WeatherUnavailable``."""
        ...


__all__ = ["Location", "LocationLookup", "WeatherLookup", "WeatherResult", "WeatherSample"]
