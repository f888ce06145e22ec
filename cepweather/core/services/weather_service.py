"""Pipeline that turns a postal code into a composed weather result."""
from __future__ import annotations

import logging
from typing import Optional

from opentelemetry.context import Context
from opentelemetry.trace import Tracer

from cepweather.core.abstractions import LocationLookup, WeatherLookup, WeatherResult
from cepweather.core.config import ServiceConfig
from cepweather.core.conversion import convert
from cepweather.core.exceptions import (
    InvalidZipcodeError,
    NotFoundError,
    UpstreamParseError,
    UpstreamUnavailable,
    WeatherUnavailable,
)
from cepweather.core.providers.base import RequestConfig
from cepweather.core.providers.openweather import OpenWeatherLookup
from cepweather.core.providers.viacep import ViaCepLocationLookup
from cepweather.core.tracing import build_tracer, traced
from cepweather.core.validation import validate_cep


logger = logging.getLogger(__name__)


class CepWeatherService:
    """Validate, resolve the city, fetch its weather and convert the temperature.

    Stages run strictly in order and the first failure propagates to the
    caller as a :class:`~cepweather.core.exceptions.CepWeatherError`.
    The service keeps no per-request state, so one instance serves every request.
    """

    span_name = "GetWeatherByCep"

    def __init__(self, *, location_lookup: LocationLookup, weather_lookup: WeatherLookup, tracer: Tracer) -> None:
        self._location_lookup = location_lookup
        self._weather_lookup = weather_lookup
        self._tracer = tracer

    def get_weather(self, cep: str, trace_context: Optional[Context] = None) -> WeatherResult:
        with traced(
            self._tracer, self.span_name, trace_context, expected=(InvalidZipcodeError,)
        ) as (span, request_context):
            span.set_attribute("cep", cep)
            if not validate_cep(cep):
                span.set_attribute("cep.valid", False)
                logger.debug("Rejected malformed zipcode %r", cep)
                raise InvalidZipcodeError("invalid zipcode")

            try:
                location = self._location_lookup.resolve(cep, request_context)
            except NotFoundError:
                logger.info("Zipcode %s not found by %s", cep, self._location_lookup.name)
                raise
            except UpstreamParseError as exc:
                logger.warning("Zipcode %s: %s returned an unreadable payload: %s", cep, self._location_lookup.name, exc.__cause__ or exc)
                raise
            except UpstreamUnavailable as exc:
                logger.warning("Zipcode %s: %s is unavailable: %s", cep, self._location_lookup.name, exc)
                raise
            logger.info("City found for %s: %s", cep, location.city)

            try:
                sample = self._weather_lookup.fetch_weather(location.city.lower(), request_context)
            except WeatherUnavailable as exc:
                logger.warning("Weather lookup failed for %s via %s: %s", location.city, self._weather_lookup.name, exc)
                raise
            logger.info("Weather found for city %s", location.city)

            temp_c, temp_f, temp_k = convert(sample.temp_kelvin)
            return WeatherResult(city=location.city, temp_c=temp_c, temp_f=temp_f, temp_k=temp_k)


def build_weather_service(config: ServiceConfig, tracer: Optional[Tracer] = None) -> CepWeatherService:
    """Wire the default providers from ``config``."""
    tracer = tracer or build_tracer(config)
    request_config = RequestConfig(timeout=config.timeout)
    location_lookup = ViaCepLocationLookup(
        base_url=config.viacep_base_url,
        tracer=tracer,
        request_config=request_config,
    )
    weather_lookup = OpenWeatherLookup(
        api_key=config.openweather_api_key,
        base_url=config.openweather_base_url,
        country_code=config.country_code,
        tracer=tracer,
        request_config=request_config,
    )
    return CepWeatherService(location_lookup=location_lookup, weather_lookup=weather_lookup, tracer=tracer)


__all__ = ["CepWeatherService", "build_weather_service"]
