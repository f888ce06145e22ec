"""OpenWeather current weather provider."""
from __future__ import annotations

from typing import Optional
from urllib.parse import quote_plus

from opentelemetry.context import Context
from pydantic import ValidationError

from cepweather.core.abstractions import WeatherLookup, WeatherSample
from cepweather.core.config import DEFAULT_OPENWEATHER_BASE_URL
from cepweather.core.exceptions import WeatherUnavailable
from cepweather.core.providers.base import HttpProvider
from cepweather.core.schemas import OpenWeatherPayload
from cepweather.core.tracing import traced


class OpenWeatherLookup(HttpProvider, WeatherLookup):
    """Integration with the OpenWeather current weather endpoint."""

    name = "openweather"
    span_name = "fetch_weather"
    unavailable_error = WeatherUnavailable

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = DEFAULT_OPENWEATHER_BASE_URL,
        country_code: str = "br",
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url
        self.country_code = country_code

    def build_url(self, city: str) -> str:
        query = f"q={quote_plus(city)},{self.country_code}&appid={quote_plus(self.api_key)}"
        return f"{self.base_url}?{query}"

    def fetch_weather(self, city: str, trace_context: Optional[Context] = None) -> WeatherSample:  # noqa: D401
        """Return the current reading for ``city``; temperatures stay in Kelvin."""
        with traced(self.tracer, self.span_name, trace_context) as (span, span_context):
            span.set_attribute("city", city)
            response = self._request("GET", self.build_url(city), span_context)
            try:
                payload = OpenWeatherPayload.model_validate_json(response.content)
            except ValidationError as exc:
                raise WeatherUnavailable("invalid weather payload") from exc

            main = payload.main
            return WeatherSample(
                temp_kelvin=main.temp,
                temp_min_kelvin=main.temp_min,
                temp_max_kelvin=main.temp_max,
                pressure=main.pressure,
                humidity=main.humidity,
            )


__all__ = ["OpenWeatherLookup"]
