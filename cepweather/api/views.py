"""REST API view for weather by postal code."""
from __future__ import annotations

from functools import lru_cache

from django.conf import settings
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from cepweather.api.composer import compose_error, compose_success
from cepweather.core.config import ServiceConfig
from cepweather.core.exceptions import CepWeatherError
from cepweather.core.services.weather_service import CepWeatherService, build_weather_service
from cepweather.core.tracing import extract_context


@lru_cache(maxsize=1)
def get_weather_service() -> CepWeatherService:
    return build_weather_service(ServiceConfig.from_settings(settings))


class WeatherByCepView(APIView):
    """Return the current temperature for the city of a postal code."""

    authentication_classes: list = []
    permission_classes = [AllowAny]

    def get(self, request, cep: str, *args, **kwargs):  # noqa: D401
        """Resolve ``cep`` and answer with temperatures in C, F and K."""
        trace_context = extract_context(request.headers)
        try:
            result = get_weather_service().get_weather(cep, trace_context)
        except CepWeatherError as exc:
            return compose_error(exc)
        return compose_success(result)
