from __future__ import annotations

import os

import django
import pytest
import requests_mock as requests_mock_lib
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter


os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret")
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "cepweather.settings")
os.environ.setdefault("OPENWEATHER_API_KEY", "test-key")
os.environ.setdefault("VIACEP_BASE_URL", "https://viacep.test/ws")
os.environ.setdefault("OPENWEATHER_BASE_URL", "https://weather.test/data/2.5/weather")
os.environ["ZIPKIN_ENDPOINT"] = ""

django.setup()


VIACEP_URL = "https://viacep.test/ws/{cep}/json/"
WEATHER_URL = "https://weather.test/data/2.5/weather"


@pytest.fixture()
def requests_mock():
    with requests_mock_lib.Mocker() as mocker:
        yield mocker


@pytest.fixture()
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture()
def tracer(span_exporter: InMemorySpanExporter):
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return provider.get_tracer("tests")


@pytest.fixture()
def weather_service(tracer):
    from django.conf import settings

    from cepweather.core.config import ServiceConfig
    from cepweather.core.services.weather_service import build_weather_service

    return build_weather_service(ServiceConfig.from_settings(settings), tracer=tracer)


@pytest.fixture()
def installed_service(monkeypatch, weather_service):
    from cepweather.api import views

    monkeypatch.setattr(views, "get_weather_service", lambda: weather_service)
    return weather_service
