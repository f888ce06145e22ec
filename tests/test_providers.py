from __future__ import annotations

import logging

import pytest
import requests
from opentelemetry.trace import StatusCode

from cepweather.core.abstractions import Location
from cepweather.core.exceptions import (
    NotFoundError,
    UpstreamParseError,
    UpstreamUnavailable,
    WeatherUnavailable,
)
from cepweather.core.providers.base import RequestConfig
from cepweather.core.providers.openweather import OpenWeatherLookup
from cepweather.core.providers.viacep import ViaCepLocationLookup
from cepweather.core.tracing import extract_context


VIACEP_BASE = "https://viacep.test/ws"
WEATHER_URL = "https://weather.test/data/2.5/weather"
TRACEPARENT = "00-0af7651916cd43dd8448eb211c80319c-b7ad6b7169203331-01"


@pytest.fixture()
def viacep(tracer) -> ViaCepLocationLookup:
    return ViaCepLocationLookup(base_url=VIACEP_BASE, tracer=tracer, request_config=RequestConfig(timeout=2.0))


@pytest.fixture()
def openweather(tracer) -> OpenWeatherLookup:
    return OpenWeatherLookup(api_key="test-key", base_url=WEATHER_URL, country_code="br", tracer=tracer)


# -- ViaCEP ----------------------------------------------------------------


def test_viacep_resolves_city(viacep, requests_mock, span_exporter):
    requests_mock.get(
        f"{VIACEP_BASE}/01310100/json/",
        json={"cep": "01310-100", "logradouro": "Avenida Paulista", "localidade": "São Paulo", "uf": "SP"},
    )

    location = viacep.resolve("01310100", extract_context({"traceparent": TRACEPARENT}))

    assert location == Location(city="São Paulo")
    [span] = span_exporter.get_finished_spans()
    assert span.name == "resolve_location"
    assert span.status.status_code != StatusCode.ERROR
    assert span.context.trace_id == 0x0AF7651916CD43DD8448EB211C80319C
    assert span.parent.span_id == 0xB7AD6B7169203331


def test_viacep_propagates_traceparent_upstream(viacep, requests_mock, span_exporter):
    requests_mock.get(f"{VIACEP_BASE}/01310100/json/", json={"localidade": "São Paulo"})

    viacep.resolve("01310100", extract_context({"traceparent": TRACEPARENT}))

    [span] = span_exporter.get_finished_spans()
    sent = requests_mock.last_request.headers["traceparent"]
    assert sent == f"00-{span.context.trace_id:032x}-{span.context.span_id:016x}-01"


@pytest.mark.parametrize("flag", [True, "true"])
def test_viacep_error_flag_means_not_found(viacep, requests_mock, span_exporter, flag):
    requests_mock.get(f"{VIACEP_BASE}/99999999/json/", json={"erro": flag})

    with pytest.raises(NotFoundError):
        viacep.resolve("99999999")

    [span] = span_exporter.get_finished_spans()
    assert span.status.status_code == StatusCode.ERROR


def test_viacep_false_error_flag_is_ignored(viacep, requests_mock):
    requests_mock.get(f"{VIACEP_BASE}/50010000/json/", json={"erro": False, "localidade": "Recife"})

    assert viacep.resolve("50010000").city == "Recife"


@pytest.mark.parametrize(
    "body",
    ['{"cep": "01310-100"}', '{"localidade": ""}', '{"localidade": "   "}', "not json", "[]"],
)
def test_viacep_unreadable_payload(viacep, requests_mock, body):
    requests_mock.get(f"{VIACEP_BASE}/01310100/json/", text=body)

    with pytest.raises(UpstreamParseError):
        viacep.resolve("01310100")


def test_viacep_error_status_is_unavailable(viacep, requests_mock):
    requests_mock.get(f"{VIACEP_BASE}/01310100/json/", status_code=400, text="<h1>Bad Request</h1>")

    with pytest.raises(UpstreamUnavailable):
        viacep.resolve("01310100")


@pytest.mark.parametrize("exc", [requests.ConnectTimeout, requests.ReadTimeout, requests.ConnectionError])
def test_viacep_transport_failure_is_unavailable(viacep, requests_mock, span_exporter, exc):
    requests_mock.get(f"{VIACEP_BASE}/01310100/json/", exc=exc)

    with pytest.raises(UpstreamUnavailable):
        viacep.resolve("01310100")

    assert len(span_exporter.get_finished_spans()) == 1


def test_viacep_uses_configured_timeout(viacep, requests_mock):
    requests_mock.get(f"{VIACEP_BASE}/01310100/json/", json={"localidade": "São Paulo"})

    viacep.resolve("01310100")

    assert requests_mock.last_request.timeout == 2.0


# -- OpenWeather -----------------------------------------------------------


def test_openweather_parses_sample(openweather, requests_mock, span_exporter):
    requests_mock.get(
        WEATHER_URL,
        json={
            "weather": [{"main": "Clouds"}],
            "main": {"temp": 300.15, "temp_min": 298.0, "temp_max": 301.5, "pressure": 1012, "humidity": 70},
            "name": "São Paulo",
        },
    )

    sample = openweather.fetch_weather("são paulo")

    assert sample.temp_kelvin == 300.15
    assert sample.temp_min_kelvin == 298.0
    assert sample.temp_max_kelvin == 301.5
    assert sample.pressure == 1012.0
    assert sample.humidity == 70.0
    [span] = span_exporter.get_finished_spans()
    assert span.name == "fetch_weather"


def test_openweather_escapes_city_and_appends_country(openweather, requests_mock):
    requests_mock.get(WEATHER_URL, json={"main": {"temp": 290.0}})

    openweather.fetch_weather("são paulo")

    url = requests_mock.last_request.url
    assert "q=s%C3%A3o+paulo,br" in url
    assert "appid=test-key" in url


def test_openweather_accepts_temperature_only(openweather, requests_mock):
    requests_mock.get(WEATHER_URL, json={"main": {"temp": 280.4}})

    sample = openweather.fetch_weather("curitiba")

    assert sample.temp_kelvin == 280.4
    assert sample.temp_min_kelvin is None
    assert sample.humidity is None


@pytest.mark.parametrize("body", ['{"cod": "404", "message": "city not found"}', '{"main": {}}', "oops"])
def test_openweather_bad_payload(openweather, requests_mock, span_exporter, body):
    requests_mock.get(WEATHER_URL, text=body)

    with pytest.raises(WeatherUnavailable):
        openweather.fetch_weather("nowhere")

    [span] = span_exporter.get_finished_spans()
    assert span.status.status_code == StatusCode.ERROR


def test_openweather_error_status(openweather, requests_mock):
    requests_mock.get(WEATHER_URL, status_code=401, json={"cod": 401, "message": "Invalid API key"})

    with pytest.raises(WeatherUnavailable):
        openweather.fetch_weather("recife")


def test_openweather_timeout(openweather, requests_mock):
    requests_mock.get(WEATHER_URL, exc=requests.ReadTimeout)

    with pytest.raises(WeatherUnavailable):
        openweather.fetch_weather("recife")


def test_openweather_transport_error_keeps_api_key_out_of_logs_and_spans(tracer, requests_mock, span_exporter, caplog):
    caplog.set_level(logging.DEBUG, logger="cepweather")
    openweather = OpenWeatherLookup(api_key="SECRET-KEY-123", base_url=WEATHER_URL, tracer=tracer)
    requests_mock.get(
        WEATHER_URL,
        exc=requests.ConnectionError(
            "HTTPSConnectionPool(host='weather.test', port=443): Max retries exceeded with url: "
            "/data/2.5/weather?q=recife,br&appid=SECRET-KEY-123"
        ),
    )

    with pytest.raises(WeatherUnavailable) as excinfo:
        openweather.fetch_weather("recife")

    assert "SECRET-KEY-123" not in str(excinfo.value)
    assert excinfo.value.__suppress_context__
    assert "SECRET-KEY-123" not in caplog.text
    [span] = span_exporter.get_finished_spans()
    assert span.status.status_code == StatusCode.ERROR
    for event in span.events:
        for value in event.attributes.values():
            assert "SECRET-KEY-123" not in str(value)


def test_provider_logs_under_package_logger(viacep, requests_mock, caplog):
    caplog.set_level(logging.INFO, logger="cepweather")
    requests_mock.get(f"{VIACEP_BASE}/01310100/json/", json={"localidade": "São Paulo"})

    viacep.resolve("01310100")

    [record] = [r for r in caplog.records if r.getMessage() == "Provider response"]
    assert record.name == "cepweather.core.providers.base.ViaCepLocationLookup"
    assert record.url == f"{VIACEP_BASE}/01310100/json/"
    assert record.status == 200
