"""Management command to fetch weather using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from cepweather.api.composer import problem_for
from cepweather.api import views
from cepweather.core.exceptions import CepWeatherError
from cepweather.core.tracing import extract_context


class Command(BaseCommand):
    help = "Fetch current weather for the city of a postal code (CEP)"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--cep", type=str, required=True, help="Eight digit postal code")
        parser.add_argument("--traceparent", type=str, help="W3C traceparent to continue an existing trace")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        headers = {"traceparent": options["traceparent"]} if options.get("traceparent") else {}
        try:
            result = views.get_weather_service().get_weather(options["cep"], extract_context(headers))
        except CepWeatherError as exc:
            status_code, body = problem_for(exc)
            raise CommandError(f"{body['message']} (HTTP {status_code})") from exc

        self.stdout.write(json.dumps(result.as_payload(), ensure_ascii=False))
