"""ViaCEP postal code lookup."""
from __future__ import annotations

from typing import Optional

from opentelemetry.context import Context
from pydantic import ValidationError

from cepweather.core.abstractions import Location, LocationLookup
from cepweather.core.config import DEFAULT_VIACEP_BASE_URL
from cepweather.core.exceptions import NotFoundError, UpstreamParseError, UpstreamUnavailable
from cepweather.core.providers.base import HttpProvider
from cepweather.core.schemas import ViaCepErrorFlag, ViaCepPayload
from cepweather.core.tracing import traced


class ViaCepLocationLookup(HttpProvider, LocationLookup):
    """Resolve a CEP to its city through ``GET {base}/{cep}/json/``."""

    name = "viacep"
    span_name = "resolve_location"
    unavailable_error = UpstreamUnavailable

    def __init__(self, *, base_url: str = DEFAULT_VIACEP_BASE_URL, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url.rstrip("/")

    def resolve(self, cep: str, trace_context: Optional[Context] = None) -> Location:
        with traced(self.tracer, self.span_name, trace_context) as (span, span_context):
            span.set_attribute("cep", cep)
            response = self._request("GET", f"{self.base_url}/{cep}/json/", span_context)
            body = response.content

            try:
                flag = ViaCepErrorFlag.model_validate_json(body)
            except ValidationError:
                flag = None
            if flag is not None and flag.erro:
                raise NotFoundError(f"zipcode {cep} not found")

            try:
                payload = ViaCepPayload.model_validate_json(body)
            except ValidationError as exc:
                raise UpstreamParseError("invalid location payload") from exc

            span.set_attribute("city", payload.localidade)
            return Location(city=payload.localidade)


__all__ = ["ViaCepLocationLookup"]
