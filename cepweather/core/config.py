"""Runtime configuration for the pipeline, resolved once at startup."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_VIACEP_BASE_URL = "https://viacep.com.br/ws"
DEFAULT_OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_TIMEOUT_SECONDS = 3.0


@dataclass(frozen=True)
class ServiceConfig:
    openweather_api_key: str
    viacep_base_url: str = DEFAULT_VIACEP_BASE_URL
    openweather_base_url: str = DEFAULT_OPENWEATHER_BASE_URL
    country_code: str = "br"
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    zipkin_endpoint: str = ""
    service_name: str = "cepweather"

    @classmethod
    def from_settings(cls, settings: Any) -> "ServiceConfig":
        """Build the config from a Django settings object."""
        return cls(
            openweather_api_key=settings.OPENWEATHER_API_KEY,
            viacep_base_url=settings.VIACEP_BASE_URL.rstrip("/"),
            openweather_base_url=settings.OPENWEATHER_BASE_URL,
            country_code=settings.OPENWEATHER_COUNTRY_CODE,
            timeout=float(settings.UPSTREAM_TIMEOUT_SECONDS),
            zipkin_endpoint=settings.ZIPKIN_ENDPOINT,
            service_name=settings.OTEL_SERVICE_NAME,
        )


__all__ = ["ServiceConfig"]
