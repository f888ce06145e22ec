"""Pydantic schemas for the payloads returned by the upstream providers."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["OpenWeatherMain", "OpenWeatherPayload", "ViaCepErrorFlag", "ViaCepPayload"]


class ViaCepErrorFlag(BaseModel):
    """ViaCEP marks unknown postal codes with ``{"erro": true}`` (sometimes ``"true"``)."""

    model_config = ConfigDict(extra="ignore")

    erro: bool = False


class ViaCepPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    localidade: str = Field(..., min_length=1)


class OpenWeatherMain(BaseModel):
    model_config = ConfigDict(extra="ignore")

    temp: float
    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    pressure: Optional[float] = None
    humidity: Optional[float] = None


class OpenWeatherPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    main: OpenWeatherMain
