"""Kelvin conversions used by the weather response.

All outputs are rounded to one decimal place, half away from zero, on the
exact binary value of ``value * 10``. ``round()`` is half-to-even and would
turn ``0.25`` into ``0.2``.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Tuple

KELVIN_OFFSET = 273.15

_ONE = Decimal("1")


def round_one_decimal(value: float) -> float:
    scaled = Decimal(value * 10).quantize(_ONE, rounding=ROUND_HALF_UP)
    return float(scaled) / 10


def kelvin_to_celsius(kelvin: float) -> float:
    return round_one_decimal(kelvin - KELVIN_OFFSET)


def kelvin_to_fahrenheit(kelvin: float) -> float:
    return round_one_decimal((kelvin - KELVIN_OFFSET) * 1.8 + 32)


def kelvin_to_kelvin(kelvin: float) -> float:
    return round_one_decimal(kelvin)


def convert(kelvin: float) -> Tuple[float, float, float]:
    """Return ``(celsius, fahrenheit, kelvin)`` for a Kelvin reading."""
    return kelvin_to_celsius(kelvin), kelvin_to_fahrenheit(kelvin), kelvin_to_kelvin(kelvin)


__all__ = [
    "KELVIN_OFFSET",
    "convert",
    "kelvin_to_celsius",
    "kelvin_to_fahrenheit",
    "kelvin_to_kelvin",
    "round_one_decimal",
]
