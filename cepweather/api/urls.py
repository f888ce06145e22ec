"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from cepweather.api.views import WeatherByCepView

urlpatterns = [
    path("weather/<str:cep>", WeatherByCepView.as_view(), name="weather-by-cep"),
]
