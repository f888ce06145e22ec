"""WSGI entrypoint for the CEP weather service."""
from __future__ import annotations

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "cepweather.settings")

application = get_wsgi_application()
