"""ASGI entry point for the HotelHub API.

Used when the API runs under an ASGI server (uvicorn, daphne). Settings
default to development; deployments export DJANGO_SETTINGS_MODULE.
"""

import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.dev')

application = get_asgi_application()
