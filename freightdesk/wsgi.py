"""WSGI entry point for FreightDesk."""

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "freightdesk.settings")

application = get_wsgi_application()
