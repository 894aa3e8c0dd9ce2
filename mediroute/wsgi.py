"""
WSGI entry point for the MediRoute backend.

Serves the REST API, the admin and the static front end.  The driver
notification websocket is only available through ``mediroute.asgi``;
under WSGI drivers fall back to polling ``/api/notifications/<email>``.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'mediroute.settings')

application = get_wsgi_application()
