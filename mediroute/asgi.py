"""
ASGI entry point for the MediRoute backend.

HTTP requests go to Django; websocket connections under
``ws/notifications/<email>/`` go to the driver notification consumer.
Settings must be configured and apps loaded before the consumer
modules are imported, since they pull in models.
"""
import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "mediroute.settings")

import django  # noqa: E402
django.setup()  # noqa: E402

from django.core.asgi import get_asgi_application  # noqa: E402
from channels.routing import ProtocolTypeRouter, URLRouter  # noqa: E402
from channels.security.websocket import AllowedHostsOriginValidator  # noqa: E402

from handoff.realtime.routing import websocket_urlpatterns  # noqa: E402

application = ProtocolTypeRouter({
    "http": get_asgi_application(),
    # browsers connect from the static pages served by this same host
    "websocket": AllowedHostsOriginValidator(URLRouter(websocket_urlpatterns)),
})
