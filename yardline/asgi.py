"""ASGI entrypoint: HTTP via Django, WebSocket subscriptions via Channels."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "yardline.settings")

django_asgi_app = get_asgi_application()

from channels.routing import ProtocolTypeRouter, URLRouter  # noqa: E402

from apps.realtime.routing import websocket_urlpatterns  # noqa: E402

application = ProtocolTypeRouter({
    "http":      django_asgi_app,
    "websocket": URLRouter(websocket_urlpatterns),
})
