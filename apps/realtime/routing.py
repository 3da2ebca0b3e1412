"""WebSocket URL routing for queue subscriptions."""
from django.urls import re_path
from .consumers import DriverConsumer, QueueConsumer

websocket_urlpatterns = [
    re_path(r"^ws/queue/$", QueueConsumer.as_asgi()),
    re_path(
        r"^ws/driver/(?P<entry_id>[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})/$",
        DriverConsumer.as_asgi(),
    ),
]
