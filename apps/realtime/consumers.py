"""
WebSocket subscribers for queue fan-out.

Clients connect with `?token=<subscription token>`:
  ws/queue/                 → `queue` channel, receives queue.changed
  ws/driver/<entry id>/     → `driver:<entry id>`, receives dock.assigned

Close codes: 4001 bad or missing token, 4003 token does not cover the channel,
4004 unknown queue entry.
"""

import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer
from rest_framework_simplejwt.exceptions import TokenError

from apps.notifications.service import QUEUE_CHANNEL, driver_channel, group_name
from .tokens import SubscriptionToken

logger = logging.getLogger("yardline.realtime")

CLOSE_UNAUTHORIZED = 4001
CLOSE_FORBIDDEN    = 4003
CLOSE_NOT_FOUND    = 4004


class RelayConsumer(AsyncJsonWebsocketConsumer):
    """Joins one channel's group and forwards every relayed event to the socket."""

    channel = None

    async def connect(self):
        self.group = None
        token = self._token()
        if token is None:
            await self.close(code=CLOSE_UNAUTHORIZED)
            return

        self.channel = self.resolve_channel()
        if not token.allows(self.channel):
            logger.info("Token does not cover %s", self.channel)
            await self.close(code=CLOSE_FORBIDDEN)
            return
        if not await self.channel_exists():
            await self.close(code=CLOSE_NOT_FOUND)
            return

        self.group = group_name(self.channel)
        await self.channel_layer.group_add(self.group, self.channel_name)
        await self.accept()
        logger.info("Subscriber joined %s", self.channel)

    async def disconnect(self, code):
        if self.group:
            await self.channel_layer.group_discard(self.group, self.channel_name)
            logger.info("Subscriber left %s (code=%s)", self.channel, code)

    async def relay_event(self, message):
        await self.send_json({
            "channel": message["channel"],
            "event":   message["event"],
            "payload": message["payload"],
        })

    def resolve_channel(self) -> str:
        raise NotImplementedError

    async def channel_exists(self) -> bool:
        return True

    def _token(self):
        query = parse_qs(self.scope.get("query_string", b"").decode())
        raw = (query.get("token") or [""])[0]
        if not raw:
            return None
        try:
            return SubscriptionToken(raw)
        except TokenError as exc:
            logger.info("Rejected subscription token: %s", exc)
            return None


class QueueConsumer(RelayConsumer):

    def resolve_channel(self):
        return QUEUE_CHANNEL


class DriverConsumer(RelayConsumer):

    def resolve_channel(self):
        self.entry_id = self.scope["url_route"]["kwargs"]["entry_id"]
        return driver_channel(self.entry_id)

    async def channel_exists(self):
        return await self._entry_exists(self.entry_id)

    @database_sync_to_async
    def _entry_exists(self, entry_id):
        from apps.queue.models import QueueEntry
        return QueueEntry.objects.filter(pk=entry_id).exists()
