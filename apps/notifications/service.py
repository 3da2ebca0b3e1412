"""
Notification fan-out.
Queue-change broadcasts go to the shared `queue` channel; dock notices go to
the driver's private `driver:<entry id>` channel. Both ride the Channels layer
(Redis in production), optionally handed to a Celery worker first.

Publishing is best-effort: every call returns a PublishResult and logs failures,
but never raises into the state change that triggered it.
"""

import logging
from dataclasses import dataclass

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings

logger = logging.getLogger("yardline.notifications")

QUEUE_CHANNEL = "queue"
QUEUE_CHANGED = "queue.changed"
DOCK_ASSIGNED = "dock.assigned"

# consumer handler for relayed events (see apps.realtime.consumers)
RELAY_MESSAGE_TYPE = "relay.event"


def driver_channel(entry_id) -> str:
    return f"driver:{entry_id}"


def group_name(channel: str) -> str:
    """Channels group names may not contain ':' — `driver:42` → `driver.42`."""
    return channel.replace(":", ".")


@dataclass(frozen=True)
class PublishResult:
    ok:      bool
    channel: str
    event:   str
    queued:  bool = False
    error:   str  = ""


class NotificationService:
    """Publish queue events to subscribers. Fails silently — never blocks the main flow."""

    def __init__(self, channel_layer=None, use_tasks=None):
        self._layer    = channel_layer
        self.use_tasks = settings.NOTIFICATIONS_ASYNC if use_tasks is None else use_tasks

    @property
    def layer(self):
        if self._layer is None:
            self._layer = get_channel_layer()
        return self._layer

    def broadcast_queue_changed(self) -> PublishResult:
        """No payload: observers re-fetch the queue."""
        return self.publish(QUEUE_CHANNEL, QUEUE_CHANGED, {})

    def notify_driver(self, entry_id, payload: dict) -> PublishResult:
        return self.publish(driver_channel(entry_id), DOCK_ASSIGNED, payload)

    def publish(self, channel: str, event: str, payload: dict = None) -> PublishResult:
        payload = payload or {}
        if not self.use_tasks:
            return self.deliver(channel, event, payload)

        from apps.notifications.tasks import publish_event
        try:
            publish_event.delay(channel, event, payload)
        except Exception as exc:
            # broker down: the state change already happened, only the push is lost
            logger.warning("Could not enqueue %s on %s: %s", event, channel, exc)
            return PublishResult(ok=False, channel=channel, event=event, error=str(exc))
        return PublishResult(ok=True, channel=channel, event=event, queued=True)

    def deliver(self, channel: str, event: str, payload: dict) -> PublishResult:
        """Push straight onto the channel layer."""
        message = {
            "type":    RELAY_MESSAGE_TYPE,
            "channel": channel,
            "event":   event,
            "payload": payload,
        }
        try:
            async_to_sync(self.layer.group_send)(group_name(channel), message)
        except Exception as exc:
            logger.warning("Publish %s on %s failed: %s", event, channel, exc)
            return PublishResult(ok=False, channel=channel, event=event, error=str(exc))
        logger.debug("Published %s on %s", event, channel)
        return PublishResult(ok=True, channel=channel, event=event)
