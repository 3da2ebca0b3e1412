"""Celery tasks for notification publishing."""

import logging
from celery import shared_task

logger = logging.getLogger("yardline.tasks")


class PublishFailed(Exception):
    pass


@shared_task(bind=True, max_retries=3, default_retry_delay=2)
def publish_event(self, channel: str, event: str, payload: dict):
    """Deliver one event to the channel layer, retrying while the layer is unreachable."""
    from apps.notifications.service import NotificationService

    result = NotificationService(use_tasks=False).deliver(channel, event, payload)
    if result.ok:
        return True
    if self.request.retries >= self.max_retries:
        logger.error("Giving up on %s for %s after %d retries", event, channel, self.request.retries)
        return False
    raise self.retry(exc=PublishFailed(result.error))
