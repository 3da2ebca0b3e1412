"""
Subscription tokens for the WebSocket gateway.
A signed JWT (simplejwt) listing the channels its bearer may join. Every token
grants the shared `queue` channel; a token issued for a queue entry also grants
that entry's private driver channel.
"""

from django.conf import settings
from rest_framework_simplejwt.tokens import Token

from apps.notifications.service import QUEUE_CHANNEL, driver_channel

CHANNELS_CLAIM = "channels"
CLIENT_CLAIM   = "client_id"


class SubscriptionToken(Token):
    token_type = "subscription"

    @property
    def lifetime(self):
        return settings.SUBSCRIPTION_TOKEN_LIFETIME

    @classmethod
    def issue(cls, client_id: str, entry_id=None) -> "SubscriptionToken":
        token = cls()
        channels = [QUEUE_CHANNEL]
        if entry_id is not None:
            channels.append(driver_channel(entry_id))
        token[CLIENT_CLAIM]   = client_id
        token[CHANNELS_CLAIM] = channels
        return token

    def allows(self, channel: str) -> bool:
        return channel in self.payload.get(CHANNELS_CLAIM, [])
