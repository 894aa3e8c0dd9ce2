import json
from channels.generic.websocket import AsyncWebsocketConsumer

from handoff.services.mailbox import group_name_for


class NotificationConsumer(AsyncWebsocketConsumer):
    """Pushes accept/decline notifications to one driver's open pages."""

    async def connect(self):
        email = self.scope["url_route"]["kwargs"]["email"]
        self.group = group_name_for(email)
        await self.channel_layer.group_add(self.group, self.channel_name)
        await self.accept()
        await self.send(json.dumps({"type": "welcome", "message": "connected"}))

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(self.group, self.channel_name)

    async def notification_created(self, event):
        # event: {"type": "notification.created", "notification": {...}}
        await self.send(json.dumps({"type": "notification", "notification": event["notification"]}))
