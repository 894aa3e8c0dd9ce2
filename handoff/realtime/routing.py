from django.urls import path

from handoff.realtime.consumers import NotificationConsumer

websocket_urlpatterns = [
    path("ws/notifications/<str:email>/", NotificationConsumer.as_asgi()),
]
