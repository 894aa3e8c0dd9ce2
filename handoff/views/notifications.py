from rest_framework.decorators import api_view
from rest_framework.response import Response

from handoff.services import mailbox
from handoff.services.mailbox import format_notification


@api_view(['GET'])
def unread_notifications(request, email: str):
    return Response([format_notification(n) for n in mailbox.unread_for(email)])


@api_view(['POST'])
def mark_notification_read(request, pk: int):
    updated = mailbox.mark_read(pk)
    return Response({'ok': True, 'message': 'Notification marked as read', 'updated': updated})
