"""
Driver notification mailbox.

Notifications are created by the patient lifecycle when a hospital
accepts or declines a patient.  Drivers poll their unread notifications
and acknowledge them one by one; a websocket push is sent as well for
clients connected to ``ws/notifications/<email>/``.

The unread list is not paginated.  That is fine while a driver only
accumulates a handful of unread items but would need a cursor if
notifications were left unacknowledged for long periods.
"""
from __future__ import annotations

import hashlib
import logging
from typing import Optional

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from handoff.models import Notification, Patient
from handoff.services.drivers import normalize_email

logger = logging.getLogger(__name__)


def format_notification(n: Notification) -> dict:
    return {
        'id': n.id,
        'driverEmail': n.driver_email,
        'patientId': n.patient_id,
        'patientName': n.patient_name,
        'hospitalName': n.hospital_name,
        'status': n.status,
        'message': n.message,
        'reason': n.reason,
        'isRead': n.is_read,
        'createdAt': n.created_at.isoformat() if n.created_at else None,
    }


def enqueue(patient: Patient, *, status: str, message: str, hospital_name: str,
            reason: Optional[str] = None) -> Notification:
    """Store a notification for the patient's driver (snapshot of the patient)."""
    return Notification.objects.create(
        driver_email=normalize_email(patient.driver_email),
        patient_id=patient.id,
        patient_name=patient.patient_name,
        hospital_name=hospital_name,
        status=status,
        message=message,
        reason=reason,
    )


def unread_for(driver_email: str):
    email = normalize_email(driver_email)
    return Notification.objects.filter(driver_email=email, is_read=False).order_by('-created_at', '-id')


def mark_read(notification_id) -> int:
    """Flag a notification as read.

    Returns the number of rows changed: 0 when the notification was
    already read or does not exist, neither of which is an error.
    """
    return Notification.objects.filter(pk=notification_id, is_read=False).update(is_read=True)


def group_name_for(driver_email: str) -> str:
    # channel group names are limited to ASCII alphanumerics, '-', '_' and '.'
    digest = hashlib.sha1(normalize_email(driver_email).encode('utf-8')).hexdigest()
    return f"notifications.{digest}"


def publish(notification: Notification) -> None:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    event = {'type': 'notification.created', 'notification': format_notification(notification)}
    try:
        async_to_sync(channel_layer.group_send)(group_name_for(notification.driver_email), event)
    except Exception:
        logger.warning('failed to push notification %s to %s', notification.id,
                       notification.driver_email, exc_info=True)
