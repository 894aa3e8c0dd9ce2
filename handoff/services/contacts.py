import logging

from django.db import DatabaseError
from django.utils import timezone

from handoff.exceptions import NotFoundError, StorageError, ValidationError
from handoff.models import ContactMessage

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('name', 'email', 'subject', 'message')


def format_contact(c: ContactMessage) -> dict:
    return {
        'id': c.id,
        'name': c.name,
        'email': c.email,
        'organization': c.organization,
        'phone': c.phone,
        'subject': c.subject,
        'message': c.message,
        'status': c.status,
        'submittedAt': c.submitted_at.isoformat() if c.submitted_at else None,
    }


def submit(*, name, email, subject, message, organization='', phone='', submitted_at=None) -> ContactMessage:
    values = {'name': name, 'email': email, 'subject': subject, 'message': message}
    if not all(values[k] for k in REQUIRED_FIELDS):
        raise ValidationError('Name, email, subject, and message are required')
    try:
        contact = ContactMessage.objects.create(
            **values,
            organization=organization or '',
            phone=phone or '',
            submitted_at=submitted_at or timezone.now(),
        )
    except DatabaseError as exc:
        raise StorageError('Error submitting contact form') from exc
    logger.info('contact form submitted by %s: %s', email, subject)
    return contact


def list_contacts():
    return ContactMessage.objects.order_by('-submitted_at', '-id')


def update_status(contact_id, status: str) -> ContactMessage:
    if status not in dict(ContactMessage.STATUS_CHOICES):
        raise ValidationError(f'unknown status: {status}')
    contact = ContactMessage.objects.filter(pk=contact_id).first()
    if contact is None:
        raise NotFoundError('Contact message not found')
    contact.status = status
    contact.save(update_fields=['status'])
    return contact
