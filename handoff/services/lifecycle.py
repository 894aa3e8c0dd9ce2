"""
Patient lifecycle: submission, hospital decisions and driver notifications.

A patient starts ``pending``.  The hospital may mark it
``sent_to_hospital`` (handed over, still awaiting a decision) and then
accepts (``admitted``) or declines (``declined``) it.  Admitted and
declined are terminal.  Each accept/decline of a patient with a driver
email stores exactly one notification for that driver.

The status update and the notification insert share one transaction
with the patient row locked, so a decision is never recorded without
its notification.  The websocket push runs after commit and may be lost.

Consistency model: notifications keep a copy of the patient and
hospital names taken at decision time; patient detail reads always
join the driver directory live.
"""
from __future__ import annotations

import logging
from typing import Optional, Union

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

from handoff.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from handoff.models import Driver, Notification, Patient
from handoff.services import mailbox
from handoff.services.audit import log_action
from handoff.services.drivers import get_driver, normalize_email

logger = logging.getLogger(__name__)

ACCEPT_MESSAGE = 'Patient admission accepted. Proceed to hospital.'
DECLINE_MESSAGE = 'Patient admission declined.'
UNKNOWN_DRIVER = 'Unknown Driver'
NOT_AVAILABLE = 'N/A'

PATIENT_FIELDS = (
    'patient_name', 'age', 'gender', 'medical_condition', 'blood_pressure', 'heart_rate',
    'oxygen_saturation', 'allergies', 'medical_needs', 'additional_notes', 'selected_hospital',
    'driver_email',
)


def format_patient(p: Patient) -> dict:
    return {
        'id': p.id,
        'patientName': p.patient_name,
        'age': p.age,
        'gender': p.gender,
        'medicalCondition': p.medical_condition,
        'bloodPressure': p.blood_pressure,
        'heartRate': p.heart_rate,
        'oxygenSaturation': p.oxygen_saturation,
        'allergies': p.allergies,
        'medicalNeeds': list(p.medical_needs or []),
        'additionalNotes': p.additional_notes,
        'selectedHospital': p.selected_hospital,
        'driverEmail': p.driver_email,
        'location': {'latitude': p.latitude, 'longitude': p.longitude},
        'status': p.status,
        'declineReason': p.decline_reason,
        'createdAt': p.created_at.isoformat() if p.created_at else None,
        'updatedAt': p.updated_at.isoformat() if p.updated_at else None,
    }


def hospital_name_for(patient: Patient) -> str:
    return (patient.selected_hospital or '').strip() or settings.DEFAULT_HOSPITAL_NAME


def submit(data: dict, driver: Union[Driver, str, None] = None) -> Patient:
    """Store a new patient in the ``pending`` state.

    ``data`` uses model field names; ``location`` may be a mapping with
    ``latitude``/``longitude``.  When a submitting driver (instance or
    email) is given it takes precedence over any ``driver_email`` in
    ``data``.
    """
    fields = {k: data[k] for k in PATIENT_FIELDS if data.get(k) is not None}
    if not str(fields.get('patient_name') or '').strip():
        raise ValidationError('patientName is required')

    if isinstance(driver, Driver):
        fields['driver_email'] = driver.email
    elif driver:
        fields['driver_email'] = driver
    fields['driver_email'] = normalize_email(fields.get('driver_email'))

    location = data.get('location') or {}
    try:
        with transaction.atomic():
            patient = Patient.objects.create(
                **fields,
                latitude=location.get('latitude'),
                longitude=location.get('longitude'),
                status=Patient.STATUS_PENDING,
            )
            log_action(actor=patient.driver_email, action='patient_submit', object_type='patient',
                       object_id=patient.id)
    except DatabaseError as exc:
        logger.error('failed to store patient: %s', exc)
        raise StorageError('Error saving patient') from exc

    logger.info('patient %s submitted (driver=%s)', patient.id, patient.driver_email or '-')
    return patient


def _transition(patient_id, new_status: str, *, allowed_from, reason: Optional[str] = None) -> Patient:
    notification = None
    try:
        with transaction.atomic():
            patient = Patient.objects.select_for_update().filter(pk=patient_id).first()
            if patient is None:
                raise NotFoundError('Patient not found')
            if patient.status not in allowed_from:
                raise ConflictError(f'Patient is already {patient.status}')

            previous = patient.status
            patient.status = new_status
            patient.decline_reason = reason if new_status == Patient.STATUS_DECLINED else None
            patient.updated_at = timezone.now()
            patient.save(update_fields=['status', 'decline_reason', 'updated_at'])

            if patient.driver_email and new_status in Patient.TERMINAL_STATUSES:
                accepted = new_status == Patient.STATUS_ADMITTED
                notification = mailbox.enqueue(
                    patient,
                    status=Notification.STATUS_ACCEPTED if accepted else Notification.STATUS_DECLINED,
                    message=ACCEPT_MESSAGE if accepted else DECLINE_MESSAGE,
                    hospital_name=hospital_name_for(patient),
                    reason=reason,
                )
                transaction.on_commit(lambda: mailbox.publish(notification))

            log_action(actor=patient.driver_email, action=f'patient_{new_status}', object_type='patient',
                       object_id=patient.id, detail={'from': previous, 'reason': reason})
    except DatabaseError as exc:
        logger.error('failed to move patient %s to %s: %s', patient_id, new_status, exc)
        raise StorageError('Error updating patient') from exc

    logger.info('patient %s -> %s (notification=%s)', patient.id, new_status,
                notification.id if notification else None)
    return patient


def accept(patient_id) -> Patient:
    return _transition(patient_id, Patient.STATUS_ADMITTED, allowed_from=Patient.AWAITING_STATUSES)


def decline(patient_id, reason: str) -> Patient:
    reason = (reason or '').strip()
    if not reason:
        raise ValidationError('A decline reason is required')
    return _transition(patient_id, Patient.STATUS_DECLINED, allowed_from=Patient.AWAITING_STATUSES,
                       reason=reason)


def mark_sent(patient_id) -> Patient:
    """Record that the crew has handed the patient over to the hospital."""
    return _transition(patient_id, Patient.STATUS_SENT, allowed_from=(Patient.STATUS_PENDING,))


def get_pending():
    return Patient.objects.filter(status__in=Patient.AWAITING_STATUSES).order_by('-created_at', '-id')


def get_by_id(patient_id) -> dict:
    patient = Patient.objects.filter(pk=patient_id).first()
    if patient is None:
        raise NotFoundError('Patient not found')
    driver = get_driver(patient.driver_email)
    data = format_patient(patient)
    data.update({
        'driverName': driver.driver_name if driver else UNKNOWN_DRIVER,
        'driverPhone': (driver.phone if driver else '') or NOT_AVAILABLE,
        'driverLicense': (driver.licence_number if driver else '') or NOT_AVAILABLE,
    })
    return data
