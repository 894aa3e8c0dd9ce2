"""
Database models for the handoff backend.

These models capture the records exchanged between ambulance crews and
the receiving hospital: patients in transport, the drivers who submit
them, the notifications sent back to drivers and inbound contact form
messages.  Cross-record references (``driver_email`` and the patient id
on a notification) are plain values rather than foreign keys so that a
patient or notification survives independently of the driver row.
"""
from __future__ import annotations

from django.db import models
from django.utils import timezone


class Patient(models.Model):
    """A transport record for one person being moved to a hospital."""
    STATUS_PENDING = 'pending'
    STATUS_SENT = 'sent_to_hospital'
    STATUS_ADMITTED = 'admitted'
    STATUS_DECLINED = 'declined'
    STATUS_CHOICES = (
        (STATUS_PENDING, 'pending'),
        (STATUS_SENT, 'sent_to_hospital'),
        (STATUS_ADMITTED, 'admitted'),
        (STATUS_DECLINED, 'declined'),
    )
    # Statuses still waiting for a hospital decision
    AWAITING_STATUSES = (STATUS_PENDING, STATUS_SENT)
    TERMINAL_STATUSES = (STATUS_ADMITTED, STATUS_DECLINED)

    patient_name = models.CharField(max_length=255)
    age = models.PositiveIntegerField(null=True, blank=True)
    gender = models.CharField(max_length=20, blank=True)
    medical_condition = models.CharField(max_length=255, blank=True)
    blood_pressure = models.CharField(max_length=20, blank=True)
    heart_rate = models.PositiveIntegerField(null=True, blank=True)
    oxygen_saturation = models.PositiveIntegerField(null=True, blank=True)
    allergies = models.CharField(max_length=255, blank=True)
    medical_needs = models.JSONField(default=list, blank=True)
    additional_notes = models.TextField(blank=True)
    selected_hospital = models.CharField(max_length=255, blank=True)
    driver_email = models.EmailField(blank=True, db_index=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    decline_reason = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=['status', 'created_at'], name='patient_status_created_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.patient_name} ({self.status})"


class Driver(models.Model):
    """An ambulance operator.

    ``email`` is the natural key used by patients and notifications.  It
    is stored lower-cased so lookups are case-insensitive.  ``password``
    holds a salted hash produced by :func:`django.contrib.auth.hashers.make_password`.
    """
    driver_name = models.CharField(max_length=255)
    email = models.EmailField(unique=True)
    password = models.CharField(max_length=128)
    phone = models.CharField(max_length=32)
    licence_number = models.CharField(max_length=64)
    registered_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    def __str__(self) -> str:
        return f"{self.driver_name} <{self.email}>"


class Notification(models.Model):
    """A one-way message to a driver about a patient's disposition.

    Patient and hospital fields are copied at the moment of the transition
    and are never refreshed afterwards.
    """
    STATUS_ACCEPTED = 'accepted'
    STATUS_DECLINED = 'declined'
    STATUS_CHOICES = ((STATUS_ACCEPTED, 'accepted'), (STATUS_DECLINED, 'declined'))

    driver_email = models.EmailField()
    patient_id = models.BigIntegerField(db_index=True)
    patient_name = models.CharField(max_length=255, blank=True)
    hospital_name = models.CharField(max_length=255, blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES)
    message = models.CharField(max_length=255)
    reason = models.TextField(null=True, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['driver_email', 'is_read', 'created_at'], name='notif_driver_unread_idx'),
        ]

    def __str__(self) -> str:
        return f"notif {self.id} -> {self.driver_email} ({self.status})"


class ContactMessage(models.Model):
    """An inbound inquiry from the public contact form."""
    STATUS_NEW = 'new'
    STATUS_READ = 'read'
    STATUS_REPLIED = 'replied'
    STATUS_CHOICES = ((STATUS_NEW, 'new'), (STATUS_READ, 'read'), (STATUS_REPLIED, 'replied'))

    name = models.CharField(max_length=255)
    email = models.EmailField()
    organization = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    subject = models.CharField(max_length=255)
    message = models.TextField()
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_NEW)
    submitted_at = models.DateTimeField(default=timezone.now)

    def __str__(self) -> str:
        return f"{self.subject} ({self.email})"


class AuditEvent(models.Model):
    actor = models.CharField(max_length=255, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_created_idx'),
        ]

    def __str__(self):
        return f"{self.action}:{self.actor}@{self.created_at:%F %T}"
