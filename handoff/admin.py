"""
Django admin registrations for the handoff models.

Hospital staff can browse submitted patients, drivers, notifications
and contact messages from ``/admin/``.  Driver passwords are hashes and
are excluded from the form; status changes of patients should go
through the API so that notifications are emitted.
"""

from django.contrib import admin

from .models import AuditEvent, ContactMessage, Driver, Notification, Patient


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient_name', 'status', 'selected_hospital', 'driver_email', 'created_at')
    list_filter = ('status', 'selected_hospital')
    search_fields = ('patient_name', 'driver_email', 'medical_condition')
    readonly_fields = ('status', 'decline_reason', 'created_at', 'updated_at')


@admin.register(Driver)
class DriverAdmin(admin.ModelAdmin):
    list_display = ('email', 'driver_name', 'phone', 'licence_number', 'registered_at', 'last_login')
    search_fields = ('email', 'driver_name', 'licence_number')
    exclude = ('password',)


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('id', 'driver_email', 'patient_name', 'status', 'is_read', 'created_at')
    list_filter = ('status', 'is_read')
    search_fields = ('driver_email', 'patient_name')


@admin.register(ContactMessage)
class ContactMessageAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'email', 'subject', 'status', 'submitted_at')
    list_filter = ('status',)
    search_fields = ('name', 'email', 'subject')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'actor', 'object_type', 'object_id', 'created_at')
    list_filter = ('action',)
    search_fields = ('actor', 'object_id')
