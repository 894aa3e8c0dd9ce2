"""
URL mappings for the handoff API.

Paths mirror those called by the browser front end (ambulance form,
hospital dashboard, driver pages and contact form).  Trailing slashes
are deliberately omitted.
"""
from django.urls import path, include

from .views import contacts, drivers, health, notifications, patients


urlpatterns = [
    path('metrics', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
    # Patients
    path('api/patient', patients.submit_patient, name='submit_patient'),
    path('api/patients/pending', patients.pending_patients, name='pending_patients'),
    path('api/patients/<int:pk>', patients.patient_detail, name='patient_detail'),
    path('api/patients/<int:pk>/accept', patients.accept_patient, name='accept_patient'),
    path('api/patients/<int:pk>/decline', patients.decline_patient, name='decline_patient'),
    path('api/patients/<int:pk>/sent', patients.mark_patient_sent, name='mark_patient_sent'),
    # Drivers
    path('api/driver/register', drivers.register_driver, name='register_driver'),
    path('api/driver/login', drivers.login_driver, name='login_driver'),
    path('api/driver/current', drivers.current_driver, name='current_driver'),
    # Notifications
    path('api/notifications/<int:pk>/read', notifications.mark_notification_read, name='mark_notification_read'),
    path('api/notifications/<str:email>', notifications.unread_notifications, name='unread_notifications'),
    # Contact form
    path('api/contact', contacts.submit_contact, name='submit_contact'),
    path('api/contacts', contacts.list_contacts, name='list_contacts'),
    path('api/contacts/<int:pk>/status', contacts.update_contact_status, name='update_contact_status'),
]
