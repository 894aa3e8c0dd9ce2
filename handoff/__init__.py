"""Handoff application for the MediRoute backend.

This package contains models, serializers, services, views and route
registrations for the ambulance-to-hospital patient handoff: patient
submission and triage, driver registration and login, driver
notifications and the public contact form.
"""
