"""
Rate limits for the public write endpoints.

``@api_view`` functions cannot carry a ``throttle_scope`` attribute, so
each scope gets its own throttle class bound to the rates configured in
``REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']``.
"""
from rest_framework.throttling import AnonRateThrottle


class LoginRateThrottle(AnonRateThrottle):
    scope = 'login'


class PatientWriteRateThrottle(AnonRateThrottle):
    scope = 'patient_write'
