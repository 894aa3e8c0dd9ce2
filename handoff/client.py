"""
HTTP client for the handoff API.

Wraps every endpoint used by the ambulance and hospital front ends.
When a :class:`~handoff.local_cache.PatientCache` is supplied and the
backend cannot be reached, patient submission and the pending list
fall back to that cache; such results carry ``offline: True``.  Offline
records are never pushed to the server afterwards.
"""
from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from handoff.local_cache import PatientCache

logger = logging.getLogger(__name__)

UNREACHABLE = (requests.ConnectionError, requests.Timeout)


class HandoffClientError(Exception):
    def __init__(self, status_code: int, message: Any, code: Optional[str] = None):
        super().__init__(f"{status_code} {code or 'error'}: {message}")
        self.status_code = status_code
        self.message = message
        self.code = code


class HandoffClient:
    def __init__(self, base_url: str, *, cache: Optional[PatientCache] = None, timeout: float = 5.0,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.cache = cache
        self.timeout = timeout
        self.session = session or requests.Session()

    def close(self) -> None:
        self.session.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        resp = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        try:
            data = resp.json()
        except ValueError:
            data = None
        if resp.status_code >= 400:
            error = data.get('error') if isinstance(data, dict) else None
            if isinstance(error, dict):
                raise HandoffClientError(resp.status_code, error.get('message'), error.get('code'))
            raise HandoffClientError(resp.status_code, resp.text)
        return data

    # -- patients --------------------------------------------------------

    def submit_patient(self, patient: dict) -> dict:
        try:
            return self._request('POST', '/api/patient', json=patient)
        except UNREACHABLE:
            if self.cache is None:
                raise
            logger.warning('backend unreachable, storing patient in local cache')
            return {'ok': True, 'offline': True, 'id': self.cache.add_patient(patient), 'status': 'pending'}

    def pending_patients(self) -> dict:
        try:
            return {'offline': False, 'patients': self._request('GET', '/api/patients/pending')}
        except UNREACHABLE:
            if self.cache is None:
                raise
            logger.warning('backend unreachable, listing pending patients from local cache')
            return {'offline': True, 'patients': self.cache.get_pending_patients()}

    def get_patient(self, patient_id: int) -> dict:
        return self._request('GET', f'/api/patients/{patient_id}')

    def accept_patient(self, patient_id: int) -> dict:
        return self._request('POST', f'/api/patients/{patient_id}/accept')

    def decline_patient(self, patient_id: int, reason: str) -> dict:
        return self._request('POST', f'/api/patients/{patient_id}/decline', json={'reason': reason})

    def mark_patient_sent(self, patient_id: int) -> dict:
        return self._request('POST', f'/api/patients/{patient_id}/sent')

    # -- drivers ---------------------------------------------------------

    def register_driver(self, *, driver_name: str, email: str, password: str, phone: str,
                        licence_number: str) -> dict:
        return self._request('POST', '/api/driver/register', json={
            'driverName': driver_name,
            'email': email,
            'password': password,
            'phone': phone,
            'licenceNumber': licence_number,
        })

    def login_driver(self, email: str, password: str) -> dict:
        data = self._request('POST', '/api/driver/login', json={'email': email, 'password': password})
        if self.cache is not None:
            # offline submissions are attributed to the last logged-in driver
            self.cache.set_current_driver(data['driver'])
        return data

    def current_driver(self, email: str) -> dict:
        return self._request('POST', '/api/driver/current', json={'email': email})

    # -- notifications ---------------------------------------------------

    def unread_notifications(self, email: str) -> list:
        return self._request('GET', f"/api/notifications/{quote(email, safe='@')}")

    def mark_notification_read(self, notification_id: int) -> dict:
        return self._request('POST', f'/api/notifications/{notification_id}/read')

    # -- contact ---------------------------------------------------------

    def submit_contact(self, **fields) -> dict:
        return self._request('POST', '/api/contact', json=fields)
