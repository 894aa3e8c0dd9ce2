import pytest
import requests

from handoff.client import HandoffClient, HandoffClientError
from handoff.local_cache import MemoryStorage, PatientCache


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=''):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError('no json')
        return self._payload


class FakeSession:
    """Records requests and replays queued responses or exceptions."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def close(self):
        self.closed = True


def make_client(*responses, cache=None):
    session = FakeSession(*responses)
    return HandoffClient('http://api.test/', cache=cache, session=session), session


def test_submit_patient_posts_json():
    client, session = make_client(FakeResponse(201, {'ok': True, 'id': 5, 'status': 'pending'}))
    data = client.submit_patient({'patientName': 'Jane Doe'})
    assert data['id'] == 5
    method, url, kwargs = session.calls[0]
    assert (method, url) == ('POST', 'http://api.test/api/patient')
    assert kwargs['json'] == {'patientName': 'Jane Doe'}
    assert kwargs['timeout'] == 5.0


def test_error_envelope_is_raised():
    client, _ = make_client(FakeResponse(409, {'ok': False, 'error': {'code': 'conflict', 'message': 'already admitted'}}))
    with pytest.raises(HandoffClientError) as exc:
        client.accept_patient(3)
    assert exc.value.status_code == 409
    assert exc.value.code == 'conflict'
    assert exc.value.message == 'already admitted'


def test_non_json_error_uses_body_text():
    client, _ = make_client(FakeResponse(502, None, text='Bad Gateway'))
    with pytest.raises(HandoffClientError) as exc:
        client.get_patient(1)
    assert exc.value.status_code == 502
    assert exc.value.code is None
    assert exc.value.message == 'Bad Gateway'


def test_unreachable_without_cache_propagates():
    client, _ = make_client(requests.ConnectionError('refused'))
    with pytest.raises(requests.ConnectionError):
        client.submit_patient({'patientName': 'Jane Doe'})


def test_offline_submission_and_pending_use_local_cache():
    cache = PatientCache(MemoryStorage()).open()
    client, _ = make_client(
        requests.ConnectionError('refused'),
        requests.Timeout('slow'),
        cache=cache,
    )
    data = client.submit_patient({'patientName': 'Jane Doe'})
    assert data['offline'] is True
    assert data['status'] == 'pending'
    assert data['id'].startswith('patient_')

    pending = client.pending_patients()
    assert pending['offline'] is True
    assert [p['id'] for p in pending['patients']] == [data['id']]


def test_pending_online_is_not_offline():
    client, _ = make_client(FakeResponse(200, [{'id': 1, 'status': 'pending'}]))
    assert client.pending_patients() == {'offline': False, 'patients': [{'id': 1, 'status': 'pending'}]}


def test_login_remembers_current_driver():
    cache = PatientCache(MemoryStorage()).open()
    driver = {'driverName': 'John Smith', 'email': 'john.smith@mediroute.com'}
    client, session = make_client(FakeResponse(200, {'ok': True, 'driver': driver}), cache=cache)
    client.login_driver('john.smith@mediroute.com', 'demo1234')
    assert cache.get_current_driver() == driver
    assert session.calls[0][2]['json'] == {'email': 'john.smith@mediroute.com', 'password': 'demo1234'}


def test_decline_and_notification_paths():
    client, session = make_client(
        FakeResponse(200, {'id': 2, 'status': 'declined'}),
        FakeResponse(200, []),
        FakeResponse(200, {'ok': True, 'updated': 1}),
    )
    client.decline_patient(2, 'bed unavailable')
    client.unread_notifications('d+1@x.com')
    client.mark_notification_read(9)
    client.close()

    assert session.calls[0][1] == 'http://api.test/api/patients/2/decline'
    assert session.calls[0][2]['json'] == {'reason': 'bed unavailable'}
    assert session.calls[1][1] == 'http://api.test/api/notifications/d%2B1@x.com'
    assert session.calls[2][:2] == ('POST', 'http://api.test/api/notifications/9/read')
    assert session.closed


def test_offline_submission_keeps_driver_email_from_payload():
    cache = PatientCache(MemoryStorage()).open()
    client, _ = make_client(requests.ConnectionError('refused'), cache=cache)
    data = client.submit_patient({'patientName': 'Jane Doe', 'driverEmail': 'd@x.com'})
    [record] = cache.get_patients()
    assert record['id'] == data['id']
    assert record['driverEmail'] == 'd@x.com'
