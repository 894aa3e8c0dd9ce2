import pytest
from django.db import DatabaseError

from handoff.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from handoff.models import AuditEvent, Notification, Patient
from handoff.services import lifecycle, mailbox

pytestmark = pytest.mark.django_db


def test_submit_creates_pending_patient_with_unique_id(patient_data):
    p1 = lifecycle.submit(patient_data)
    p2 = lifecycle.submit({**patient_data, 'patient_name': 'John Roe'})
    assert p1.status == Patient.STATUS_PENDING
    assert p2.status == Patient.STATUS_PENDING
    assert p1.id != p2.id
    assert p1.decline_reason is None
    assert p1.latitude == pytest.approx(40.71)
    assert p1.medical_needs == ['oxygen', 'cardiac monitor']
    assert AuditEvent.objects.filter(action='patient_submit', object_id=str(p1.id)).exists()


def test_submit_requires_patient_name(patient_data):
    with pytest.raises(ValidationError):
        lifecycle.submit({**patient_data, 'patient_name': '  '})
    assert Patient.objects.count() == 0


def test_submit_driver_context_overrides_payload_email(patient_data, driver):
    patient = lifecycle.submit({**patient_data, 'driver_email': 'other@x.com'}, driver=driver)
    assert patient.driver_email == 'd@x.com'


def test_submit_normalizes_driver_email(patient_data):
    patient = lifecycle.submit({**patient_data, 'driver_email': ' D@X.com '})
    assert patient.driver_email == 'd@x.com'


def test_submit_storage_failure_raises_storage_error(patient_data, monkeypatch):
    def boom(**kwargs):
        raise DatabaseError('disk full')
    monkeypatch.setattr(Patient.objects, 'create', boom)
    with pytest.raises(StorageError):
        lifecycle.submit(patient_data)


def test_decline_scenario(patient_data):
    patient = lifecycle.submit(patient_data)
    assert patient.status == 'pending'

    declined = lifecycle.decline(patient.id, 'bed unavailable')
    assert declined.status == 'declined'
    assert declined.decline_reason == 'bed unavailable'
    assert declined.updated_at is not None

    notes = list(Notification.objects.all())
    assert len(notes) == 1
    n = notes[0]
    assert n.driver_email == 'd@x.com'
    assert n.patient_id == patient.id
    assert n.patient_name == 'Jane Doe'
    assert n.status == 'declined'
    assert n.reason == 'bed unavailable'
    assert n.message == lifecycle.DECLINE_MESSAGE
    assert n.is_read is False


def test_accept_creates_one_notification_with_selected_hospital(patient_data):
    patient = lifecycle.submit(patient_data)
    admitted = lifecycle.accept(patient.id)
    assert admitted.status == 'admitted'
    assert admitted.decline_reason is None

    n = Notification.objects.get(patient_id=patient.id)
    assert n.status == 'accepted'
    assert n.hospital_name == 'St. Mary Hospital'
    assert n.message == lifecycle.ACCEPT_MESSAGE
    assert n.reason is None


def test_accept_without_selected_hospital_uses_default_name(patient_data, settings):
    settings.DEFAULT_HOSPITAL_NAME = 'Central Receiving'
    patient = lifecycle.submit({**patient_data, 'selected_hospital': ''})
    lifecycle.accept(patient.id)
    assert Notification.objects.get().hospital_name == 'Central Receiving'


@pytest.mark.parametrize('action', ['accept', 'decline'])
def test_no_notification_without_driver_email(patient_data, action):
    patient = lifecycle.submit({**patient_data, 'driver_email': ''})
    if action == 'accept':
        lifecycle.accept(patient.id)
    else:
        lifecycle.decline(patient.id, 'no ICU bed')
    assert Notification.objects.count() == 0


def test_transitions_on_missing_patient_raise_not_found():
    with pytest.raises(NotFoundError):
        lifecycle.accept(999)
    with pytest.raises(NotFoundError):
        lifecycle.decline(999, 'full')
    with pytest.raises(NotFoundError):
        lifecycle.mark_sent(999)
    with pytest.raises(NotFoundError):
        lifecycle.get_by_id(999)


def test_decline_requires_reason(patient_data):
    patient = lifecycle.submit(patient_data)
    with pytest.raises(ValidationError):
        lifecycle.decline(patient.id, '   ')
    patient.refresh_from_db()
    assert patient.status == 'pending'
    assert Notification.objects.count() == 0


def test_terminal_states_reject_further_transitions(patient_data):
    patient = lifecycle.submit(patient_data)
    lifecycle.accept(patient.id)
    with pytest.raises(ConflictError):
        lifecycle.decline(patient.id, 'changed our mind')
    with pytest.raises(ConflictError):
        lifecycle.accept(patient.id)
    with pytest.raises(ConflictError):
        lifecycle.mark_sent(patient.id)

    patient.refresh_from_db()
    assert patient.status == 'admitted'
    assert patient.decline_reason is None
    assert Notification.objects.count() == 1


def test_sent_to_hospital_is_still_awaiting_a_decision(patient_data):
    patient = lifecycle.submit(patient_data)
    sent = lifecycle.mark_sent(patient.id)
    assert sent.status == 'sent_to_hospital'
    assert Notification.objects.count() == 0
    assert [p.id for p in lifecycle.get_pending()] == [patient.id]

    with pytest.raises(ConflictError):
        lifecycle.mark_sent(patient.id)

    declined = lifecycle.decline(patient.id, 'diverted')
    assert declined.status == 'declined'
    assert Notification.objects.filter(status='declined').count() == 1


def test_get_pending_newest_first_and_excludes_decided(patient_data):
    first = lifecycle.submit({**patient_data, 'patient_name': 'First'})
    second = lifecycle.submit({**patient_data, 'patient_name': 'Second'})
    third = lifecycle.submit({**patient_data, 'patient_name': 'Third'})
    lifecycle.accept(second.id)
    assert [p.id for p in lifecycle.get_pending()] == [third.id, first.id]


def test_get_by_id_joins_driver_live(patient_data, driver):
    patient = lifecycle.submit(patient_data)
    data = lifecycle.get_by_id(patient.id)
    assert data['driverName'] == 'Dana Driver'
    assert data['driverPhone'] == '555-0100'
    assert data['driverLicense'] == 'DL-42'

    driver.phone = '555-0199'
    driver.save()
    assert lifecycle.get_by_id(patient.id)['driverPhone'] == '555-0199'


def test_get_by_id_unknown_driver_uses_sentinels(patient_data):
    patient = lifecycle.submit({**patient_data, 'driver_email': 'ghost@x.com'})
    data = lifecycle.get_by_id(patient.id)
    assert data['patientName'] == 'Jane Doe'
    assert data['driverName'] == 'Unknown Driver'
    assert data['driverPhone'] == 'N/A'
    assert data['driverLicense'] == 'N/A'


def test_notification_is_a_snapshot(patient_data):
    patient = lifecycle.submit(patient_data)
    lifecycle.accept(patient.id)
    Patient.objects.filter(pk=patient.id).update(patient_name='Jane Q. Doe')
    assert Notification.objects.get().patient_name == 'Jane Doe'


def test_notification_push_runs_after_commit(patient_data, monkeypatch, django_capture_on_commit_callbacks):
    pushed = []
    monkeypatch.setattr(mailbox, 'publish', lambda n: pushed.append(n.id))
    patient = lifecycle.submit(patient_data)
    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        lifecycle.decline(patient.id, 'bed unavailable')
    assert len(callbacks) == 1
    assert pushed == [Notification.objects.get().id]
