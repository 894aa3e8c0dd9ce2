import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from handoff.models import Notification
from handoff.services import lifecycle, mailbox


@pytest.mark.django_db
def test_unread_for_newest_first_and_only_unread(patient_data):
    p1 = lifecycle.submit(patient_data)
    p2 = lifecycle.submit({**patient_data, 'patient_name': 'John Roe'})
    p3 = lifecycle.submit({**patient_data, 'driver_email': 'other@x.com'})
    lifecycle.accept(p1.id)
    lifecycle.decline(p2.id, 'no beds')
    lifecycle.accept(p3.id)

    unread = list(mailbox.unread_for('D@x.com'))
    assert [n.patient_id for n in unread] == [p2.id, p1.id]

    mailbox.mark_read(unread[0].id)
    remaining = list(mailbox.unread_for('d@x.com'))
    assert [n.patient_id for n in remaining] == [p1.id]
    assert all(not n.is_read for n in remaining)


@pytest.mark.django_db
def test_mark_read_is_idempotent(patient_data):
    patient = lifecycle.submit(patient_data)
    lifecycle.accept(patient.id)
    n = Notification.objects.get()

    assert mailbox.mark_read(n.id) == 1
    assert mailbox.mark_read(n.id) == 0
    n.refresh_from_db()
    assert n.is_read is True


@pytest.mark.django_db
def test_mark_read_unknown_id_is_noop():
    assert mailbox.mark_read(12345) == 0


def test_group_name_is_channel_safe():
    name = mailbox.group_name_for('Some.Driver+tag@Example.com')
    assert name == mailbox.group_name_for('some.driver+tag@example.com')
    assert len(name) < 100
    assert all(c.isalnum() or c in '._-' for c in name)


def test_publish_reaches_driver_group():
    layer = get_channel_layer()
    channel = async_to_sync(layer.new_channel)()
    async_to_sync(layer.group_add)(mailbox.group_name_for('d@x.com'), channel)

    n = Notification(id=7, driver_email='d@x.com', patient_id=3, patient_name='Jane Doe',
                     hospital_name='St. Mary Hospital', status='accepted',
                     message=lifecycle.ACCEPT_MESSAGE)
    mailbox.publish(n)

    event = async_to_sync(layer.receive)(channel)
    assert event['type'] == 'notification.created'
    assert event['notification']['id'] == 7
    assert event['notification']['patientName'] == 'Jane Doe'
    assert event['notification']['isRead'] is False
