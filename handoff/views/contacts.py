"""
Public contact form and the admin contact desk.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, throttle_classes
from rest_framework.response import Response

from handoff.serializers.contact import ContactSubmitSerializer, ContactStatusSerializer
from handoff.services import contacts
from handoff.services.contacts import format_contact
from handoff.throttles import PatientWriteRateThrottle


@api_view(['POST'])
@throttle_classes([PatientWriteRateThrottle])
def submit_contact(request):
    s = ContactSubmitSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    contact = contacts.submit(**s.validated_data)
    return Response({'ok': True, 'message': 'Contact form submitted successfully!', 'contact': format_contact(contact)})


@api_view(['GET'])
def list_contacts(request):
    return Response([format_contact(c) for c in contacts.list_contacts()])


@api_view(['PUT'])
def update_contact_status(request, pk: int):
    s = ContactStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return Response(format_contact(contacts.update_status(pk, s.validated_data['status'])))
