"""
Patient handoff views.

Ambulance crews submit patients; the hospital dashboard lists the
patients awaiting a decision and accepts, declines or marks them as
handed over.  Business rules live in :mod:`handoff.services.lifecycle`.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, throttle_classes
from rest_framework.response import Response

from handoff.serializers.patient import PatientSubmitSerializer, PatientDeclineSerializer
from handoff.services import lifecycle
from handoff.services.lifecycle import format_patient
from handoff.throttles import PatientWriteRateThrottle


@api_view(['POST'])
@throttle_classes([PatientWriteRateThrottle])
def submit_patient(request):
    """Store a patient sent from the ambulance form.

    The submitting driver is identified by ``driverEmail`` in the body.
    """
    s = PatientSubmitSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = lifecycle.submit(s.validated_data)
    return Response({
        'ok': True,
        'message': 'Patient details saved successfully!',
        'id': patient.id,
        'status': patient.status,
    }, status=201)


@api_view(['GET'])
def pending_patients(request):
    return Response([format_patient(p) for p in lifecycle.get_pending()])


@api_view(['GET'])
def patient_detail(request, pk: int):
    return Response(lifecycle.get_by_id(pk))


@api_view(['POST'])
def accept_patient(request, pk: int):
    return Response(format_patient(lifecycle.accept(pk)))


@api_view(['POST'])
def decline_patient(request, pk: int):
    s = PatientDeclineSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return Response(format_patient(lifecycle.decline(pk, s.validated_data['reason'])))


@api_view(['POST'])
def mark_patient_sent(request, pk: int):
    return Response(format_patient(lifecycle.mark_sent(pk)))
