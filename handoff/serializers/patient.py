import html

import bleach
from django.conf import settings
from rest_framework import serializers


def clean_text(v):
    """Drop all markup and return plain text; entities are decoded so `&` and `<` survive."""
    stripped = bleach.clean((v or '').strip(), tags=set(), attributes={}, strip=True)
    return html.unescape(stripped).strip()


class StringListField(serializers.ListField):
    """List of strings; a comma separated string is accepted as well."""
    child = serializers.CharField(max_length=255)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = [part.strip() for part in data.split(',') if part.strip()]
        return super().to_internal_value(data)


class LocationSerializer(serializers.Serializer):
    latitude = serializers.FloatField(min_value=-90, max_value=90, required=False, allow_null=True)
    longitude = serializers.FloatField(min_value=-180, max_value=180, required=False, allow_null=True)


class PatientSubmitSerializer(serializers.Serializer):
    patientName = serializers.CharField(source='patient_name', max_length=255)
    age = serializers.IntegerField(min_value=0, max_value=150, required=False, allow_null=True)
    gender = serializers.CharField(max_length=20, required=False, allow_blank=True)
    medicalCondition = serializers.CharField(source='medical_condition', max_length=255, required=False, allow_blank=True)
    bloodPressure = serializers.CharField(source='blood_pressure', max_length=20, required=False, allow_blank=True)
    heartRate = serializers.IntegerField(source='heart_rate', min_value=0, max_value=400, required=False, allow_null=True)
    oxygenSaturation = serializers.IntegerField(source='oxygen_saturation', min_value=0, max_value=100, required=False, allow_null=True)
    allergies = serializers.CharField(max_length=255, required=False, allow_blank=True)
    medicalNeeds = StringListField(source='medical_needs', required=False)
    additionalNotes = serializers.CharField(source='additional_notes', max_length=settings.NOTES_MAX_LENGTH, required=False, allow_blank=True)
    selectedHospital = serializers.CharField(source='selected_hospital', max_length=255, required=False, allow_blank=True)
    driverEmail = serializers.EmailField(source='driver_email', required=False, allow_blank=True)
    location = LocationSerializer(required=False, allow_null=True)

    def validate_patientName(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('patientName is required')
        return v

    def validate_additionalNotes(self, v):
        return clean_text(v)

    def validate_allergies(self, v):
        return clean_text(v)

    def validate_medicalCondition(self, v):
        return clean_text(v)


class PatientDeclineSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=1000)

    def validate_reason(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('A decline reason is required')
        return v
