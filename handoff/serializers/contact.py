from rest_framework import serializers

from handoff.models import ContactMessage
from handoff.serializers.patient import clean_text


class ContactSubmitSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    organization = serializers.CharField(max_length=255, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    subject = serializers.CharField(max_length=255)
    message = serializers.CharField(max_length=5000)
    submittedAt = serializers.DateTimeField(source='submitted_at', required=False, allow_null=True)

    def validate_message(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('message is required')
        return v

    def validate_subject(self, v):
        return clean_text(v)


class ContactStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[c for c, _ in ContactMessage.STATUS_CHOICES])
