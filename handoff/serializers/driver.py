from django.conf import settings
from rest_framework import serializers


class DriverRegisterSerializer(serializers.Serializer):
    driverName = serializers.CharField(source='driver_name', max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=settings.DRIVER_PASSWORD_MIN_LENGTH, max_length=128, write_only=True)
    phone = serializers.CharField(max_length=32)
    licenceNumber = serializers.CharField(source='licence_number', max_length=64)

    def validate_driverName(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('driverName is required')
        return v


class DriverLoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(max_length=128)

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('password is required')
        return v


class DriverLookupSerializer(serializers.Serializer):
    email = serializers.EmailField()
