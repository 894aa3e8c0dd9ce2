"""
Driver registration, login and lookup.

Drivers identify themselves by email.  Login checks the password
against the stored hash and records the login time; no session or token
is issued, the front end keeps the returned driver profile.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, throttle_classes
from rest_framework.response import Response

from handoff.serializers.driver import DriverRegisterSerializer, DriverLoginSerializer, DriverLookupSerializer
from handoff.services import drivers
from handoff.services.drivers import format_driver
from handoff.throttles import LoginRateThrottle


@api_view(['POST'])
@throttle_classes([LoginRateThrottle])
def register_driver(request):
    s = DriverRegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    driver = drivers.register(**s.validated_data)
    return Response({'ok': True, 'message': 'Driver registered successfully!', 'driver': format_driver(driver)}, status=201)


@api_view(['POST'])
@throttle_classes([LoginRateThrottle])
def login_driver(request):
    s = DriverLoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    driver = drivers.login(
        s.validated_data['email'],
        s.validated_data['password'],
        ip=request.META.get('REMOTE_ADDR'),
    )
    return Response({'ok': True, 'message': 'Login successful', 'driver': format_driver(driver)})


@api_view(['POST'])
def current_driver(request):
    """Return the driver profile used to pre-fill the patient form."""
    s = DriverLookupSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return Response(format_driver(drivers.current(s.validated_data['email'])))
