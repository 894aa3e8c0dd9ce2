"""
URL configuration for the MediRoute handoff backend.

The `urlpatterns` list routes URLs to views.  This module includes
the Django admin, the API routes provided by the handoff app and the
root redirect to the browser front end.  OpenAPI documentation is
exposed at ``/swagger/`` and ``/redoc/``.
"""
from django.conf import settings
from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

# API metadata for Swagger/OpenAPI documentation
api_info = openapi.Info(
    title="MediRoute Handoff API",
    default_version='v1',
    description="Ambulance-to-hospital patient handoff and driver notifications.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    # Django admin site (hospital staff triage and contact desk)
    path('admin/', admin.site.urls),
    # Include API routes from the handoff app
    path('', include('handoff.routers')),
    # Swagger and ReDoc
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
    # Static front end entry page
    path('', RedirectView.as_view(url=settings.FRONTEND_INDEX, permanent=False), name='frontend_index'),
]
