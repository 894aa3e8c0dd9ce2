import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class HandoffError(APIException):
    """Base class for errors raised by the handoff services."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'request failed'
    default_code = 'error'


class NotFoundError(HandoffError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'not found'
    default_code = 'not_found'


class ConflictError(HandoffError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'conflict'
    default_code = 'conflict'


class AuthError(HandoffError):
    # Not a subclass of AuthenticationFailed: DRF would turn that into a 403
    # because the API has no authentication classes.
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'incorrect credentials'
    default_code = 'auth_failed'


class ValidationError(HandoffError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'invalid input'
    default_code = 'invalid'


class StorageError(HandoffError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'storage unavailable'
    default_code = 'storage_error'


def api_exception_handler(exc, context):
    if isinstance(exc, DatabaseError):
        logger.error('database error in %s: %s', _view_name(context), exc)
        exc = StorageError(str(exc))
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('unhandled error in %s', _view_name(context), exc_info=exc)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    if isinstance(exc, HandoffError):
        code = exc.default_code
    elif resp.status_code == status.HTTP_400_BAD_REQUEST:
        code = 'invalid'
    else:
        code = 'api_error'
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    return Response({'ok': False, 'error': {'code': code, 'message': detail}}, status=resp.status_code)


def _view_name(context) -> str:
    view = (context or {}).get('view')
    return type(view).__name__ if view is not None else 'unknown view'
