"""
Domain Errors
==============
Every failure the matching core can report, expressed as DRF exceptions so
views stay thin: services raise, the exception handler renders.

All of these are deterministic consequences of the request and current
state, so none of them is worth retrying as-is. Database failures are left
alone and surface as 500s.
"""

import math

from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework import exceptions
from rest_framework.views import exception_handler


class InvalidTarget(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _('Cannot swipe on yourself')
    default_code = 'invalid_target'


class TargetNotFound(exceptions.APIException):
    """Swipe target does not resolve to a user (reported as a bad request)."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _('Target user not found')
    default_code = 'not_found'


class NotFound(exceptions.NotFound):
    default_detail = _('Match not found')
    default_code = 'not_found'


class Forbidden(exceptions.PermissionDenied):
    default_detail = _('Unauthorized to view this match')
    default_code = 'forbidden'


class DuplicateAction(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = _('You have already swiped on this user')
    default_code = 'duplicate_action'


class LocationRequired(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _('Location is required for discovery. Please set your location in your profile.')
    default_code = 'location_required'


class InvalidContent(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _('Message content cannot be empty')
    default_code = 'invalid_content'


class QuotaExceeded(exceptions.Throttled):
    """
    Daily swipe cap reached.

    Carries the limit and the reset instant so clients can schedule their
    next attempt instead of polling.
    """
    default_code = 'quota_exceeded'

    def __init__(self, limit, reset_at, now=None):
        self.limit = limit
        self.reset_at = reset_at
        now = now or timezone.now()
        wait = max(0, math.ceil((reset_at - now).total_seconds()))
        detail = f'Daily swipe limit of {limit} reached. Limit resets at midnight UTC.'
        super().__init__(wait=wait, detail=detail, code=self.default_code)
        # Throttled appends "Expected available in N seconds." to the detail
        self.detail = exceptions.ErrorDetail(detail, code=self.default_code)


def api_exception_handler(exc, context):
    """
    Render API errors as {"error": ..., "code": ...} with extra payload.

    Validation errors keep DRF's field mapping under "details".
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        response.data = {
            'error': 'Invalid input',
            'code': 'invalid',
            'details': exc.detail,
        }
        return response

    detail = getattr(exc, 'detail', None)
    codes = exc.get_codes() if isinstance(exc, exceptions.APIException) else None
    data = {
        'error': str(detail) if detail is not None else str(exc),
        'code': codes if isinstance(codes, str) else getattr(exc, 'default_code', 'error'),
    }

    if isinstance(exc, QuotaExceeded):
        data['limit'] = exc.limit
        data['reset_at'] = exc.reset_at.isoformat()
        data['retry_after'] = 'midnight UTC'

    response.data = data
    return response
