"""
Core — Exception Handling

Custom exceptions and DRF exception handler for consistent API
error bodies.

@file core/exceptions.py
"""

import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger('jewelstock')


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class BusinessRuleViolation(APIException):
    """Raised when a business rule is violated at the service layer."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Business rule violation.'
    default_code = 'BUSINESS_RULE_VIOLATION'


class InvalidStateTransition(BusinessRuleViolation):
    """Raised when a state machine transition is not allowed."""
    default_detail = 'Invalid state transition.'
    default_code = 'INVALID_STATE_TRANSITION'


class DuplicateResourceError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'DUPLICATE_RESOURCE'


class ResourceNotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'RESOURCE_NOT_FOUND'


# ---------------------------------------------------------------------------
# Standard exception handler
# ---------------------------------------------------------------------------

def _first_message(value) -> str:
    if isinstance(value, dict):
        for nested in value.values():
            return _first_message(nested)
        return ''
    if isinstance(value, (list, tuple)):
        return _first_message(value[0]) if value else ''
    return str(value)


def _flatten_errors(detail, prefix='') -> list[dict]:
    """Turn a DRF error detail tree into a flat [{field, message}] list."""
    errors = []
    for field, value in detail.items():
        name = f'{prefix}.{field}' if prefix else str(field)
        if isinstance(value, dict):
            errors.extend(_flatten_errors(value, prefix=name))
            continue
        messages = value if isinstance(value, (list, tuple)) else [value]
        for message in messages:
            errors.append({'field': name, 'message': _first_message(message)})
    return errors


def build_error_body(detail, default_message: str) -> dict:
    """
    Render an error detail as:
      { "message": "...", "field": "...", "errors": [{"field", "message"}] }
    ``field`` is present only when exactly one field failed.
    """
    if isinstance(detail, dict):
        detail = dict(detail)
        non_field = detail.pop('detail', None) or detail.pop('non_field_errors', None)
        errors = _flatten_errors(detail)
        body = {'message': _first_message(non_field) if non_field else default_message}
        if errors:
            body['errors'] = errors
            fields = {err['field'] for err in errors}
            if len(fields) == 1:
                body['field'] = errors[0]['field']
                if not non_field:
                    body['message'] = errors[0]['message']
        return body
    if isinstance(detail, (list, tuple)):
        return {'message': _first_message(detail) or default_message}
    return {'message': str(detail)}


def standard_exception_handler(exc, context):
    """
    Wraps every error response in the standard body:
      { "message": "...", "field"?: "...", "errors"?: [...] }
    """
    if isinstance(exc, Http404):
        exc = ResourceNotFoundError()
    elif isinstance(exc, PermissionDenied):
        exc = APIException(detail='Permission denied.', code='PERMISSION_DENIED')
        exc.status_code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, ValidationError):
        detail = exc.message_dict if hasattr(exc, 'message_dict') else {'detail': exc.messages}
        return Response(
            build_error_body(detail, 'Validation failed.'),
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)

    if response is None:
        logger.exception('Unhandled exception in view: %s', exc)
        return Response(
            {'message': 'Internal server error.'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    default_message = 'Validation failed.' if response.status_code == 400 else 'Request failed.'
    response.data = build_error_body(response.data, default_message)
    return response
