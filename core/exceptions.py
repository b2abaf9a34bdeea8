"""
API error formatting

Every error the API returns is a JSON object with an `error` field.
DRF's own errors ({"detail": ...}) are rewritten to that shape here.
"""
from rest_framework.exceptions import NotAuthenticated, ValidationError
from rest_framework.views import exception_handler


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        # Not an API exception: Django's handler500 takes over
        return None

    if isinstance(exc, NotAuthenticated):
        response.data = {'error': 'Access denied'}
    elif isinstance(exc, ValidationError):
        response.data = {'error': 'Validation failed', 'fields': response.data}
    elif isinstance(response.data, dict) and 'detail' in response.data:
        response.data = {'error': str(response.data['detail'])}

    return response
