import structlog
from django.conf import settings
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)


def _first_error(data, prefix: str = '') -> str | None:
    """Pick the first human readable message out of a DRF error structure."""
    if isinstance(data, dict):
        for key, value in data.items():
            label = '' if key in ('non_field_errors', 'detail') else str(key)
            found = _first_error(value, label or prefix)
            if found:
                return found
        return None
    if isinstance(data, (list, tuple)):
        for value in data:
            found = _first_error(value, prefix)
            if found:
                return found
        return None
    if data in (None, ''):
        return None
    return f"{prefix}: {data}" if prefix else str(data)


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        logger.exception('unhandled_api_error', view=type(view).__name__ if view else None, error=str(exc))
        message = str(exc) if settings.DEBUG else 'Internal server error'
        return Response({'message': message}, status=500)
    # normalize response
    if isinstance(exc, ValidationError):
        errors = resp.data if isinstance(resp.data, dict) else {'non_field_errors': resp.data}
        resp.data = {'message': _first_error(errors) or 'Validation failed', 'errors': errors}
        return resp
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data.get('message') or resp.data
    else:
        detail = resp.data
    body = {'message': str(detail)}
    code = getattr(exc, 'default_code', None)
    if code:
        body['code'] = getattr(getattr(exc, 'detail', None), 'code', None) or code
    resp.data = body
    return resp
