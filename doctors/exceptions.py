import structlog
from django.db import IntegrityError
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)


class DoctorNotFound(NotFound):
    default_detail = 'doctor not found'
    default_code = 'not_found'


def _field_errors(data, prefix=''):
    """Flatten DRF validation detail into ``[{'field', 'message'}]``."""
    out = []
    if isinstance(data, dict):
        for key, value in data.items():
            name = f'{prefix}.{key}' if prefix else str(key)
            out.extend(_field_errors(value, name))
    elif isinstance(data, list):
        for item in data:
            out.extend(_field_errors(item, prefix))
    else:
        out.append({'field': prefix or 'non_field_errors', 'message': str(data)})
    return out


def _error(code, message, status_code, **extra):
    body = {'ok': False, 'error': {'code': code, 'message': message, **extra}}
    return Response(body, status=status_code)


def api_exception_handler(exc, context):
    if isinstance(exc, IntegrityError):
        logger.warning('integrity_error', error=str(exc))
        return _error('conflict', 'a doctor with this email or crm already exists', status.HTTP_409_CONFLICT)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('unhandled_api_error', view=context.get('view').__class__.__name__)
        return _error('server_error', str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, ValidationError):
        return _error('validation_error', 'invalid request', resp.status_code, fields=_field_errors(resp.data))
    if resp.status_code == status.HTTP_404_NOT_FOUND:
        return _error('not_found', str(resp.data.get('detail', 'not found')), resp.status_code)

    # normalize response
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = str(resp.data)
    error_resp = _error('api_error', detail, resp.status_code)
    for header in ('Retry-After', 'Allow', 'WWW-Authenticate'):
        if resp.has_header(header):
            error_resp[header] = resp[header]
    return error_resp
