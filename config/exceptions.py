"""DRF exception handler producing the ``{"error", "code"}`` body."""
import logging

from rest_framework.exceptions import ValidationError
from rest_framework.views import exception_handler

from apps.common.exceptions import RoomyServiceError

logger = logging.getLogger('apps.api')


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        # Unhandled: Django turns it into a 500 via config.views.error_500
        return None

    # Field errors keep DRF's per-field layout
    if isinstance(exc, ValidationError):
        return response

    codes = exc.get_codes() if hasattr(exc, 'get_codes') else None
    detail = response.data.get('detail', '') if isinstance(response.data, dict) else response.data

    if isinstance(exc, RoomyServiceError):
        logger.info('%s: %s', exc.default_code, detail)

    response.data = {
        'error': str(detail),
        'code': codes if isinstance(codes, str) else getattr(exc, 'default_code', 'error'),
    }
    return response
