"""DRF exception handler rendering POS errors as ``{error, detail}`` bodies."""

import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .exceptions import InvalidRequestError, PosError

logger = logging.getLogger(__name__)


def pos_exception_handler(exc, context):
    """
    Render service errors with their stable kind.

    Serializer validation failures are reported as ``invalid_request`` with
    the per-field messages under ``fields``. Other known DRF errors
    (authentication, permissions) keep the default rendering. Anything DRF
    does not recognise is logged with its traceback and turned into a
    generic 500 so internals never leak.
    """
    if isinstance(exc, PosError):
        body = {'error': exc.kind, 'detail': str(exc.detail)}
        if exc.wallet_amount is not None:
            body['wallet_amount'] = exc.wallet_amount
        return Response(body, status=exc.status_code)

    if isinstance(exc, ValidationError):
        return Response(
            {
                'error': InvalidRequestError.default_code,
                'detail': str(InvalidRequestError.default_detail),
                'fields': exc.detail,
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get('view')
    logger.exception(
        "Unhandled error in %s", view.__class__.__name__ if view else 'unknown view',
        exc_info=exc,
    )
    return Response(
        {'error': 'internal_error', 'detail': 'Internal server error.'},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
