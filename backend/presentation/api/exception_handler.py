import logging

from django.db import IntegrityError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from domain.shared.exceptions import (
    DomainException,
    EntityNotFoundException,
    PersistenceException,
    ValidationException,
)

logger = logging.getLogger(__name__)

DOMAIN_STATUS = (
    (EntityNotFoundException, status.HTTP_404_NOT_FOUND),
    (ValidationException, status.HTTP_400_BAD_REQUEST),
    (PersistenceException, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def _domain_status(exc: DomainException) -> int:
    for exc_class, code in DOMAIN_STATUS:
        if isinstance(exc, exc_class):
            return code
    return status.HTTP_400_BAD_REQUEST


def custom_exception_handler(exc, context):
    """
    Map domain and integrity errors to API responses, then defer to DRF.
    """
    if isinstance(exc, DomainException):
        code = _domain_status(exc)
        if code >= 500:
            logger.error("%s: %s", exc.code, exc.message)
        return Response(
            {
                'detail': exc.message,
                'error': exc.code,
                'details': exc.details,
            },
            status=code,
        )

    if isinstance(exc, IntegrityError):
        return Response(
            {
                'detail': 'Data integrity violation.',
                'error': 'integrity_error',
            },
            status=status.HTTP_409_CONFLICT,
        )

    return exception_handler(exc, context)
