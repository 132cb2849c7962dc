import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from ..exceptions import (
    AccessDenied,
    CardNotFound,
    InvalidTransition,
    RepositoryUnavailable,
    SchedulingError,
    Unauthenticated,
)

logger = structlog.get_logger()

STATUS_BY_ERROR = [
    (Unauthenticated, status.HTTP_401_UNAUTHORIZED),
    (AccessDenied, status.HTTP_403_FORBIDDEN),
    (CardNotFound, status.HTTP_404_NOT_FOUND),
    (InvalidTransition, status.HTTP_409_CONFLICT),
    (RepositoryUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def scheduling_exception_handler(exc, context):
    """DRF exception handler that maps scheduling errors onto HTTP statuses."""
    if not isinstance(exc, SchedulingError):
        return exception_handler(exc, context)

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = code
            break

    request = context.get("request")
    logger.warning("scheduling_error",
        path=request.path if request is not None else None,
        error_type=type(exc).__name__,
        error=str(exc),
        status=status_code,
    )
    return Response(
        {"error": str(exc), "type": type(exc).__name__},
        status=status_code,
    )
