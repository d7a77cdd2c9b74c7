"""DRF exception handler that hides internal failures."""

from typing import Any

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


def internal_error_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """Delegate to DRF, and answer a generic 500 for anything it does not handle."""
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.exception("unhandled_exception", view=type(view).__name__ if view else None)
    return Response(
        {"code": "INTERNAL_ERROR", "message": "Internal server error"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
