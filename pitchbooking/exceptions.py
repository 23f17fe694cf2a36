import logging

from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


def flatten_message(detail):
    """Pick the first human-readable message out of a DRF error detail."""
    if isinstance(detail, dict):
        for key, value in detail.items():
            message = flatten_message(value)
            if key in ("detail", "non_field_errors"):
                return message
            return f"{key}: {message}"
        return ""
    if isinstance(detail, (list, tuple)):
        return flatten_message(detail[0]) if detail else ""
    return str(detail)


def api_exception_handler(exc, context):
    """
    Wraps every API error in {"success": false, "message": ...}.
    Anything DRF does not recognise becomes a logged 500 with the same shape.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(
            "Unhandled error in %s", view.__class__.__name__ if view else "API"
        )
        set_rollback()
        return Response(
            {"success": False, "message": "Internal server error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    payload = {
        "success": False,
        "message": flatten_message(response.data),
    }
    if isinstance(response.data, dict) and "detail" not in response.data:
        payload["errors"] = response.data
    elif isinstance(response.data, list):
        payload["errors"] = response.data

    response.data = payload
    return response


# Non-DRF routing failures still answer in JSON
def json_page_not_found(request, exception=None):
    return JsonResponse(
        {"success": False, "message": "Resource not found"},
        status=status.HTTP_404_NOT_FOUND,
    )


def json_server_error(request):
    return JsonResponse(
        {"success": False, "message": "Internal server error"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
