import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger("sportsreg.core")

GENERIC_ERROR_MESSAGE = "伺服器內部錯誤"


class BusinessRuleViolation(APIException):
    """A well-formed request that breaks a domain rule (duplicate, closed window, ...)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "請求無效"
    default_code = "business_rule"


def first_error_message(detail):
    """
    Walk a DRF error structure depth-first and return the first message.
    """
    if isinstance(detail, dict):
        for value in detail.values():
            message = first_error_message(value)
            if message:
                return message
        return None
    if isinstance(detail, (list, tuple)):
        for value in detail:
            message = first_error_message(value)
            if message:
                return message
        return None
    return str(detail) if detail is not None else None


def _failure_message(context):
    view = context.get("view")
    request = context.get("request")
    messages = getattr(view, "failure_messages", None) or {}
    if request is not None:
        return messages.get(request.method.lower(), GENERIC_ERROR_MESSAGE)
    return GENERIC_ERROR_MESSAGE


def custom_exception_handler(exc, context):
    """
    Wrap DRF + Django exceptions into a consistent response format.

    Success responses (2xx) are not touched.
    Only errors come through here.
    """
    response = drf_exception_handler(exc, context)

    # If DRF handled it, wrap it
    if response is not None:
        if isinstance(exc, ValidationError):
            message = first_error_message(exc.detail) or "請求資料格式錯誤"
        elif isinstance(response.data, dict) and "detail" in response.data:
            message = str(response.data["detail"])
        else:
            message = first_error_message(response.data) or GENERIC_ERROR_MESSAGE

        body = {
            "success": False,
            "statusCode": response.status_code,
            "statusMessage": message,
        }
        if isinstance(exc, ValidationError):
            body["errors"] = response.data
        return Response(body, status=response.status_code, headers=_auth_headers(response))

    # Unhandled exceptions -> 500
    logger.exception("Unhandled API exception", exc_info=exc)

    return Response(
        {
            "success": False,
            "statusCode": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "statusMessage": _failure_message(context),
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _auth_headers(response):
    headers = {}
    for name in ("WWW-Authenticate", "Retry-After"):
        if response.has_header(name):
            headers[name] = response[name]
    return headers
