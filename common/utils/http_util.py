import logging
from datetime import datetime, timedelta, timezone

from django.conf import settings
from rest_framework import status as http_status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from common.consts.http_const import RET_CODE_OK, RESP_EXPIRES_SECONDS
from common.consts.response_const import RET_ERR, RET_INVALID_PARAM, RET_UNAUTHORIZED
from common.utils.date_util import get_date_str_of_datetime


logger = logging.getLogger(__name__)


def with_type(data):
    """
    Convert string to int, true to True, false to False

    @param data: data to convert
    @return: converted data
    """
    try:
        if isinstance(data, list):
            return [with_type(item) for item in data]
        if isinstance(data, dict):
            return {key: with_type(value) for key, value in data.items()}

        if data is None:
            return None
        if isinstance(data, (int, bool, float)):
            return data
        if isinstance(data, str):
            if data.isnumeric():
                return int(data)
            if data.lower() == "true":
                return True
            if data.lower() == "false":
                return False
            return data

        raise TypeError(f"Unsupported data type: {type(data)}")
    except Exception as e:
        logger.error(f"Error processing data: {data}, error: {e}")
        raise


def resp_ok(data=None, message="", status=http_status.HTTP_200_OK):
    response = Response({
        "success": True,
        "code": RET_CODE_OK,
        "message": message,
        "data": data,
    }, status=status)
    response["Expires"] = get_date_str_of_datetime(
        (datetime.now(timezone.utc) + timedelta(seconds=RESP_EXPIRES_SECONDS)),
        "%a, %d %b %Y %H:%M:%S %Z")
    return response


def resp_err(message, code=-1, status=http_status.HTTP_400_BAD_REQUEST, details=None, always_details=False):
    """
    Error envelope

    `details` is only exposed in DEBUG builds unless `always_details` is set
    """
    body = {
        "success": False,
        "code": code,
        "error": message,
    }
    if details is not None and (always_details or settings.DEBUG):
        body["details"] = details
    return Response(body, status=status)


def resp_exception(e: Exception, message="Internal server error", code=-1,
                   status=http_status.HTTP_500_INTERNAL_SERVER_ERROR):
    body = {
        "success": False,
        "code": code,
        "error": message,
    }
    if settings.DEBUG:
        body["details"] = repr(e)
    return Response(body, status=status)


def api_exception_handler(exc, context):
    """
    REST framework exception handler answering with the error envelope

    Authentication and parsing errors raised by the framework itself keep their status.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    code = RET_ERR
    if response.status_code in (http_status.HTTP_401_UNAUTHORIZED, http_status.HTTP_403_FORBIDDEN):
        code = RET_UNAUTHORIZED
    elif response.status_code == http_status.HTTP_400_BAD_REQUEST:
        code = RET_INVALID_PARAM

    detail = getattr(exc, "detail", None)
    response.data = {
        "success": False,
        "code": code,
        "error": str(detail) if detail is not None else str(exc),
    }
    return response
