from rest_framework import status as http_status

from app_mailbox.exceptions.mailbox_exception import MailboxException
from common.consts.response_const import RET_INVALID_PARAM


class ValidationException(MailboxException):
    """Malformed input, rejected before any query runs"""

    code = RET_INVALID_PARAM
    http_status = http_status.HTTP_400_BAD_REQUEST
