"""
Base exception for the mailbox app
"""
from rest_framework import status as http_status

from common.consts.response_const import RET_BUSINESS_ERROR
from common.exceptions.base_exception import CheckedException


class MailboxException(CheckedException):
    """Base exception for mailbox errors, carries the response code and HTTP status"""

    code = RET_BUSINESS_ERROR
    http_status = http_status.HTTP_400_BAD_REQUEST
    # expose details outside DEBUG builds
    public_details = False

    def __init__(self, message: str, details=None):
        super(MailboxException, self).__init__(message)
        self.details = details
