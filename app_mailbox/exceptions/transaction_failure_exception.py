from rest_framework import status as http_status

from app_mailbox.exceptions.mailbox_exception import MailboxException
from common.consts.response_const import RET_DB_TRANSACTION_FAILED


class TransactionFailureException(MailboxException):
    """Unexpected database error inside a multi-statement operation, already rolled back"""

    code = RET_DB_TRANSACTION_FAILED
    http_status = http_status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, operation: str, cause: Exception):
        super(TransactionFailureException, self).__init__(
            f"Failed to {operation}",
            details={"message": str(cause), "type": type(cause).__name__},
        )
