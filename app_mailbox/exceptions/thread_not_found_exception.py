from rest_framework import status as http_status

from app_mailbox.exceptions.mailbox_exception import MailboxException
from common.consts.response_const import RET_RESOURCE_NOT_FOUND


class ThreadNotFoundException(MailboxException):
    code = RET_RESOURCE_NOT_FOUND
    http_status = http_status.HTTP_404_NOT_FOUND

    def __init__(self, thread_id, message: str = None):
        super(ThreadNotFoundException, self).__init__(
            message or "Thread not found or you don't have permission to modify it",
            details={"thread_id": str(thread_id)},
        )
