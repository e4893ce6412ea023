from rest_framework import status as http_status

from app_mailbox.exceptions.mailbox_exception import MailboxException
from common.consts.response_const import RET_RESOURCE_NOT_FOUND


class MessageNotFoundException(MailboxException):
    code = RET_RESOURCE_NOT_FOUND
    http_status = http_status.HTTP_404_NOT_FOUND

    def __init__(self, message_ref, message: str = None):
        super(MessageNotFoundException, self).__init__(
            message or "Email not found or you don't have permission to modify it",
            details={"message_id": str(message_ref)},
        )
