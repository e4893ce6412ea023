from rest_framework import status as http_status

from app_mailbox.exceptions.mailbox_exception import MailboxException
from common.consts.response_const import RET_CONFIG_ERROR


class DestinationFoldersMissingException(MailboxException):
    """Inbox or Sent is missing, so restore destinations cannot be resolved"""

    code = RET_CONFIG_ERROR
    http_status = http_status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, present: dict):
        super(DestinationFoldersMissingException, self).__init__(
            "Missing required system folders",
            details=present,
        )
