from rest_framework import status as http_status

from app_mailbox.exceptions.mailbox_exception import MailboxException
from common.consts.response_const import RET_CONFIG_ERROR


class FolderNotConfiguredException(MailboxException):
    """A required system folder is missing for the user (provisioning defect)"""

    code = RET_CONFIG_ERROR
    http_status = http_status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, folder_type: str):
        super(FolderNotConfiguredException, self).__init__(
            f"{folder_type.capitalize()} folder not found",
            details={"folder_type": folder_type, "suggestion": "System folders may not be properly configured"},
        )
        self.folder_type = folder_type
