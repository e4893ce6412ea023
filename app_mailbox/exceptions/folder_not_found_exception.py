from rest_framework import status as http_status

from app_mailbox.exceptions.mailbox_exception import MailboxException
from common.consts.response_const import RET_RESOURCE_NOT_FOUND


class FolderNotFoundException(MailboxException):
    """Caller referenced a folder that does not exist under their ownership"""

    code = RET_RESOURCE_NOT_FOUND
    http_status = http_status.HTTP_404_NOT_FOUND

    def __init__(self, folder_ref):
        super(FolderNotFoundException, self).__init__(
            f"Folder '{folder_ref}' not found",
            details={"suggestion": "Check the folder name or create it first"},
        )
