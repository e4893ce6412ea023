from typing import List

from rest_framework import status as http_status

from app_mailbox.exceptions.mailbox_exception import MailboxException
from common.consts.response_const import RET_PARTIAL_NOT_FOUND


class PartialNotFoundException(MailboxException):
    """Some ids of a batch did not resolve, the whole batch is rejected"""

    code = RET_PARTIAL_NOT_FOUND
    http_status = http_status.HTTP_404_NOT_FOUND
    public_details = True

    def __init__(self, missing_ids: List[str], id_key: str = "ids"):
        super(PartialNotFoundException, self).__init__(
            "Some items not found or unauthorized",
            details={"missing": list(missing_ids), "field": id_key},
        )
        self.missing_ids = list(missing_ids)
