"""
Message query service

Paginated listings of a user's messages.
"""
import logging
from typing import Dict, Any, Optional

from app_mailbox.config import MAILBOX_DB_ALIAS
from app_mailbox.models.mailbox_message import MailboxMessage
from app_mailbox.pojo.folder_ref import FolderRef
from app_mailbox.repos import list_messages
from app_mailbox.services.folder_service import FolderService
from common.components.singleton import Singleton
from common.consts.query_const import LIMIT_PAGE, LIMIT_LIST
from common.pojo.caller_identity import CallerIdentity
from common.utils.page_util import build_page, normalize_limit, next_offset_of

logger = logging.getLogger(__name__)


def message_to_dict(message: MailboxMessage) -> Dict[str, Any]:
    """
    Convert MailboxMessage model instance to dictionary

    Args:
        message: MailboxMessage model instance

    Returns:
        Message dictionary
    """
    return {
        'id': message.id,
        'thread_id': str(message.thread_id),
        'message_id': message.message_id,
        'folder': message.folder,
        'folder_id': message.folder_id,
        'message_type': message.message_type,
        'from_email': message.from_email,
        'to_email': message.to_email,
        'cc': message.cc,
        'bcc': message.bcc,
        'subject': message.subject,
        'body': message.body,
        'plain_text': message.plain_text,
        'in_reply_to': message.in_reply_to,
        'is_read': message.is_read,
        'is_starred': message.is_starred,
        'is_draft': message.is_draft,
        'ct': message.ct,
        'ut': message.ut,
    }


class MessageQueryService(Singleton):
    """Message listing service"""

    def __init__(self, using: str = MAILBOX_DB_ALIAS):
        self.using = using
        self.folder_service = FolderService(using)

    def _page(self, caller: CallerIdentity, offset: int, limit: Optional[int], **filters) -> Dict[str, Any]:
        offset = max(offset or 0, 0)
        limit = normalize_limit(limit, LIMIT_PAGE, LIMIT_LIST)
        result = list_messages(caller.user_id, offset, limit, using=self.using, **filters)
        total_num = result['total']
        return build_page(
            [message_to_dict(message) for message in result['messages']],
            next_offset_of(offset, limit, total_num),
            total_num
        )

    def list_folder_messages(
            self,
            caller: CallerIdentity,
            folder_ref: FolderRef,
            offset: int = 0,
            limit: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        List messages of a folder, newest first

        Returns:
            Dictionary with data, total_num and next_offset

        Raises:
            FolderNotFoundException: if the folder does not resolve
        """
        folder = self.folder_service.resolve_folder(caller.user_id, folder_ref)
        return self._page(caller, offset, limit, folder_id=folder.folder_id)

    def list_starred_messages(self, caller: CallerIdentity, offset: int = 0, limit: Optional[int] = None) \
            -> Dict[str, Any]:
        """
        List starred messages of every folder, newest first
        """
        return self._page(caller, offset, limit, is_starred=True)
