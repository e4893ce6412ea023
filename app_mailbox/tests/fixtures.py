"""
测试数据构造工具
"""
import uuid
from typing import Dict, Optional

from app_mailbox.config import MAILBOX_DB_ALIAS
from app_mailbox.enums.folder_type_enum import FolderTypeEnum
from app_mailbox.models.folder import Folder
from app_mailbox.models.mailbox_message import MailboxMessage
from app_mailbox.repos import create_message, create_folder, folder_fields, get_folders_by_types
from app_mailbox.services.folder_service import FolderService
from common.pojo.caller_identity import CallerIdentity

TEST_DATABASES = {'default', MAILBOX_DB_ALIAS}


def new_caller(email: str = None) -> CallerIdentity:
    user_id = uuid.uuid4()
    return CallerIdentity.of(user_id, email or f"user-{user_id.hex[:8]}@example.com")


def provision(user_id: uuid.UUID, skip=()) -> Dict[FolderTypeEnum, Folder]:
    """创建系统文件夹（可跳过部分类型）"""
    for order, folder_type in enumerate(FolderTypeEnum.system_types()):
        if folder_type in skip:
            continue
        create_folder(user_id, folder_type.display_name, folder_type=folder_type, sort_order=order)
    return get_folders_by_types(user_id, FolderTypeEnum.system_types())


def provision_all(user_id: uuid.UUID) -> Dict[FolderTypeEnum, Folder]:
    FolderService().provision_system_folders(user_id)
    return get_folders_by_types(user_id, FolderTypeEnum.system_types())


def add_message(
        user_id: uuid.UUID,
        folder: Folder,
        thread_id: Optional[uuid.UUID] = None,
        message_type: Optional[str] = None,
        from_email: str = "sender@other.org",
        to_email: str = "",
        **fields
) -> MailboxMessage:
    """在指定文件夹中创建一封邮件"""
    return create_message(
        user_id,
        thread_id=thread_id or uuid.uuid4(),
        message_id=fields.pop('message_id', f"<{uuid.uuid4()}@other.org>"),
        message_type=message_type,
        from_email=from_email,
        to_email=to_email,
        subject=fields.pop('subject', "hello"),
        **folder_fields(folder),
        **fields
    )


def reload(message: MailboxMessage) -> MailboxMessage:
    return MailboxMessage.objects.using(MAILBOX_DB_ALIAS).get(id=message.id)


def exists(message: MailboxMessage) -> bool:
    return MailboxMessage.objects.using(MAILBOX_DB_ALIAS).filter(id=message.id).exists()
