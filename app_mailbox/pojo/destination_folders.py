from dataclasses import dataclass
from typing import Optional

from app_mailbox.enums.folder_type_enum import FolderTypeEnum
from app_mailbox.models.folder import Folder


@dataclass(frozen=True)
class DestinationFolders:
    """
    Folders a restore can land in, Drafts is optional and falls back to Inbox
    """
    inbox: Folder
    sent: Folder
    drafts: Optional[Folder] = None

    def for_type(self, folder_type: FolderTypeEnum) -> Folder:
        if folder_type is FolderTypeEnum.SENT:
            return self.sent
        if folder_type is FolderTypeEnum.DRAFTS and self.drafts is not None:
            return self.drafts
        return self.inbox
