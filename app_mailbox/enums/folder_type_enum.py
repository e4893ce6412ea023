from enum import Enum


class FolderTypeEnum(Enum):
    INBOX = "inbox"
    SENT = "sent"
    DRAFTS = "drafts"
    TRASH = "trash"
    SPAM = "spam"
    ARCHIVE = "archive"
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def is_system(self) -> bool:
        return self is not FolderTypeEnum.CUSTOM

    @classmethod
    def system_types(cls) -> list:
        return [member for member in cls if member.is_system]

    @classmethod
    def of(cls, value: str):
        """
        Case-insensitive lookup, None if value is not a folder type
        """
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @classmethod
    def choices(cls) -> list:
        return [(member.value, member.display_name) for member in cls]


_DISPLAY_NAMES = {
    FolderTypeEnum.INBOX: "Inbox",
    FolderTypeEnum.SENT: "Sent",
    FolderTypeEnum.DRAFTS: "Drafts",
    FolderTypeEnum.TRASH: "Trash",
    FolderTypeEnum.SPAM: "Spam",
    FolderTypeEnum.ARCHIVE: "Archive",
    FolderTypeEnum.CUSTOM: "Custom",
}
