from enum import Enum


class MessageTypeEnum(Enum):
    """Origin tag stored on a message, used to infer where a restore lands"""
    SENT = "sent"
    DRAFT = "draft"
    INBOX = "inbox"


# tags written by older draft-save paths
DRAFT_ALIASES = frozenset({"draft", "drafts"})
