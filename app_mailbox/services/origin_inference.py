"""
Origin inference for restores

A restored message goes back to the folder it semantically came from.
The origin is never stored as a pointer, it is derived from the row:

1. message_type is 'sent', or the sender is the caller -> Sent
2. message_type is 'draft' (or 'drafts')               -> Drafts
3. anything else                                        -> Inbox
"""
from typing import Optional

from app_mailbox.enums.folder_type_enum import FolderTypeEnum
from app_mailbox.enums.message_type_enum import MessageTypeEnum, DRAFT_ALIASES


def infer_origin_folder_type(
        message_type: Optional[str],
        from_email: Optional[str],
        caller_email: str
) -> FolderTypeEnum:
    """
    Infer the system folder type a message is restored to

    Args:
        message_type: Origin tag stored on the row (may be None)
        from_email: Sender address stored on the row
        caller_email: Verified email of the caller

    Returns:
        FolderTypeEnum.SENT, FolderTypeEnum.DRAFTS or FolderTypeEnum.INBOX
    """
    tag = (message_type or "").strip().lower()
    sender = (from_email or "").strip().lower()

    if tag == MessageTypeEnum.SENT.value or (sender and sender == (caller_email or "").strip().lower()):
        return FolderTypeEnum.SENT
    if tag in DRAFT_ALIASES:
        return FolderTypeEnum.DRAFTS
    return FolderTypeEnum.INBOX
