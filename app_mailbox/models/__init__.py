from app_mailbox.models.folder import Folder
from app_mailbox.models.mailbox_message import MailboxMessage

__all__ = [
    'Folder',
    'MailboxMessage',
]
