"""
Counter service

Per-folder and per-thread totals, derived from the message rows on every call.
"""
import logging
import uuid
from typing import Dict, Any

from app_mailbox.config import MAILBOX_DB_ALIAS
from app_mailbox.exceptions.thread_not_found_exception import ThreadNotFoundException
from app_mailbox.repos import list_folders, count_by_folder, count_threads, get_thread_messages
from app_mailbox.services.message_query_service import message_to_dict
from common.components.singleton import Singleton
from common.pojo.caller_identity import CallerIdentity

logger = logging.getLogger(__name__)

EMPTY_COUNTS = {'total': 0, 'read': 0, 'unread': 0, 'starred': 0}


class CounterService(Singleton):
    """Aggregate counter service"""

    def __init__(self, using: str = MAILBOX_DB_ALIAS):
        self.using = using

    def get_counts(self, user_id: uuid.UUID) -> Dict[str, Any]:
        """
        Count messages per folder and threads of a user

        Returns:
            Dictionary with:
            - folders: folder id (as string) -> {name, type, total, read, unread, starred}
            - totals: {total, read, unread, starred} over all messages
            - threads: {total, starred, unread}
        """
        per_folder = count_by_folder(user_id, using=self.using)

        folders = {}
        for folder in list_folders(user_id, using=self.using):
            counts = per_folder.get(folder.folder_id, EMPTY_COUNTS)
            folders[str(folder.folder_id)] = {
                'name': folder.display_name,
                'type': folder.type,
                **counts,
            }

        totals = dict(EMPTY_COUNTS)
        for counts in per_folder.values():
            for key in totals:
                totals[key] += counts[key]

        return {
            'folders': folders,
            'totals': totals,
            'threads': count_threads(user_id, using=self.using),
        }

    def get_thread_summary(self, caller: CallerIdentity, thread_id: uuid.UUID) -> Dict[str, Any]:
        """
        Messages of a thread with the derived thread folder and counts

        The thread folder is the folder of its most recent message.

        Raises:
            ThreadNotFoundException: if the thread has no message of the caller
        """
        messages = get_thread_messages(caller.user_id, thread_id, using=self.using)
        if not messages:
            raise ThreadNotFoundException(thread_id, "Thread not found")

        latest = messages[-1]
        return {
            'thread_id': str(thread_id),
            'folder': latest.folder,
            'folder_id': latest.folder_id,
            'counts': {
                'total': len(messages),
                'read': sum(1 for message in messages if message.is_read),
                'unread': sum(1 for message in messages if not message.is_read),
                'starred': sum(1 for message in messages if message.is_starred),
            },
            'messages': [message_to_dict(message) for message in messages],
        }
