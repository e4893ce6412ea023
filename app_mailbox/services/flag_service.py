"""
Flag service

Read and starred state of messages.
A missing target raises a not found exception, a target already in the requested
state is reported as unchanged (updated = 0) and is not an error.
Read state is scoped to the caller's perspective: rows the caller sent or received.
"""
import logging
import uuid
from typing import Dict, Any, List

from django.db.models import Q

from app_mailbox.config import MAILBOX_DB_ALIAS
from app_mailbox.enums.id_kind_enum import IdKindEnum
from app_mailbox.exceptions.message_not_found_exception import MessageNotFoundException
from app_mailbox.exceptions.partial_not_found_exception import PartialNotFoundException
from app_mailbox.exceptions.thread_not_found_exception import ThreadNotFoundException
from app_mailbox.pojo.message_ref import MessageRef
from app_mailbox.repos import lock_messages, update_flag, get_message, perspective_q
from app_mailbox.services.atomic_operation import atomic_operation
from app_mailbox.services.transition_service import find_missing_ids, group_rows, RESULT_KEYS
from common.components.singleton import Singleton
from common.pojo.caller_identity import CallerIdentity

logger = logging.getLogger(__name__)


class FlagService(Singleton):
    """Read / starred flag service"""

    def __init__(self, using: str = MAILBOX_DB_ALIAS):
        self.using = using

    def _lock_threads_in_view(self, caller: CallerIdentity, thread_ids: List[uuid.UUID]) -> List[Dict[str, Any]]:
        return lock_messages(
            caller.user_id,
            thread_ids=thread_ids,
            extra_q=perspective_q(caller.email),
            using=self.using
        )

    def set_thread_read(self, caller: CallerIdentity, thread_id: uuid.UUID, is_read: bool) -> Dict[str, Any]:
        """
        Mark the caller's messages of a thread read or unread

        Raises:
            ThreadNotFoundException: if the thread has no message sent or received by the caller
        """
        with atomic_operation("update read status", self.using):
            rows = self._lock_threads_in_view(caller, [thread_id])
            if not rows:
                logger.warning(f"[FlagService.set_thread_read] Thread not found: {thread_id}, "
                               f"user_id={caller.user_id}")
                raise ThreadNotFoundException(thread_id)
            changed = update_flag(
                caller.user_id,
                'is_read',
                is_read,
                Q(id__in=[row['id'] for row in rows]),
                using=self.using
            )

        logger.info(f"[FlagService.set_thread_read] {thread_id} is_read={is_read}, "
                    f"updated={len(changed)}, user_id={caller.user_id}")
        return {
            'thread_id': str(thread_id),
            'is_read': is_read,
            'updated': len(changed),
            'unchanged': len(changed) == 0,
        }

    def set_threads_read(self, caller: CallerIdentity, thread_ids: List[uuid.UUID], is_read: bool) \
            -> Dict[str, Any]:
        """
        Mark several threads read or unread, all or nothing

        Raises:
            PartialNotFoundException: if any thread has no message sent or received by the caller
        """
        with atomic_operation("update read status", self.using):
            rows = self._lock_threads_in_view(caller, thread_ids)
            missing = find_missing_ids(IdKindEnum.THREAD, thread_ids, rows)
            if missing:
                logger.warning(f"[FlagService.set_threads_read] {len(missing)} threads not found, "
                               f"user_id={caller.user_id}")
                raise PartialNotFoundException(missing, id_key=IdKindEnum.THREAD.value)
            changed = update_flag(
                caller.user_id,
                'is_read',
                is_read,
                Q(id__in=[row['id'] for row in rows]),
                using=self.using
            )

        logger.info(f"[FlagService.set_threads_read] {len(thread_ids)} threads is_read={is_read}, "
                    f"updated={len(changed)}, user_id={caller.user_id}")
        return {
            'is_read': is_read,
            'updated': len(changed),
            'unchanged': len(changed) == 0,
            'resultsByThread': group_rows(IdKindEnum.THREAD, changed),
        }

    def set_message_starred(self, caller: CallerIdentity, message_ref: MessageRef, is_starred: bool) \
            -> Dict[str, Any]:
        """
        Star or unstar one message

        Raises:
            MessageNotFoundException: if the message does not belong to the caller
        """
        with atomic_operation("update starred status", self.using):
            message = get_message(caller.user_id, message_ref, for_update=True, using=self.using)
            if message is None:
                raise MessageNotFoundException(message_ref)
            changed = update_flag(caller.user_id, 'is_starred', is_starred, Q(id=message.id), using=self.using)

        return {
            'message_id': str(message_ref),
            'is_starred': is_starred,
            'updated': len(changed),
            'unchanged': len(changed) == 0,
        }

    def toggle_message_starred(self, caller: CallerIdentity, message_ref: MessageRef) -> Dict[str, Any]:
        """
        Flip the starred state of one message

        Raises:
            MessageNotFoundException: if the message does not belong to the caller
        """
        with atomic_operation("toggle starred status", self.using):
            message = get_message(caller.user_id, message_ref, for_update=True, using=self.using)
            if message is None:
                raise MessageNotFoundException(message_ref)
            is_starred = not message.is_starred
            changed = update_flag(caller.user_id, 'is_starred', is_starred, Q(id=message.id), using=self.using)

        return {
            'message_id': str(message_ref),
            'is_starred': is_starred,
            'updated': len(changed),
        }

    def set_starred_batch(self, caller: CallerIdentity, kind: IdKindEnum, ids: List, is_starred: bool) \
            -> Dict[str, Any]:
        """
        Star or unstar several threads or messages, all or nothing

        Raises:
            PartialNotFoundException: if any id does not resolve, nothing changes
        """
        with atomic_operation("update starred status", self.using):
            if kind is IdKindEnum.THREAD:
                rows = lock_messages(caller.user_id, thread_ids=ids, using=self.using)
            else:
                rows = lock_messages(caller.user_id, refs=ids, using=self.using)
            missing = find_missing_ids(kind, ids, rows)
            if missing:
                logger.warning(f"[FlagService.set_starred_batch] {len(missing)} {kind.value} not found, "
                               f"user_id={caller.user_id}")
                raise PartialNotFoundException(missing, id_key=kind.value)
            changed = update_flag(
                caller.user_id,
                'is_starred',
                is_starred,
                Q(id__in=[row['id'] for row in rows]),
                using=self.using
            )

        logger.info(f"[FlagService.set_starred_batch] {len(ids)} {kind.value} is_starred={is_starred}, "
                    f"updated={len(changed)}, user_id={caller.user_id}")
        return {
            'is_starred': is_starred,
            'updated': len(changed),
            'unchanged': len(changed) == 0,
            RESULT_KEYS[kind]: group_rows(kind, changed),
        }
