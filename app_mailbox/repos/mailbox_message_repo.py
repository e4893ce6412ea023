"""
Mailbox message repository

This module provides database operations for MailboxMessage model.
Every query is scoped by the owning user. Lock functions must run inside
transaction.atomic on the same database alias.
"""
import logging
import uuid
from typing import Optional, List, Dict, Any, Iterable

from django.db.models import Count, Q

from app_mailbox.config import MAILBOX_DB_ALIAS
from app_mailbox.models.folder import Folder
from app_mailbox.models.mailbox_message import MailboxMessage
from app_mailbox.pojo.message_ref import MessageRef
from common.utils.date_util import get_now_timestamp_ms

logger = logging.getLogger(__name__)

# columns needed to verify ownership and infer restore destinations
LOCKED_ROW_FIELDS = ('id', 'thread_id', 'message_id', 'message_type', 'from_email', 'folder_id')


def folder_fields(folder: Folder) -> Dict[str, Any]:
    """
    Column values placing a message into a folder

    folder and folder_id are always written together through this function.
    """
    return {
        'folder': folder.display_name,
        'folder_id': folder.folder_id,
        'ut': get_now_timestamp_ms(),
    }


def perspective_q(email: str) -> Q:
    """Rows the caller sent or received"""
    return Q(to_email__iexact=email) | Q(from_email__iexact=email)


def message_refs_q(refs: Iterable[MessageRef]) -> Q:
    row_ids = [ref.value for ref in refs if ref.is_row_id]
    message_ids = [ref.value for ref in refs if not ref.is_row_id]
    q = Q(pk__in=[])
    if row_ids:
        q |= Q(id__in=row_ids)
    if message_ids:
        q |= Q(message_id__in=message_ids)
    return q


def _owned(user_id: uuid.UUID, using: str):
    return MailboxMessage.objects.using(using).filter(user_id=user_id)


def lock_messages(
        user_id: uuid.UUID,
        thread_ids: Optional[List[uuid.UUID]] = None,
        refs: Optional[List[MessageRef]] = None,
        source_folder_id: Optional[int] = None,
        extra_q: Optional[Q] = None,
        using: str = MAILBOX_DB_ALIAS
) -> List[Dict[str, Any]]:
    """
    Lock (SELECT ... FOR UPDATE) the rows of a user selected by thread ids or message refs

    Args:
        user_id: Owner user ID
        thread_ids: Select rows of these threads
        refs: Select these messages (used when thread_ids is None)
        source_folder_id: Only rows currently in this folder (optional)
        extra_q: Additional filter (optional)
        using: Database alias

    Returns:
        List of row dicts with LOCKED_ROW_FIELDS, ordered by id
    """
    query = _owned(user_id, using)
    if thread_ids is not None:
        query = query.filter(thread_id__in=thread_ids)
    else:
        query = query.filter(message_refs_q(refs or []))
    if source_folder_id is not None:
        query = query.filter(folder_id=source_folder_id)
    if extra_q is not None:
        query = query.filter(extra_q)

    return list(query.select_for_update().order_by('id').values(*LOCKED_ROW_FIELDS))


def update_folder_by_ids(
        user_id: uuid.UUID,
        row_ids: List[int],
        folder: Folder,
        source_folder_id: Optional[int] = None,
        using: str = MAILBOX_DB_ALIAS
) -> int:
    """
    Move rows into a folder

    Args:
        user_id: Owner user ID
        row_ids: Row IDs to move
        folder: Destination folder
        source_folder_id: Only rows still in this folder (optional)
        using: Database alias

    Returns:
        Number of rows updated
    """
    query = _owned(user_id, using).filter(id__in=row_ids)
    if source_folder_id is not None:
        query = query.filter(folder_id=source_folder_id)
    return query.update(**folder_fields(folder))


def update_folder_by_thread(
        user_id: uuid.UUID,
        thread_id: uuid.UUID,
        folder: Folder,
        using: str = MAILBOX_DB_ALIAS
) -> int:
    """
    Move every row of a thread into a folder

    Returns:
        Number of rows updated
    """
    return _owned(user_id, using).filter(thread_id=thread_id).update(**folder_fields(folder))


def update_folder_by_ref(
        user_id: uuid.UUID,
        ref: MessageRef,
        folder: Folder,
        using: str = MAILBOX_DB_ALIAS
) -> int:
    """
    Move one message into a folder

    Returns:
        Number of rows updated
    """
    return _owned(user_id, using).filter(**ref.as_filter()).update(**folder_fields(folder))


def update_flag(
        user_id: uuid.UUID,
        field: str,
        value: bool,
        q: Q,
        using: str = MAILBOX_DB_ALIAS
) -> List[Dict[str, Any]]:
    """
    Set a boolean flag on the matching rows whose value differs

    Args:
        user_id: Owner user ID
        field: 'is_read' or 'is_starred'
        value: New flag value
        q: Row selection
        using: Database alias

    Returns:
        Rows changed, as dicts with id, thread_id and message_id
    """
    query = _owned(user_id, using).filter(q).exclude(**{field: value})
    changed = list(query.select_for_update().order_by('id').values('id', 'thread_id', 'message_id'))
    if changed:
        _owned(user_id, using).filter(id__in=[row['id'] for row in changed]).update(
            **{field: value, 'ut': get_now_timestamp_ms()}
        )
    return changed


def delete_by_ids(user_id: uuid.UUID, row_ids: List[int], using: str = MAILBOX_DB_ALIAS) -> int:
    """
    Delete rows (hard delete)

    Returns:
        Number of rows deleted
    """
    deleted, _ = _owned(user_id, using).filter(id__in=row_ids).delete()
    return deleted


def get_message(
        user_id: uuid.UUID,
        ref: MessageRef,
        is_draft: Optional[bool] = None,
        for_update: bool = False,
        using: str = MAILBOX_DB_ALIAS
) -> Optional[MailboxMessage]:
    """
    Get one message of a user

    Args:
        user_id: Owner user ID
        ref: Message reference
        is_draft: Filter by draft flag (optional)
        for_update: Lock the row, caller must be inside a transaction
        using: Database alias

    Returns:
        MailboxMessage instance or None if not found
    """
    query = _owned(user_id, using).filter(**ref.as_filter())
    if is_draft is not None:
        query = query.filter(is_draft=is_draft)
    if for_update:
        query = query.select_for_update()
    return query.first()


def get_thread_id_of_message(user_id: uuid.UUID, message_id: str, using: str = MAILBOX_DB_ALIAS) \
        -> Optional[uuid.UUID]:
    return _owned(user_id, using).filter(message_id=message_id).values_list('thread_id', flat=True).first()


def create_message(user_id: uuid.UUID, using: str = MAILBOX_DB_ALIAS, **fields) -> MailboxMessage:
    """
    Create a new message row

    Returns:
        Created MailboxMessage instance
    """
    try:
        now = get_now_timestamp_ms()
        fields.setdefault('ct', now)
        fields.setdefault('ut', now)
        return MailboxMessage.objects.using(using).create(user_id=user_id, **fields)
    except Exception as e:
        logger.exception(f"[create_message] Error creating message: {e}")
        raise


def update_message(message: MailboxMessage, using: str = MAILBOX_DB_ALIAS, **fields) -> MailboxMessage:
    """
    Update fields of a message row

    Returns:
        The updated instance
    """
    try:
        fields['ut'] = get_now_timestamp_ms()
        for key, value in fields.items():
            setattr(message, key, value)
        message.save(using=using, update_fields=list(fields.keys()))
        return message
    except Exception as e:
        logger.exception(f"[update_message] Error updating message: {e}")
        raise


def get_thread_messages(user_id: uuid.UUID, thread_id: uuid.UUID, using: str = MAILBOX_DB_ALIAS) \
        -> List[MailboxMessage]:
    """
    Get the messages of a thread, oldest first
    """
    return list(_owned(user_id, using).filter(thread_id=thread_id).order_by('ct', 'id'))


def list_messages(
        user_id: uuid.UUID,
        offset: int,
        limit: int,
        folder_id: Optional[int] = None,
        is_starred: Optional[bool] = None,
        using: str = MAILBOX_DB_ALIAS
) -> Dict[str, Any]:
    """
    List messages of a user, newest first

    Returns:
        Dictionary with 'messages' and 'total'
    """
    query = _owned(user_id, using)
    if folder_id is not None:
        query = query.filter(folder_id=folder_id)
    if is_starred is not None:
        query = query.filter(is_starred=is_starred)

    total = query.count()
    messages = list(query.order_by('-ct', '-id')[offset:offset + limit])
    return {'messages': messages, 'total': total}


def count_by_folder(user_id: uuid.UUID, using: str = MAILBOX_DB_ALIAS) -> Dict[int, Dict[str, int]]:
    """
    Count messages per folder

    Returns:
        Mapping of folder_id to {total, read, unread, starred}
    """
    rows = _owned(user_id, using).values('folder_id').annotate(
        total=Count('id'),
        read=Count('id', filter=Q(is_read=True)),
        unread=Count('id', filter=Q(is_read=False)),
        starred=Count('id', filter=Q(is_starred=True)),
    ).order_by('folder_id')

    return {
        row['folder_id']: {
            'total': row['total'],
            'read': row['read'],
            'unread': row['unread'],
            'starred': row['starred'],
        }
        for row in rows
    }


def count_threads(user_id: uuid.UUID, using: str = MAILBOX_DB_ALIAS) -> Dict[str, int]:
    """
    Count distinct threads of a user

    Returns:
        {total, starred, unread} where starred/unread count threads with at least one such message
    """
    query = _owned(user_id, using)
    return {
        'total': query.values('thread_id').distinct().count(),
        'starred': query.filter(is_starred=True).values('thread_id').distinct().count(),
        'unread': query.filter(is_read=False).values('thread_id').distinct().count(),
    }


def count_in_folder(user_id: uuid.UUID, folder_id: int, using: str = MAILBOX_DB_ALIAS) -> int:
    return _owned(user_id, using).filter(folder_id=folder_id).count()


def sync_folder_name(user_id: uuid.UUID, folder: Folder, using: str = MAILBOX_DB_ALIAS) -> int:
    """
    Rewrite the folder display name of every message in a folder after a rename

    Returns:
        Number of rows updated
    """
    return _owned(user_id, using).filter(folder_id=folder.folder_id).update(**folder_fields(folder))
