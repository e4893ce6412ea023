"""
Folder transition service

This service moves messages and whole threads between folders:
- Moves to an explicit folder (trash, spam, archive, custom, ...)
- Restores out of Trash/Archive (or any source) with origin inference
- Hard deletes

Batch operations are all-or-nothing: inside one transaction the requested rows
are locked, every requested id must resolve to at least one row of the caller,
otherwise the transaction rolls back with PartialNotFoundException and no row changes.
"""
import logging
import uuid
from typing import Dict, Any, List, Union, Tuple

from app_mailbox.config import MAILBOX_DB_ALIAS
from app_mailbox.enums.folder_type_enum import FolderTypeEnum
from app_mailbox.enums.id_kind_enum import IdKindEnum
from app_mailbox.exceptions.message_not_found_exception import MessageNotFoundException
from app_mailbox.exceptions.partial_not_found_exception import PartialNotFoundException
from app_mailbox.exceptions.thread_not_found_exception import ThreadNotFoundException
from app_mailbox.models.folder import Folder
from app_mailbox.pojo.destination_folders import DestinationFolders
from app_mailbox.pojo.folder_ref import FolderRef
from app_mailbox.pojo.message_ref import MessageRef
from app_mailbox.repos import (
    lock_messages,
    update_folder_by_ids,
    update_folder_by_thread,
    update_folder_by_ref,
    delete_by_ids,
)
from app_mailbox.services.atomic_operation import atomic_operation
from app_mailbox.services.folder_service import FolderService
from app_mailbox.services.origin_inference import infer_origin_folder_type
from common.components.singleton import Singleton
from common.pojo.caller_identity import CallerIdentity
from common.utils.date_util import get_now_iso_str

logger = logging.getLogger(__name__)

FolderTarget = Union[FolderTypeEnum, FolderRef]

RESULT_KEYS = {
    IdKindEnum.THREAD: 'resultsByThread',
    IdKindEnum.MESSAGE: 'resultsByMessage',
}

STAT_KEYS = {
    FolderTypeEnum.INBOX: 'toInbox',
    FolderTypeEnum.SENT: 'toSent',
    FolderTypeEnum.DRAFTS: 'toDrafts',
}


def find_missing_ids(kind: IdKindEnum, ids: List, rows: List[Dict[str, Any]]) -> List[str]:
    """
    Requested ids that resolved to no row, in request order
    """
    if kind is IdKindEnum.THREAD:
        found = {row['thread_id'] for row in rows}
        return [str(thread_id) for thread_id in ids if thread_id not in found]

    found_row_ids = {row['id'] for row in rows}
    found_message_ids = {row['message_id'] for row in rows}
    return [
        str(ref) for ref in ids
        if ref.value not in (found_row_ids if ref.is_row_id else found_message_ids)
    ]


def group_rows(kind: IdKindEnum, rows: List[Dict[str, Any]], destinations: Dict[int, Folder] = None) \
        -> Dict[str, Any]:
    """
    Group affected rows by thread id or by message id

    Args:
        kind: How the request addressed the rows
        rows: Locked rows
        destinations: Row id -> folder the row landed in (optional)
    """
    grouped = {}
    for row in rows:
        if kind is IdKindEnum.THREAD:
            grouped.setdefault(str(row['thread_id']), []).append(row['id'])
        else:
            entry = {'id': row['id'], 'thread_id': str(row['thread_id'])}
            if destinations is not None:
                entry['folder'] = destinations[row['id']].display_name
            grouped[row['message_id']] = entry
    return grouped


class TransitionService(Singleton):
    """Folder transition service"""

    def __init__(self, using: str = MAILBOX_DB_ALIAS):
        self.using = using
        self.folder_service = FolderService(using)

    def _resolve_target(self, user_id: uuid.UUID, target: FolderTarget) -> Folder:
        # fixed system targets are a provisioning matter, caller references are a caller matter
        if isinstance(target, FolderTypeEnum):
            return self.folder_service.get_system_folder(user_id, target)
        return self.folder_service.resolve_folder(user_id, target)

    def _lock(self, caller: CallerIdentity, kind: IdKindEnum, ids: List, source_folder_id: int = None) \
            -> List[Dict[str, Any]]:
        if kind is IdKindEnum.THREAD:
            return lock_messages(caller.user_id, thread_ids=ids, source_folder_id=source_folder_id,
                                 using=self.using)
        return lock_messages(caller.user_id, refs=ids, source_folder_id=source_folder_id, using=self.using)

    def _lock_all(self, caller: CallerIdentity, kind: IdKindEnum, ids: List, source_folder_id: int = None) \
            -> List[Dict[str, Any]]:
        rows = self._lock(caller, kind, ids, source_folder_id)
        missing = find_missing_ids(kind, ids, rows)
        if missing:
            logger.warning(f"[TransitionService._lock_all] {len(missing)} of {len(ids)} {kind.value} "
                           f"not found, user_id={caller.user_id}")
            raise PartialNotFoundException(missing, id_key=kind.value)
        return rows

    def _restore_rows(
            self,
            caller: CallerIdentity,
            rows: List[Dict[str, Any]],
            source: Folder,
            destinations: DestinationFolders
    ) -> Tuple[int, Dict[str, int], Dict[int, Folder]]:
        """
        Move locked rows out of source, each to its inferred origin folder

        One UPDATE is issued per destination folder.

        Returns:
            (rows restored, restoration stats, row id -> destination folder)
        """
        by_folder: Dict[int, Tuple[Folder, List[int]]] = {}
        row_destinations = {}
        stats = {key: 0 for key in STAT_KEYS.values()}

        for row in rows:
            origin = infer_origin_folder_type(row['message_type'], row['from_email'], caller.email)
            folder = destinations.for_type(origin)
            by_folder.setdefault(folder.folder_id, (folder, []))[1].append(row['id'])
            row_destinations[row['id']] = folder
            stats[STAT_KEYS[folder.folder_type]] += 1

        restored = 0
        for folder, row_ids in by_folder.values():
            restored += update_folder_by_ids(
                caller.user_id,
                row_ids,
                folder,
                source_folder_id=source.folder_id,
                using=self.using
            )
        return restored, stats, row_destinations

    def move_message(self, caller: CallerIdentity, message_ref: MessageRef, target: FolderTarget) \
            -> Dict[str, Any]:
        """
        Move one message, only folder and folder_id change

        Raises:
            MessageNotFoundException: if the message does not belong to the caller
        """
        with atomic_operation("move email", self.using):
            folder = self._resolve_target(caller.user_id, target)
            updated = update_folder_by_ref(caller.user_id, message_ref, folder, using=self.using)
            if updated == 0:
                logger.warning(f"[TransitionService.move_message] Message not found: {message_ref}, "
                               f"user_id={caller.user_id}")
                raise MessageNotFoundException(message_ref)

        logger.info(f"[TransitionService.move_message] {message_ref} -> {folder.display_name}, "
                    f"user_id={caller.user_id}")
        return {
            'message_id': str(message_ref),
            'folder': folder.display_name,
            'folder_id': folder.folder_id,
            'updated': updated,
        }

    def move_thread(self, caller: CallerIdentity, thread_id: uuid.UUID, target: FolderTarget) -> Dict[str, Any]:
        """
        Move every message of a thread

        Raises:
            ThreadNotFoundException: if no message of the thread belongs to the caller
        """
        with atomic_operation("move thread", self.using):
            folder = self._resolve_target(caller.user_id, target)
            updated = update_folder_by_thread(caller.user_id, thread_id, folder, using=self.using)
            if updated == 0:
                logger.warning(f"[TransitionService.move_thread] Thread not found: {thread_id}, "
                               f"user_id={caller.user_id}")
                raise ThreadNotFoundException(thread_id)

        logger.info(f"[TransitionService.move_thread] {thread_id} -> {folder.display_name}, "
                    f"updated={updated}, user_id={caller.user_id}")
        return {
            'thread_id': str(thread_id),
            'folder': folder.display_name,
            'folder_id': folder.folder_id,
            'updated': updated,
        }

    def move_batch(self, caller: CallerIdentity, kind: IdKindEnum, ids: List, target: FolderTarget) \
            -> Dict[str, Any]:
        """
        Move several threads or messages, all or nothing

        Raises:
            FolderNotFoundException: if the target does not resolve
            PartialNotFoundException: if any id does not resolve, nothing is moved
        """
        with atomic_operation("move items", self.using):
            folder = self._resolve_target(caller.user_id, target)
            rows = self._lock_all(caller, kind, ids)
            updated = update_folder_by_ids(caller.user_id, [row['id'] for row in rows], folder, using=self.using)

        logger.info(f"[TransitionService.move_batch] {len(ids)} {kind.value} -> {folder.display_name}, "
                    f"updated={updated}, user_id={caller.user_id}")
        return {
            'updated': updated,
            'folder': folder.display_name,
            'folder_id': folder.folder_id,
            RESULT_KEYS[kind]: group_rows(kind, rows),
            'timestamp': get_now_iso_str(),
        }

    def restore_message(self, caller: CallerIdentity, message_ref: MessageRef, source: FolderTarget) \
            -> Dict[str, Any]:
        """
        Restore one message out of source to its inferred origin

        Raises:
            MessageNotFoundException: if the message is not in source
            DestinationFoldersMissingException: if Inbox or Sent is missing
        """
        with atomic_operation("restore email", self.using):
            source_folder = self._resolve_target(caller.user_id, source)
            destinations = self.folder_service.get_destination_folders(caller.user_id)
            rows = self._lock(caller, IdKindEnum.MESSAGE, [message_ref], source_folder.folder_id)
            if not rows:
                logger.warning(f"[TransitionService.restore_message] {message_ref} not in "
                               f"{source_folder.display_name}, user_id={caller.user_id}")
                raise MessageNotFoundException(message_ref, f"Email not found in {source_folder.display_name}")
            restored, stats, row_destinations = self._restore_rows(caller, rows, source_folder, destinations)

        folder = row_destinations[rows[0]['id']]
        logger.info(f"[TransitionService.restore_message] {message_ref} {source_folder.display_name} -> "
                    f"{folder.display_name}, user_id={caller.user_id}")
        return {
            'message_id': str(message_ref),
            'restored': restored,
            'restoredFrom': source_folder.display_name,
            'restoredTo': folder.display_name,
            'folder_id': folder.folder_id,
        }

    def restore_thread(self, caller: CallerIdentity, thread_id: uuid.UUID, source: FolderTarget) -> Dict[str, Any]:
        """
        Restore the messages of a thread that are in source, each to its inferred origin

        Messages of the thread outside source are not touched.

        Raises:
            ThreadNotFoundException: if no message of the thread is in source
            DestinationFoldersMissingException: if Inbox or Sent is missing
        """
        with atomic_operation("restore thread", self.using):
            source_folder = self._resolve_target(caller.user_id, source)
            destinations = self.folder_service.get_destination_folders(caller.user_id)
            rows = self._lock(caller, IdKindEnum.THREAD, [thread_id], source_folder.folder_id)
            if not rows:
                logger.warning(f"[TransitionService.restore_thread] {thread_id} not in "
                               f"{source_folder.display_name}, user_id={caller.user_id}")
                raise ThreadNotFoundException(thread_id, f"Thread not found in {source_folder.display_name}")
            restored, stats, _ = self._restore_rows(caller, rows, source_folder, destinations)

        logger.info(f"[TransitionService.restore_thread] {thread_id} from {source_folder.display_name}, "
                    f"restored={restored}, stats={stats}, user_id={caller.user_id}")
        return {
            'thread_id': str(thread_id),
            'restored': restored,
            'restoredFrom': source_folder.display_name,
            'restorationStats': stats,
        }

    def restore_batch(self, caller: CallerIdentity, kind: IdKindEnum, ids: List, source: FolderTarget) \
            -> Dict[str, Any]:
        """
        Restore several threads or messages out of source, all or nothing

        Every id must have at least one row currently in source.

        Raises:
            FolderNotFoundException: if the source does not resolve
            DestinationFoldersMissingException: if Inbox or Sent is missing
            PartialNotFoundException: if any id has no row in source, nothing is restored
        """
        with atomic_operation("restore items", self.using):
            source_folder = self._resolve_target(caller.user_id, source)
            destinations = self.folder_service.get_destination_folders(caller.user_id)
            rows = self._lock_all(caller, kind, ids, source_folder.folder_id)
            restored, stats, row_destinations = self._restore_rows(caller, rows, source_folder, destinations)

        logger.info(f"[TransitionService.restore_batch] {len(ids)} {kind.value} from "
                    f"{source_folder.display_name}, restored={restored}, stats={stats}, user_id={caller.user_id}")
        return {
            'restored': restored,
            'restoredFrom': source_folder.display_name,
            'restorationStats': stats,
            RESULT_KEYS[kind]: group_rows(kind, rows, row_destinations),
            'timestamp': get_now_iso_str(),
        }

    def delete_message(self, caller: CallerIdentity, message_ref: MessageRef) -> Dict[str, Any]:
        """
        Permanently delete one message

        Raises:
            MessageNotFoundException: if the message does not belong to the caller
        """
        with atomic_operation("delete email", self.using):
            rows = self._lock(caller, IdKindEnum.MESSAGE, [message_ref])
            if not rows:
                raise MessageNotFoundException(message_ref, "Email not found or you don't have permission to delete it")
            deleted = delete_by_ids(caller.user_id, [row['id'] for row in rows], using=self.using)

        logger.info(f"[TransitionService.delete_message] Deleted {message_ref}, user_id={caller.user_id}")
        return {'message_id': str(message_ref), 'deleted': deleted}

    def delete_thread(self, caller: CallerIdentity, thread_id: uuid.UUID) -> Dict[str, Any]:
        """
        Permanently delete every message of a thread

        Raises:
            ThreadNotFoundException: if no message of the thread belongs to the caller
        """
        with atomic_operation("delete thread", self.using):
            rows = self._lock(caller, IdKindEnum.THREAD, [thread_id])
            if not rows:
                raise ThreadNotFoundException(thread_id, "Thread not found or you don't have permission to delete it")
            deleted = delete_by_ids(caller.user_id, [row['id'] for row in rows], using=self.using)

        logger.info(f"[TransitionService.delete_thread] Deleted {thread_id}, deleted={deleted}, "
                    f"user_id={caller.user_id}")
        return {'thread_id': str(thread_id), 'deleted': deleted}

    def delete_batch(self, caller: CallerIdentity, kind: IdKindEnum, ids: List) -> Dict[str, Any]:
        """
        Permanently delete several threads or messages, all or nothing

        Raises:
            PartialNotFoundException: if any id does not resolve, nothing is deleted
        """
        with atomic_operation("delete items", self.using):
            rows = self._lock_all(caller, kind, ids)
            deleted = delete_by_ids(caller.user_id, [row['id'] for row in rows], using=self.using)

        logger.info(f"[TransitionService.delete_batch] {len(ids)} {kind.value}, deleted={deleted}, "
                    f"user_id={caller.user_id}")
        return {
            'deleted': deleted,
            RESULT_KEYS[kind]: group_rows(kind, rows),
            'timestamp': get_now_iso_str(),
        }
