"""
Folder repository

This module provides database operations for Folder model.
Every query is scoped by the owning user.
"""
import logging
import uuid
from typing import Optional, List, Dict, Iterable

from app_mailbox.config import MAILBOX_DB_ALIAS
from app_mailbox.enums.folder_type_enum import FolderTypeEnum
from app_mailbox.models.folder import Folder
from common.utils.date_util import get_now_timestamp_ms

logger = logging.getLogger(__name__)


def get_folder_by_type(
        user_id: uuid.UUID,
        folder_type: FolderTypeEnum,
        using: str = MAILBOX_DB_ALIAS
) -> Optional[Folder]:
    """
    Get the folder of a given type for a user

    Args:
        user_id: Owner user ID
        folder_type: Folder type
        using: Database alias

    Returns:
        Folder instance or None if not found
    """
    return Folder.objects.using(using).filter(
        user_id=user_id,
        type=folder_type.value
    ).order_by('folder_id').first()


def get_folders_by_types(
        user_id: uuid.UUID,
        folder_types: Iterable[FolderTypeEnum],
        using: str = MAILBOX_DB_ALIAS
) -> Dict[FolderTypeEnum, Folder]:
    """
    Get folders of several types for a user in one query

    Returns:
        Mapping of folder type to Folder, types without a folder are absent
    """
    type_values = [folder_type.value for folder_type in folder_types]
    folders = Folder.objects.using(using).filter(
        user_id=user_id,
        type__in=type_values
    ).order_by('-folder_id')

    # lowest folder_id wins when a type is duplicated
    return {FolderTypeEnum(folder.type): folder for folder in folders}


def get_folder_by_id(
        user_id: uuid.UUID,
        folder_id: int,
        using: str = MAILBOX_DB_ALIAS
) -> Optional[Folder]:
    """
    Get folder by ID, only if owned by the user
    """
    return Folder.objects.using(using).filter(user_id=user_id, folder_id=folder_id).first()


def get_folder_by_name(
        user_id: uuid.UUID,
        name: str,
        using: str = MAILBOX_DB_ALIAS
) -> Optional[Folder]:
    """
    Get folder by name (case-insensitive)
    """
    return Folder.objects.using(using).filter(
        user_id=user_id,
        name__iexact=name
    ).order_by('folder_id').first()


def list_folders(
        user_id: uuid.UUID,
        folder_type: Optional[FolderTypeEnum] = None,
        using: str = MAILBOX_DB_ALIAS
) -> List[Folder]:
    """
    List folders of a user ordered by sort order then name

    Args:
        user_id: Owner user ID
        folder_type: Only folders of this type (optional)
        using: Database alias
    """
    query = Folder.objects.using(using).filter(user_id=user_id)
    if folder_type is not None:
        query = query.filter(type=folder_type.value)
    return list(query.order_by('sort_order', 'name', 'folder_id'))


def create_folder(
        user_id: uuid.UUID,
        name: str,
        folder_type: FolderTypeEnum = FolderTypeEnum.CUSTOM,
        parent_id: Optional[int] = None,
        color: Optional[str] = None,
        icon: Optional[str] = None,
        sort_order: int = 0,
        sync_enabled: bool = True,
        using: str = MAILBOX_DB_ALIAS
) -> Folder:
    """
    Create a new folder

    Returns:
        Created Folder instance
    """
    try:
        now = get_now_timestamp_ms()
        return Folder.objects.using(using).create(
            user_id=user_id,
            name=name,
            type=folder_type.value,
            parent_id=parent_id,
            color=color,
            icon=icon,
            sort_order=sort_order,
            sync_enabled=sync_enabled,
            ct=now,
            ut=now
        )
    except Exception as e:
        logger.exception(f"[create_folder] Error creating folder: {e}")
        raise


def rename_folder(folder: Folder, name: str, using: str = MAILBOX_DB_ALIAS) -> Folder:
    """
    Rename a folder

    Returns:
        The updated instance
    """
    try:
        folder.name = name
        folder.ut = get_now_timestamp_ms()
        folder.save(using=using, update_fields=['name', 'ut'])
        return folder
    except Exception as e:
        logger.exception(f"[rename_folder] Error renaming folder: {e}")
        raise


def delete_folder(user_id: uuid.UUID, folder_id: int, using: str = MAILBOX_DB_ALIAS) -> bool:
    """
    Delete a folder of a user

    Returns:
        True if deleted, False if not found
    """
    deleted, _ = Folder.objects.using(using).filter(user_id=user_id, folder_id=folder_id).delete()
    return deleted > 0
