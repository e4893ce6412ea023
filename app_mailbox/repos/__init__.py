"""
Mailbox repositories

This module exports all repository functions for database operations.
"""
from app_mailbox.repos.folder_repo import (
    get_folder_by_type,
    get_folders_by_types,
    get_folder_by_id,
    get_folder_by_name,
    list_folders,
    create_folder,
    rename_folder,
    delete_folder,
)
from app_mailbox.repos.mailbox_message_repo import (
    folder_fields,
    perspective_q,
    message_refs_q,
    lock_messages,
    update_folder_by_ids,
    update_folder_by_thread,
    update_folder_by_ref,
    update_flag,
    delete_by_ids,
    get_message,
    get_thread_id_of_message,
    create_message,
    update_message,
    get_thread_messages,
    list_messages,
    count_by_folder,
    count_threads,
    count_in_folder,
    sync_folder_name,
)

__all__ = [
    # Folder
    'get_folder_by_type',
    'get_folders_by_types',
    'get_folder_by_id',
    'get_folder_by_name',
    'list_folders',
    'create_folder',
    'rename_folder',
    'delete_folder',
    # Mailbox message
    'folder_fields',
    'perspective_q',
    'message_refs_q',
    'lock_messages',
    'update_folder_by_ids',
    'update_folder_by_thread',
    'update_folder_by_ref',
    'update_flag',
    'delete_by_ids',
    'get_message',
    'get_thread_id_of_message',
    'create_message',
    'update_message',
    'get_thread_messages',
    'list_messages',
    'count_by_folder',
    'count_threads',
    'count_in_folder',
    'sync_folder_name',
]
