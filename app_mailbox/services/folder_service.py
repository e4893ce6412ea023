"""
Folder service

This service handles the folder directory of a user:
- Resolving system folders and caller folder references
- Resolving restore destinations
- Listing, creating, renaming and deleting custom folders
- Provisioning the system folders of a new account
"""
import logging
import re
import uuid
from typing import Dict, Any, List, Optional

from app_mailbox.config import MAILBOX_DB_ALIAS
from app_mailbox.enums.folder_type_enum import FolderTypeEnum
from app_mailbox.exceptions.destination_folders_missing_exception import DestinationFoldersMissingException
from app_mailbox.exceptions.folder_not_configured_exception import FolderNotConfiguredException
from app_mailbox.exceptions.folder_not_found_exception import FolderNotFoundException
from app_mailbox.exceptions.validation_exception import ValidationException
from app_mailbox.models.folder import Folder
from app_mailbox.pojo.destination_folders import DestinationFolders
from app_mailbox.pojo.folder_ref import FolderRef, FolderRefKind
from app_mailbox.repos import (
    get_folder_by_type,
    get_folders_by_types,
    get_folder_by_id,
    get_folder_by_name,
    list_folders,
    create_folder,
    rename_folder,
    delete_folder,
    count_in_folder,
    sync_folder_name,
)
from app_mailbox.services.atomic_operation import atomic_operation
from common.components.singleton import Singleton

logger = logging.getLogger(__name__)

COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")
MAX_FOLDER_NAME_LENGTH = 255


def folder_to_dict(folder: Folder) -> Dict[str, Any]:
    """
    Convert Folder model instance to dictionary

    Args:
        folder: Folder model instance

    Returns:
        Folder dictionary
    """
    return {
        'folder_id': folder.folder_id,
        'name': folder.display_name,
        'type': folder.type,
        'parent_id': folder.parent_id,
        'color': folder.color,
        'icon': folder.icon,
        'sort_order': folder.sort_order,
        'sync_enabled': folder.sync_enabled,
        'ct': folder.ct,
        'ut': folder.ut,
    }


class FolderService(Singleton):
    """Folder directory service"""

    def __init__(self, using: str = MAILBOX_DB_ALIAS):
        self.using = using

    def get_system_folder(self, user_id: uuid.UUID, folder_type: FolderTypeEnum) -> Folder:
        """
        Get a system folder of the user

        Raises:
            FolderNotConfiguredException: if the folder was never provisioned
        """
        folder = get_folder_by_type(user_id, folder_type, using=self.using)
        if folder is None:
            logger.error(f"[FolderService.get_system_folder] Missing {folder_type.value} folder, user_id={user_id}")
            raise FolderNotConfiguredException(folder_type.value)
        return folder

    def resolve_folder(self, user_id: uuid.UUID, folder_ref: FolderRef) -> Folder:
        """
        Resolve a caller supplied folder reference

        Raises:
            FolderNotFoundException: if the reference does not resolve under the user's ownership
        """
        if folder_ref.kind is FolderRefKind.BY_ID:
            folder = get_folder_by_id(user_id, folder_ref.value, using=self.using)
        elif folder_ref.kind is FolderRefKind.BY_SYSTEM_TYPE:
            folder = get_folder_by_type(user_id, folder_ref.value, using=self.using)
        else:
            folder = get_folder_by_name(user_id, folder_ref.value, using=self.using)

        if folder is None:
            logger.warning(f"[FolderService.resolve_folder] Folder not found: {folder_ref}, user_id={user_id}")
            raise FolderNotFoundException(folder_ref)
        return folder

    def get_destination_folders(self, user_id: uuid.UUID) -> DestinationFolders:
        """
        Resolve the folders a restore can land in

        Raises:
            DestinationFoldersMissingException: if Inbox or Sent is missing
        """
        folders = get_folders_by_types(
            user_id,
            [FolderTypeEnum.INBOX, FolderTypeEnum.SENT, FolderTypeEnum.DRAFTS],
            using=self.using
        )
        inbox = folders.get(FolderTypeEnum.INBOX)
        sent = folders.get(FolderTypeEnum.SENT)
        if inbox is None or sent is None:
            present = {folder_type.value: folder_type in folders
                       for folder_type in (FolderTypeEnum.INBOX, FolderTypeEnum.SENT, FolderTypeEnum.DRAFTS)}
            logger.error(f"[FolderService.get_destination_folders] Missing system folders: {present}, "
                         f"user_id={user_id}")
            raise DestinationFoldersMissingException(present)

        return DestinationFolders(inbox=inbox, sent=sent, drafts=folders.get(FolderTypeEnum.DRAFTS))

    def list_folders(self, user_id: uuid.UUID, folder_type: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        List folders of a user

        Args:
            user_id: Owner user ID
            folder_type: Only folders of this type (optional)

        Raises:
            ValidationException: if folder_type is not a folder type
        """
        type_filter = None
        if folder_type:
            type_filter = FolderTypeEnum.of(folder_type)
            if type_filter is None:
                raise ValidationException(
                    "Invalid folder type",
                    details={"valid_types": [member.value for member in FolderTypeEnum]},
                )

        return [folder_to_dict(folder) for folder in list_folders(user_id, type_filter, using=self.using)]

    def _validate_name(self, user_id: uuid.UUID, name, exclude_folder_id: Optional[int] = None) -> str:
        if not isinstance(name, str) or not name.strip():
            raise ValidationException("Folder name is required")
        name = name.strip()
        if len(name) > MAX_FOLDER_NAME_LENGTH:
            raise ValidationException(f"Folder name cannot be longer than {MAX_FOLDER_NAME_LENGTH} characters")
        if name.isdigit():
            raise ValidationException("Folder name cannot be a number")
        if FolderTypeEnum.of(name) is not None:
            raise ValidationException(f"'{name}' is a reserved folder name")

        existing = get_folder_by_name(user_id, name, using=self.using)
        if existing is not None and existing.folder_id != exclude_folder_id:
            raise ValidationException(
                "Folder name already exists for this user",
                details={"suggestion": "Choose a different folder name"},
            )
        return name

    def create_custom_folder(
            self,
            user_id: uuid.UUID,
            name,
            parent_id: Optional[int] = None,
            color: Optional[str] = None,
            icon: Optional[str] = None,
            sort_order: int = 0,
            sync_enabled: bool = True,
    ) -> Dict[str, Any]:
        """
        Create a custom folder

        Raises:
            ValidationException: if name, color or parent is invalid
            FolderNotFoundException: if parent_id does not belong to the user
        """
        name = self._validate_name(user_id, name)

        if color is not None and (not isinstance(color, str) or not COLOR_PATTERN.match(color)):
            raise ValidationException("Invalid color format. Use hex format (#RRGGBB)")
        if not isinstance(sort_order, int) or isinstance(sort_order, bool):
            raise ValidationException("'sort_order' must be an integer")
        if not isinstance(sync_enabled, bool):
            raise ValidationException("'sync_enabled' must be true or false")

        if parent_id is not None:
            if isinstance(parent_id, bool) or not str(parent_id).isdigit():
                raise ValidationException("'parent_id' must be a folder id")
            parent = get_folder_by_id(user_id, int(parent_id), using=self.using)
            if parent is None:
                raise FolderNotFoundException(parent_id)
            parent_id = parent.folder_id

        folder = create_folder(
            user_id=user_id,
            name=name,
            folder_type=FolderTypeEnum.CUSTOM,
            parent_id=parent_id,
            color=color,
            icon=icon,
            sort_order=sort_order,
            sync_enabled=sync_enabled,
            using=self.using
        )
        logger.info(f"[FolderService.create_custom_folder] Created folder {folder.folder_id}, user_id={user_id}")
        return folder_to_dict(folder)

    def _get_custom_folder(self, user_id: uuid.UUID, folder_id: int, action: str) -> Folder:
        folder = get_folder_by_id(user_id, folder_id, using=self.using)
        if folder is None:
            raise FolderNotFoundException(folder_id)
        if folder.folder_type is not FolderTypeEnum.CUSTOM:
            raise ValidationException(f"Only custom folders can be {action}")
        return folder

    def rename_custom_folder(self, user_id: uuid.UUID, folder_id: int, name) -> Dict[str, Any]:
        """
        Rename a custom folder, messages inside get the new display name in the same transaction

        Raises:
            FolderNotFoundException: if the folder does not belong to the user
            ValidationException: if the folder is a system folder or the name is invalid
        """
        with atomic_operation("rename folder", self.using):
            folder = self._get_custom_folder(user_id, folder_id, "renamed")
            name = self._validate_name(user_id, name, exclude_folder_id=folder.folder_id)
            folder = rename_folder(folder, name, using=self.using)
            synced = sync_folder_name(user_id, folder, using=self.using)

        logger.info(f"[FolderService.rename_custom_folder] Renamed folder {folder_id}, "
                    f"messages synced={synced}, user_id={user_id}")
        return folder_to_dict(folder)

    def delete_custom_folder(self, user_id: uuid.UUID, folder_id: int) -> Dict[str, Any]:
        """
        Delete an empty custom folder

        Raises:
            FolderNotFoundException: if the folder does not belong to the user
            ValidationException: if the folder is a system folder or still holds messages
        """
        with atomic_operation("delete folder", self.using):
            folder = self._get_custom_folder(user_id, folder_id, "deleted")
            message_count = count_in_folder(user_id, folder.folder_id, using=self.using)
            if message_count > 0:
                raise ValidationException(
                    "Folder is not empty",
                    details={"message_count": message_count, "suggestion": "Move its messages out first"},
                )
            delete_folder(user_id, folder.folder_id, using=self.using)

        logger.info(f"[FolderService.delete_custom_folder] Deleted folder {folder_id}, user_id={user_id}")
        return {'folder_id': folder_id, 'deleted': True}

    def provision_system_folders(self, user_id: uuid.UUID) -> Dict[str, Any]:
        """
        Create the missing system folders of a user, safe to call repeatedly

        Returns:
            Dictionary with 'created' and 'existing' folder types and the folder list
        """
        with atomic_operation("provision system folders", self.using):
            existing = get_folders_by_types(user_id, FolderTypeEnum.system_types(), using=self.using)
            created = []
            for order, folder_type in enumerate(FolderTypeEnum.system_types()):
                if folder_type in existing:
                    continue
                create_folder(
                    user_id=user_id,
                    name=folder_type.display_name,
                    folder_type=folder_type,
                    sort_order=order,
                    using=self.using
                )
                created.append(folder_type.value)

        logger.info(f"[FolderService.provision_system_folders] user_id={user_id}, created={created}")
        return {
            'created': created,
            'existing': [folder_type.value for folder_type in existing],
            'folders': self.list_folders(user_id),
        }
